import sys

from duckclicker.cli import main

sys.exit(main())

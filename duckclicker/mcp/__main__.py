"""CLI entry point: python -m duckclicker.mcp [--save-file PATH]"""

from __future__ import annotations

import argparse

from duckclicker.catalog import define_game
from duckclicker.log import configure_logging
from duckclicker.mcp.server import create_server
from duckclicker.persistence import JsonFileStore


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="python -m duckclicker.mcp",
        description="Serve Rubber Duck Clicker over MCP (stdio)",
    )
    parser.add_argument("--save-file", default=None, help="Persist progress to this file")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level)
    store = JsonFileStore(args.save_file) if args.save_file else None
    server = create_server(define_game(), store=store)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()

from __future__ import annotations

import math
from typing import Callable

# Receives the number of quacks to play
FeedbackSink = Callable[[int], None]


class FeedbackTracker:
    """Counts whole-quack boundaries crossed by the lifetime total.

    Clicks and fractional accrual both feed the same signal: going from
    41.7 to 44.2 lifetime quacks crosses 42, 43 and 44, so three quacks.
    """

    def __init__(self, lifetime_points: float = 0.0) -> None:
        self._last = math.floor(lifetime_points)

    @property
    def last(self) -> int:
        return self._last

    def observe(self, lifetime_points: float) -> int:
        current = math.floor(lifetime_points)
        crossed = current - self._last
        if crossed <= 0:
            return 0
        self._last = current
        return crossed

    def rebase(self, lifetime_points: float) -> None:
        self._last = math.floor(lifetime_points)

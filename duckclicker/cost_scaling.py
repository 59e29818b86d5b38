from __future__ import annotations

import math
from typing import Callable


class CostScaling:
    """Determines how an upgrade's price changes with purchase count."""

    def __init__(self, fn: Callable[[float, int], float], growth: float | None = None) -> None:
        self._fn = fn
        self.growth = growth

    def compute(self, base_cost: float, current_count: int) -> int:
        """Price of the next unit, rounded up to a whole point."""
        return math.ceil(self._fn(base_cost, current_count))

    @classmethod
    def fixed(cls) -> CostScaling:
        """Cost never changes."""
        return cls(lambda base, _count: base)

    @classmethod
    def exponential(cls, growth_rate: float = 1.15) -> CostScaling:
        """Cost = base * growth_rate^count."""
        gr = growth_rate  # capture

        def _compute(base: float, count: int) -> float:
            return base * gr ** count

        return cls(_compute, growth=gr)

    @classmethod
    def linear(cls, increment_pct: float = 0.10) -> CostScaling:
        """Cost = base * (1 + increment_pct * count)."""
        pct = increment_pct

        def _compute(base: float, count: int) -> float:
            return base * (1.0 + pct * count)

        return cls(_compute)

    @classmethod
    def custom(cls, fn: Callable[[float, int], float]) -> CostScaling:
        """Arbitrary cost function."""
        return cls(fn)

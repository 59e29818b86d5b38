from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class TitleTier:
    """A named rank reached once lifetime quacks hit the threshold."""

    threshold: float
    label: str


DEFAULT_TITLE = "Intern Duck"

DEFAULT_TITLES: tuple[TitleTier, ...] = (
    TitleTier(5000, "Duck Overlord"),
    TitleTier(2000, "Senior Quacker"),
    TitleTier(800, "Principal Duck"),
    TitleTier(250, "Rubber Duck Consultant"),
    TitleTier(50, "Junior Quacker"),
)


def title_for(
    lifetime_points: float,
    tiers: tuple[TitleTier, ...] | list[TitleTier] = DEFAULT_TITLES,
    default: str = DEFAULT_TITLE,
) -> str:
    """Map floored lifetime points to the highest tier reached."""
    total = math.floor(lifetime_points)
    for tier in sorted(tiers, key=lambda t: t.threshold, reverse=True):
        if total >= tier.threshold:
            return tier.label
    return default

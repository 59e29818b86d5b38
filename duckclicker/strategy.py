from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from duckclicker.effect import EffectType
from duckclicker.upgrade import UpgradeStatus

if TYPE_CHECKING:
    from duckclicker.runtime import GameRuntime
    from duckclicker.state import GameState


@dataclass
class ClickProfile:
    """A steady manual click rate, optionally stopping at a lifetime total."""

    clicks_per_second: float = 0.0
    active_until: float | None = None
    _carry: float = field(default=0.0, init=False, repr=False)

    def get_clicks(self, state: GameState, duration: float) -> int:
        """Whole clicks for *duration*; the fractional part carries over."""
        if self.active_until is not None and state.lifetime_points >= self.active_until:
            return 0
        self._carry += self.clicks_per_second * duration
        clicks = int(self._carry)
        self._carry -= clicks
        return clicks


class Strategy(ABC):
    """Base class for simulation strategies."""

    def __init__(self, click_profile: ClickProfile | None = None) -> None:
        self.click_profile = click_profile

    @abstractmethod
    def decide_purchases(
        self, runtime: GameRuntime, affordable: list[UpgradeStatus]
    ) -> list[str]:
        """Return ordered list of upgrade IDs to buy."""
        ...

    def get_clicks(self, state: GameState, duration: float) -> int:
        if self.click_profile:
            return self.click_profile.get_clicks(state, duration)
        return 0

    @abstractmethod
    def describe(self) -> str: ...

    def _describe_clicks(self) -> str:
        if self.click_profile and self.click_profile.clicks_per_second:
            return f" ({self.click_profile.clicks_per_second:g} CPS)"
        return ""


class GreedyCheapest(Strategy):
    """Buy the cheapest affordable upgrade first."""

    def decide_purchases(
        self, runtime: GameRuntime, affordable: list[UpgradeStatus]
    ) -> list[str]:
        return [s.id for s in sorted(affordable, key=lambda s: s.current_cost)]

    def describe(self) -> str:
        return "GreedyCheapest" + self._describe_clicks()


class GreedyROI(Strategy):
    """Buy the upgrade adding the most quacks/sec per quack spent.

    Click power is worth ``amount * clicks_per_second``, so without a click
    profile click upgrades rank last.
    """

    def _rate_gain(self, runtime: GameRuntime, upgrade_id: str) -> float:
        udef = runtime.definition.get_upgrade(upgrade_id)
        if udef is None:
            return 0.0
        if udef.effect.type is EffectType.AUTO_RATE:
            return udef.effect.amount
        cps = self.click_profile.clicks_per_second if self.click_profile else 0.0
        return udef.effect.amount * cps

    def decide_purchases(
        self, runtime: GameRuntime, affordable: list[UpgradeStatus]
    ) -> list[str]:
        scored = [
            (self._rate_gain(runtime, s.id) / s.current_cost, -s.current_cost, s.id)
            for s in affordable
        ]
        scored.sort(reverse=True)
        return [uid for _, _, uid in scored]

    def describe(self) -> str:
        return "GreedyROI" + self._describe_clicks()

from __future__ import annotations

from dataclasses import dataclass, field

from duckclicker.cost_scaling import CostScaling
from duckclicker.effect import EffectDef


@dataclass(frozen=True)
class UpgradeDef:
    """Static definition of a purchasable upgrade."""

    id: str
    effect: EffectDef
    display_name: str = ""
    description: str = ""
    unlock_threshold: float = 0.0
    base_cost: float = 0.0
    cost_scaling: CostScaling = field(default_factory=CostScaling.fixed)

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)
        if not self.description:
            object.__setattr__(self, "description", self.effect.describe())

    @property
    def cost_growth(self) -> float | None:
        return self.cost_scaling.growth

    def cost_at(self, count: int) -> int:
        return self.cost_scaling.compute(self.base_cost, count)


@dataclass(frozen=True)
class UpgradeStatus:
    """Read-only snapshot of an upgrade for shop listings."""

    id: str
    display_name: str
    description: str
    count: int
    unlocked: bool
    affordable: bool
    current_cost: int
    unlock_threshold: float

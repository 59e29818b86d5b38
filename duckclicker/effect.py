from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from duckclicker.state import GameState


class EffectType(Enum):
    ACTION_POWER = auto()
    AUTO_RATE = auto()


@dataclass(frozen=True)
class EffectDef:
    """A fixed increment to one of the two production rates."""

    type: EffectType
    amount: float

    def apply(self, state: GameState) -> None:
        if self.type is EffectType.ACTION_POWER:
            state.action_power += self.amount
        elif self.type is EffectType.AUTO_RATE:
            state.auto_rate += self.amount
        else:
            raise ValueError(f"Unhandled effect type: {self.type!r}")

    def describe(self) -> str:
        amount = f"{self.amount:g}"
        if self.type is EffectType.ACTION_POWER:
            return f"+{amount} quacks per click"
        return f"+{amount} auto-quacks/sec"


class Effect:
    """Convenience constructors for the two effect kinds."""

    @staticmethod
    def click(amount: float) -> EffectDef:
        """Raise quacks granted per manual click."""
        return EffectDef(type=EffectType.ACTION_POWER, amount=amount)

    @staticmethod
    def auto(amount: float) -> EffectDef:
        """Raise quacks accrued per second."""
        return EffectDef(type=EffectType.AUTO_RATE, amount=amount)

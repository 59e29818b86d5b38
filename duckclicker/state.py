from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class GameState:
    """Mutable runtime container holding all game state."""

    points: float = 0.0
    lifetime_points: float = 0.0
    action_power: float = 1.0
    auto_rate: float = 0.0
    owned: dict[str, int] = field(default_factory=dict)

    def owned_count(self, id: str) -> int:
        return self.owned.get(id, 0)

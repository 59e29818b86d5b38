from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from duckclicker.state import GameState


@dataclass
class Snapshot:
    time: float
    points: float
    lifetime_points: float
    action_power: float
    auto_rate: float


@dataclass
class PurchaseEvent:
    time: float
    upgrade_id: str
    cost: int
    points_after: float


@dataclass
class TitleEvent:
    time: float
    title: str


class MetricsCollector:
    """Collects simulation metrics at configurable intervals."""

    def __init__(self, snapshot_interval: float = 1.0) -> None:
        self.snapshot_interval = snapshot_interval
        self._last_snapshot_time: float = -1.0

        self.snapshots: list[Snapshot] = []
        self.purchases: list[PurchaseEvent] = []
        self.titles: list[TitleEvent] = []

    def record_tick(self, time: float, state: GameState) -> None:
        """Record a snapshot if enough time has passed."""
        if time - self._last_snapshot_time >= self.snapshot_interval:
            self.snapshots.append(
                Snapshot(
                    time=time,
                    points=state.points,
                    lifetime_points=state.lifetime_points,
                    action_power=state.action_power,
                    auto_rate=state.auto_rate,
                )
            )
            self._last_snapshot_time = time

    def record_purchase(
        self, time: float, state: GameState, upgrade_id: str, cost: int
    ) -> None:
        self.purchases.append(
            PurchaseEvent(
                time=time,
                upgrade_id=upgrade_id,
                cost=cost,
                points_after=state.points,
            )
        )

    def record_title(self, time: float, title: str) -> None:
        self.titles.append(TitleEvent(time=time, title=title))

from __future__ import annotations

import math

import structlog

from duckclicker.definition import GameDefinition
from duckclicker.errors import PurchaseError
from duckclicker.metrics import MetricsCollector
from duckclicker.report import SimulationReport, build_report
from duckclicker.runtime import GameRuntime
from duckclicker.strategy import Strategy

log = structlog.get_logger()

MAX_TICKS = 10_000_000


class Simulation:
    """Plays a fresh in-memory game with a strategy, headless."""

    def __init__(
        self,
        definition: GameDefinition,
        strategy: Strategy,
        duration: float = 3600.0,
        tick_resolution: float = 1.0,
        stop_at_title: str | None = None,
    ) -> None:
        if tick_resolution <= 0:
            raise ValueError(f"tick_resolution must be positive, got {tick_resolution}")
        self.definition = definition
        self.strategy = strategy
        self.duration = duration
        self.tick_resolution = tick_resolution
        self.stop_at_title = stop_at_title

        self.runtime = GameRuntime(definition)
        self.collector = MetricsCollector(snapshot_interval=tick_resolution)
        self.time = 0.0

    def run(self) -> SimulationReport:
        runtime = self.runtime
        state = runtime.get_state()
        title = runtime.title()
        self.collector.record_title(0.0, title)
        self.collector.record_tick(0.0, state)
        tick_count = 0

        while self.time < self.duration:
            tick_count += 1
            if tick_count > MAX_TICKS:
                return self._build_report("Max ticks reached")

            dt = min(self.tick_resolution, self.duration - self.time)
            self.time += dt

            # 1. Auto-quacks
            runtime.accrue(dt)

            # 2. Clicks
            for _ in range(self.strategy.get_clicks(state, dt)):
                runtime.record_action()

            # 3. Purchases
            affordable = runtime.get_affordable_purchases()
            for upgrade_id in self.strategy.decide_purchases(runtime, affordable):
                try:
                    result = runtime.purchase(upgrade_id)
                except PurchaseError:
                    continue
                self.collector.record_purchase(self.time, state, upgrade_id, result.cost)

            # 4. Titles
            current = runtime.title()
            if current != title:
                title = current
                self.collector.record_title(self.time, title)

            # 5. Metrics
            self.collector.record_tick(self.time, state)

            if math.isnan(state.points) or math.isinf(state.points):
                return self._build_report("Aborted: NaN/Inf detected")
            if self.stop_at_title is not None and title == self.stop_at_title:
                return self._build_report(f"Title reached: {title}")

        return self._build_report("Duration reached")

    def _build_report(self, outcome: str) -> SimulationReport:
        log.info(
            "simulation.finished",
            outcome=outcome,
            time=round(self.time, 2),
            purchases=len(self.collector.purchases),
        )
        return build_report(
            collector=self.collector,
            strategy_description=self.strategy.describe(),
            outcome=outcome,
            total_time=self.time,
        )

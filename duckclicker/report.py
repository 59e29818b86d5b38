from __future__ import annotations

from dataclasses import dataclass, field

from duckclicker.metrics import MetricsCollector, PurchaseEvent, Snapshot, TitleEvent


@dataclass
class SimulationReport:
    """Container for simulation results and derived metrics."""

    strategy_description: str = ""
    outcome: str = ""
    total_time: float = 0.0

    # Raw metrics
    snapshots: list[Snapshot] = field(default_factory=list)
    purchases: list[PurchaseEvent] = field(default_factory=list)
    titles: list[TitleEvent] = field(default_factory=list)

    # Derived metrics
    title_times: dict[str, float] = field(default_factory=dict)
    purchase_counts: dict[str, int] = field(default_factory=dict)
    purchase_gaps: list[float] = field(default_factory=list)
    max_purchase_gap: float = 0.0
    mean_purchase_gap: float = 0.0
    purchases_per_minute: float = 0.0

    def title_time(self, title: str) -> float | None:
        return self.title_times.get(title)

    def series(self, attr: str) -> list[tuple[float, float]]:
        """Return (time, value) pairs for a Snapshot field, e.g. ``"points"``."""
        return [(s.time, getattr(s, attr)) for s in self.snapshots]


def build_report(
    collector: MetricsCollector,
    strategy_description: str,
    outcome: str,
    total_time: float,
) -> SimulationReport:
    """Build a SimulationReport from collected metrics."""
    title_times: dict[str, float] = {}
    for t in collector.titles:
        title_times.setdefault(t.title, t.time)

    purchase_counts: dict[str, int] = {}
    for p in collector.purchases:
        purchase_counts[p.upgrade_id] = purchase_counts.get(p.upgrade_id, 0) + 1

    purchase_gaps: list[float] = []
    purchase_times = sorted(p.time for p in collector.purchases)
    if purchase_times:
        purchase_gaps.append(purchase_times[0])  # gap from t=0 to first purchase
        for i in range(1, len(purchase_times)):
            purchase_gaps.append(purchase_times[i] - purchase_times[i - 1])

    max_gap = max(purchase_gaps) if purchase_gaps else 0.0
    mean_gap = (sum(purchase_gaps) / len(purchase_gaps)) if purchase_gaps else 0.0
    ppm = (len(collector.purchases) / total_time * 60.0) if total_time > 0 else 0.0

    return SimulationReport(
        strategy_description=strategy_description,
        outcome=outcome,
        total_time=total_time,
        snapshots=collector.snapshots,
        purchases=collector.purchases,
        titles=collector.titles,
        title_times=title_times,
        purchase_counts=purchase_counts,
        purchase_gaps=purchase_gaps,
        max_purchase_gap=max_gap,
        mean_purchase_gap=mean_gap,
        purchases_per_minute=ppm,
    )

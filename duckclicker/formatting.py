from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from duckclicker.report import SimulationReport
from duckclicker.runtime import GameRuntime

UNITS = ("K", "M", "B", "T")


def _fixed(value: float, places: int) -> str:
    # Half-up on the exact binary value, the way a browser's toFixed rounds
    num = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, num.adjusted() + places + 2)
        return str(num.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def format_compact(n: float) -> str:
    """Friendly compact number: ``999``, ``1.23K``, ``15.4K``, ``250M``.

    Scaling stops once the value drops below 1000, so ``999999`` renders as
    ``1000K`` rather than rolling over to ``1.00M``.
    """
    if not math.isfinite(n):
        return str(n)
    if n < 1000:
        return str(math.floor(n))
    num = n
    i = -1
    while num >= 1000 and i < len(UNITS) - 1:
        num /= 1000
        i += 1
    places = 2 if num < 10 else 1 if num < 100 else 0
    return f"{_fixed(num, places)}{UNITS[i]}"


def format_status(runtime: GameRuntime) -> str:
    """Header block: title, balances and rates."""
    state = runtime.get_state()
    lines = [
        f"{runtime.definition.config.name}",
        f"Title: {runtime.title()}",
        "",
        f"  Quacks:     {format_compact(math.floor(state.points))}",
        f"  Total:      {format_compact(math.floor(state.lifetime_points))}",
        f"  Per Click:  {format_compact(state.action_power)}",
        f"  Auto / sec: {state.auto_rate:.1f}",
    ]
    return "\n".join(lines)


def format_shop(runtime: GameRuntime) -> str:
    """Upgrade list, one line per catalog entry."""
    lines = ["UPGRADES (unlocks are based on total quacks):"]
    for s in runtime.upgrade_statuses():
        if not s.unlocked:
            detail = f"Unlock at {s.unlock_threshold:g} total"
            action = "Locked"
        else:
            detail = f"Cost: {format_compact(s.current_cost)}"
            action = "Buy" if s.affordable else "Need more quacks"
        lines.append(
            f"  {s.id:<15s} {s.display_name:<22s} {s.description:<22s} "
            f"Owned: {s.count:<4d} {detail:<24s} [{action}]"
        )
    return "\n".join(lines)


def format_text_report(report: SimulationReport) -> str:
    """Format a simulation report for console output."""
    lines: list[str] = []

    lines.append("=" * 30 + " Rubber Duck Simulation Report " + "=" * 30)
    lines.append(f"Strategy: {report.strategy_description}")
    lines.append(f"Result: {report.outcome} at {report.total_time:.1f}s")
    lines.append("")

    if report.titles:
        lines.append("TITLES:")
        for t in report.titles:
            lines.append(f"  * {t.title:.<30s} {t.time:.1f}s")
        lines.append("")

    lines.append("PURCHASES:")
    lines.append(f"  Total: {len(report.purchases)}")
    lines.append(f"  Rate: {report.purchases_per_minute:.1f}/min")
    lines.append(f"  Max gap: {report.max_purchase_gap:.1f}s")
    lines.append(f"  Mean gap: {report.mean_purchase_gap:.1f}s")
    for uid, count in report.purchase_counts.items():
        lines.append(f"  {uid:.<30s} {count}")
    lines.append("")

    if report.snapshots:
        last = report.snapshots[-1]
        lines.append("FINAL:")
        lines.append(f"  Quacks: {format_compact(last.points)}")
        lines.append(f"  Total: {format_compact(last.lifetime_points)}")
        lines.append(f"  Per Click: {format_compact(last.action_power)}")
        lines.append(f"  Auto / sec: {last.auto_rate:.1f}")

    return "\n".join(lines)

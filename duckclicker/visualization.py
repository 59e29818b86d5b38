from __future__ import annotations

from duckclicker.report import SimulationReport


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Generate a 4-panel matplotlib visualization of simulation results.

    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install duckclicker[viz]"
        )

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(
        f"Rubber Duck Simulation: {report.strategy_description}",
        fontsize=14,
    )

    # 1. Quacks over time (log scale)
    ax1 = axes[0][0]
    for attr, label in (("points", "Quacks"), ("lifetime_points", "Total")):
        series = report.series(attr)
        if series:
            times, values = zip(*series)
            ax1.plot(times, [max(v, 1e-10) for v in values], label=label)
    ax1.set_yscale("log")
    ax1.set_xlabel("Time (s)")
    ax1.set_ylabel("Quacks")
    ax1.set_title("Quacks")
    for t in report.titles[1:]:
        ax1.axvline(t.time, color="grey", linestyle=":", alpha=0.6)
    ax1.legend(fontsize=8)
    ax1.grid(True, alpha=0.3)

    # 2. Rates over time
    ax2 = axes[0][1]
    for attr, label in (("action_power", "Per Click"), ("auto_rate", "Auto / sec")):
        series = report.series(attr)
        if series:
            times, values = zip(*series)
            ax2.plot(times, values, label=label)
    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("Quacks")
    ax2.set_title("Production Rates")
    ax2.legend(fontsize=8)
    ax2.grid(True, alpha=0.3)

    # 3. Upgrades owned (cumulative step per upgrade)
    ax3 = axes[1][0]
    owned: dict[str, list[float]] = {}
    for p in report.purchases:
        owned.setdefault(p.upgrade_id, []).append(p.time)
    for upgrade_id, times in owned.items():
        counts = list(range(1, len(times) + 1))
        ax3.step(
            [0.0, *times, report.total_time],
            [0, *counts, counts[-1]],
            where="post",
            label=upgrade_id,
        )
    ax3.set_xlabel("Time (s)")
    ax3.set_ylabel("Owned")
    ax3.set_title("Upgrades Owned")
    if owned:
        ax3.legend(fontsize=7)
    ax3.grid(True, alpha=0.3)

    # 4. Time each title was reached
    ax4 = axes[1][1]
    reached = sorted(report.title_times.items(), key=lambda kv: kv[1])
    if reached:
        labels = [title for title, _ in reached]
        ax4.barh(range(len(labels)), [t for _, t in reached], alpha=0.7)
        ax4.set_yticks(range(len(labels)))
        ax4.set_yticklabels(labels, fontsize=8)
    ax4.set_xlabel("Time reached (s)")
    ax4.set_title("Titles")
    ax4.grid(True, axis="x", alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150)
    else:
        plt.show()

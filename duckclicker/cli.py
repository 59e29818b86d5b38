from __future__ import annotations

import argparse
import asyncio
import math
import sys
from pathlib import Path
from typing import Callable, TextIO

import structlog

from duckclicker.catalog import define_game
from duckclicker.definition import GameDefinition
from duckclicker.errors import PurchaseError
from duckclicker.formatting import format_compact, format_shop, format_status, format_text_report
from duckclicker.log import bind_context, configure_logging
from duckclicker.loop import AccrualLoop
from duckclicker.persistence import JsonFileStore
from duckclicker.runtime import GameRuntime
from duckclicker.simulation import Simulation
from duckclicker.strategy import ClickProfile, GreedyCheapest, GreedyROI, Strategy

log = structlog.get_logger()

DEFAULT_SAVE_FILE = Path.home() / ".duckclicker" / "save.json"

PLAY_HELP = """\
Commands:
  <enter> | c [N]   click the duck (N times)
  b | buy ID        buy an upgrade
  s | status        show balances
  shop              list upgrades
  reset             wipe all progress
  q | quit          save and leave"""


class QuackBell:
    """Feedback sink that rings the terminal bell, once per burst of quacks."""

    def __init__(self, out: TextIO, enabled: bool = True) -> None:
        self.out = out
        self.enabled = enabled
        self.total = 0

    def __call__(self, quacks: int) -> None:
        self.total += quacks
        if self.enabled:
            self.out.write("\a")
            self.out.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="duckclicker",
        description="Rubber Duck Clicker: click the duck, buy upgrades",
    )
    parser.add_argument(
        "--save-file",
        type=Path,
        default=DEFAULT_SAVE_FILE,
        help=f"Save file (default: {DEFAULT_SAVE_FILE})",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    parser.add_argument("--sound", action="store_true", help="Ring the terminal bell on quacks")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("status", help="Show title, balances and rates")
    sub.add_parser("shop", help="List upgrades")

    click = sub.add_parser("click", help="Click the duck")
    click.add_argument("-n", "--count", type=int, default=1, help="Number of clicks")

    buy = sub.add_parser("buy", help="Buy an upgrade")
    buy.add_argument("upgrade_id", help="Upgrade ID (see 'shop')")

    idle = sub.add_parser("idle", help="Let auto-quacks run for a while")
    idle.add_argument("seconds", type=float, help="Seconds of idle time")

    reset = sub.add_parser("reset", help="Reset all progress")
    reset.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    play = sub.add_parser("play", help="Interactive session with live auto-quacks")
    play.add_argument("--frame-rate", type=int, default=None, help="Accrual frames per second")

    sim = sub.add_parser("simulate", help="Run a balance simulation")
    sim.add_argument(
        "--strategy",
        default="greedy_cheapest",
        choices=["greedy_cheapest", "greedy_roi"],
        help="Strategy to use (default: greedy_cheapest)",
    )
    sim.add_argument("--cps", type=float, default=5.0, help="Clicks per second")
    sim.add_argument("--duration", type=float, default=3600, help="Max simulation time (s)")
    sim.add_argument(
        "--tick-resolution", type=float, default=1.0, help="Seconds per tick"
    )
    sim.add_argument("--stop-at-title", default=None, help="Stop once this title is reached")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")

    return parser


def build_strategy(name: str, cps: float) -> Strategy:
    click_profile = ClickProfile(clicks_per_second=cps) if cps > 0 else None
    if name == "greedy_roi":
        return GreedyROI(click_profile=click_profile)
    return GreedyCheapest(click_profile=click_profile)


def ask_confirm(message: str) -> bool:
    try:
        answer = input(f"{message} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _buy(runtime: GameRuntime, upgrade_id: str) -> bool:
    try:
        result = runtime.purchase(upgrade_id)
    except PurchaseError as exc:
        print(str(exc))
        return False
    print(f"Bought: {result.display_name} (cost {format_compact(result.cost)})")
    return True


def _click(runtime: GameRuntime, count: int) -> None:
    gained = 0.0
    for _ in range(count):
        gained += runtime.record_action()
    print(
        f"Quack x{count}: +{format_compact(gained)} "
        f"(now {format_compact(runtime.get_state().points)})"
    )


async def play(
    runtime: GameRuntime,
    frame_rate: int | None = None,
    read_line: Callable[[str], str] = input,
    confirm: Callable[[str], bool] = ask_confirm,
) -> None:
    """Read commands while the accrual loop keeps the auto-quacks flowing."""
    print(format_status(runtime))
    print(PLAY_HELP)
    async with AccrualLoop(runtime, frame_rate=frame_rate):
        while True:
            try:
                line = await asyncio.to_thread(read_line, "> ")
            except EOFError:
                break
            parts = line.split()
            cmd = parts[0].lower() if parts else "c"
            args = parts[1:]

            if cmd in ("q", "quit", "exit"):
                break
            elif cmd in ("c", "click"):
                count = int(args[0]) if args and args[0].isdigit() else 1
                _click(runtime, max(count, 1))
            elif cmd in ("b", "buy"):
                if not args:
                    print("Usage: buy UPGRADE_ID")
                    continue
                _buy(runtime, args[0])
            elif cmd in ("s", "status"):
                print(format_status(runtime))
            elif cmd == "shop":
                print(format_shop(runtime))
            elif cmd == "reset":
                runtime.reset(confirm)
                print(format_status(runtime))
            else:
                print(PLAY_HELP)


def main(argv: list[str] | None = None, definition: GameDefinition | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(level=args.log_level, json_logs=args.json_logs)
    bind_context(command=args.command)
    definition = definition or define_game()

    if args.command == "simulate":
        strategy = build_strategy(args.strategy, args.cps)
        sim = Simulation(
            definition=definition,
            strategy=strategy,
            duration=args.duration,
            tick_resolution=args.tick_resolution,
            stop_at_title=args.stop_at_title,
        )
        report = sim.run()
        print(format_text_report(report))
        if args.plot:
            from duckclicker.visualization import plot_simulation
            plot_simulation(report, args.plot)
            print(f"\nPlot saved to {args.plot}")
        return 0

    bell = QuackBell(sys.stdout, enabled=args.sound)
    runtime = GameRuntime(definition, store=JsonFileStore(args.save_file), feedback=bell)

    if args.command == "status":
        print(format_status(runtime))
    elif args.command == "shop":
        print(format_shop(runtime))
    elif args.command == "click":
        if args.count < 1:
            print("Count must be at least 1")
            return 2
        _click(runtime, args.count)
    elif args.command == "buy":
        if not _buy(runtime, args.upgrade_id):
            return 1
    elif args.command == "idle":
        if not math.isfinite(args.seconds) or args.seconds < 0:
            print("Seconds must be a non-negative number")
            return 2
        gained = runtime.accrue(args.seconds)
        runtime.save()
        print(f"Idled {args.seconds:g}s: +{format_compact(gained)} quacks")
    elif args.command == "reset":
        confirm = (lambda _msg: True) if args.yes else ask_confirm
        before = runtime.get_state()
        if runtime.reset(confirm) is before:
            print("Reset cancelled")
            return 1
        print("Progress reset")
    elif args.command == "play":
        try:
            asyncio.run(play(runtime, frame_rate=args.frame_rate))
        except KeyboardInterrupt:
            runtime.save()
        print(format_status(runtime))
    return 0

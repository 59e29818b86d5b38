"""MCP server wrapping GameRuntime for interactive AI playtesting."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import FastMCP

from duckclicker.definition import GameDefinition
from duckclicker.errors import PurchaseError, UnknownUpgrade
from duckclicker.persistence import KeyValueStore, MemoryStore
from duckclicker.runtime import GameRuntime

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum clicks per click() call
_MAX_CLICKS = 1000


@dataclass
class _GameHolder:
    """Holds the active runtime and counts quacks since the last tool call."""

    runtime: GameRuntime
    quacks: int = 0

    def on_quack(self, count: int) -> None:
        self.quacks += count

    def take_quacks(self) -> int:
        count, self.quacks = self.quacks, 0
        return count


def _make_holder(definition: GameDefinition, store: KeyValueStore) -> _GameHolder:
    holder = _GameHolder(runtime=GameRuntime(definition, store=store))
    holder.runtime.feedback = holder.on_quack
    return holder


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    defn = holder.runtime.definition
    return {
        "name": defn.config.name,
        "upgrades": [
            {
                "id": u.id,
                "display_name": u.display_name,
                "description": u.description,
                "unlock_threshold": u.unlock_threshold,
                "base_cost": u.base_cost,
                "cost_growth": u.cost_growth,
            }
            for u in defn.upgrades
        ],
        "titles": [
            {"threshold": t.threshold, "label": t.label}
            for t in sorted(defn.titles, key=lambda t: t.threshold)
        ],
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    runtime = holder.runtime
    state = runtime.get_state()
    return {
        "title": runtime.title(),
        "points": round(state.points, 2),
        "lifetime_points": round(state.lifetime_points, 2),
        "action_power": state.action_power,
        "auto_rate": round(state.auto_rate, 4),
        "owned": dict(state.owned),
    }


def _tool_get_shop(holder: _GameHolder) -> dict[str, Any]:
    result = []
    for s in holder.runtime.upgrade_statuses():
        entry: dict[str, Any] = {
            "id": s.id,
            "display_name": s.display_name,
            "description": s.description,
            "count": s.count,
            "unlocked": s.unlocked,
            "affordable": s.affordable,
        }
        if s.unlocked:
            t = holder.runtime.time_to_afford(s.id)
            entry["current_cost"] = s.current_cost
            entry["time_to_afford"] = round(t, 2) if t is not None else None
        else:
            entry["unlock_threshold"] = s.unlock_threshold
        result.append(entry)
    return {"upgrades": result}


def _tool_click(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    total = 0.0
    for _ in range(count):
        total += holder.runtime.record_action()
    return {
        "clicks": count,
        "total_earned": round(total, 2),
        "new_balance": round(holder.runtime.get_state().points, 2),
        "quacks": holder.take_quacks(),
    }


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if not math.isfinite(seconds) or seconds <= 0:
        return {"error": "Seconds must be a positive number"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    runtime = holder.runtime
    title_before = runtime.title()
    gained = runtime.accrue(seconds)
    runtime.save()

    result: dict[str, Any] = {
        "waited": seconds,
        "earned": round(gained, 2),
        "points": round(runtime.get_state().points, 2),
        "quacks": holder.take_quacks(),
    }
    if runtime.title() != title_before:
        result["new_title"] = runtime.title()
    return result


def _tool_purchase(holder: _GameHolder, upgrade_id: str) -> dict[str, Any]:
    try:
        result = holder.runtime.purchase(upgrade_id)
    except UnknownUpgrade as exc:
        return {"error": str(exc)}
    except PurchaseError as exc:
        return {"success": False, "reason": str(exc)}
    return {
        "success": True,
        "upgrade_id": result.upgrade_id,
        "message": f"Bought: {result.display_name}",
        "cost": result.cost,
        "new_count": result.new_count,
    }


def _tool_reset(holder: _GameHolder, confirm: bool) -> dict[str, Any]:
    holder.runtime.reset(lambda _msg: confirm)
    holder.take_quacks()
    if not confirm:
        return {"success": False, "message": "Reset not confirmed"}
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(
    definition: GameDefinition, store: KeyValueStore | None = None
) -> FastMCP:
    """Create an MCP server wrapping a GameRuntime for the given definition."""
    holder = _make_holder(definition, store if store is not None else MemoryStore())

    mcp = FastMCP(
        name=f"Duck Clicker: {definition.config.name}",
    )

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get the static catalog: upgrades with unlock thresholds and cost curves, title tiers."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get the current title, balances, rates and owned upgrade counts."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_shop() -> dict[str, Any]:
        """List every upgrade with lock state, current cost and time-to-afford."""
        return _tool_get_shop(holder)

    @mcp.tool()
    def click(count: int = 1) -> dict[str, Any]:
        """Click the duck N times (max 1000). Returns quacks earned."""
        return _tool_click(holder, count)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Let auto-quacks accrue for the given seconds (max 86400)."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def purchase(upgrade_id: str) -> dict[str, Any]:
        """Buy an upgrade. Returns success/failure with reason."""
        return _tool_purchase(holder, upgrade_id)

    @mcp.tool()
    def reset(confirm: bool = False) -> dict[str, Any]:
        """Wipe all progress. Only happens when confirm is true."""
        return _tool_reset(holder, confirm)

    return mcp

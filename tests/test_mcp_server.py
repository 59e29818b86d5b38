"""Tests for MCP server tool functions."""

import pytest

from duckclicker.catalog import define_game
from duckclicker.definition import STORAGE_KEY
from duckclicker.persistence import MemoryStore, load_state, serialize_state
from duckclicker.state import GameState

from duckclicker.mcp.server import (
    _GameHolder,
    _make_holder,
    _tool_click,
    _tool_get_game_info,
    _tool_get_game_state,
    _tool_get_shop,
    _tool_purchase,
    _tool_reset,
    _tool_wait,
)


def _holder(state: GameState | None = None) -> tuple[_GameHolder, MemoryStore]:
    store = MemoryStore()
    if state is not None:
        store.set(STORAGE_KEY, serialize_state(state))
    return _make_holder(define_game(), store), store


def _saved(store: MemoryStore) -> GameState:
    return load_state(store.get(STORAGE_KEY))


# ── get_game_info ────────────────────────────────────────────────────


class TestGetGameInfo:
    def test_returns_expected_structure(self):
        holder, _ = _holder()
        result = _tool_get_game_info(holder)
        assert result["name"] == "Rubber Duck Clicker"
        assert len(result["upgrades"]) == 6
        assert len(result["titles"]) == 5

    def test_upgrade_fields(self):
        holder, _ = _holder()
        coffee = _tool_get_game_info(holder)["upgrades"][1]
        assert coffee == {
            "id": "coffee",
            "display_name": "Office Coffee",
            "description": "+0.5 auto-quacks/sec",
            "unlock_threshold": 30,
            "base_cost": 60,
            "cost_growth": 1.17,
        }

    def test_titles_ascending(self):
        holder, _ = _holder()
        thresholds = [t["threshold"] for t in _tool_get_game_info(holder)["titles"]]
        assert thresholds == [50, 250, 800, 2000, 5000]


# ── get_game_state ───────────────────────────────────────────────────


class TestGetGameState:
    def test_initial_values(self):
        holder, _ = _holder()
        result = _tool_get_game_state(holder)
        assert result == {
            "title": "Intern Duck",
            "points": 0,
            "lifetime_points": 0,
            "action_power": 1,
            "auto_rate": 0,
            "owned": {},
        }

    def test_restored_from_store(self):
        holder, _ = _holder(GameState(points=12, lifetime_points=300, owned={"coffee": 1}))
        result = _tool_get_game_state(holder)
        assert result["title"] == "Rubber Duck Consultant"
        assert result["points"] == 12
        assert result["owned"] == {"coffee": 1}


# ── get_shop ─────────────────────────────────────────────────────────


class TestGetShop:
    def test_initial(self):
        holder, _ = _holder()
        upgrades = _tool_get_shop(holder)["upgrades"]
        assert [u["id"] for u in upgrades][:2] == ["better_finger", "coffee"]
        finger, coffee = upgrades[0], upgrades[1]
        assert finger["unlocked"] is True
        assert finger["current_cost"] == 25
        assert finger["time_to_afford"] is None
        assert coffee["unlocked"] is False
        assert coffee["unlock_threshold"] == 30
        assert "current_cost" not in coffee

    def test_time_to_afford_with_rate(self):
        holder, _ = _holder(GameState(points=5, lifetime_points=5, auto_rate=2))
        finger = _tool_get_shop(holder)["upgrades"][0]
        assert finger["time_to_afford"] == pytest.approx(10.0)

    def test_affordable_flag(self):
        holder, _ = _holder(GameState(points=25, lifetime_points=25))
        finger = _tool_get_shop(holder)["upgrades"][0]
        assert finger["affordable"] is True
        assert finger["time_to_afford"] == 0.0


# ── click ────────────────────────────────────────────────────────────


class TestClick:
    def test_valid_click(self):
        holder, store = _holder()
        result = _tool_click(holder)
        assert result == {"clicks": 1, "total_earned": 1, "new_balance": 1, "quacks": 1}
        assert _saved(store).points == 1

    def test_multiple_clicks(self):
        holder, _ = _holder(GameState(action_power=3))
        result = _tool_click(holder, count=4)
        assert result["total_earned"] == 12
        assert result["new_balance"] == 12
        assert result["quacks"] == 12

    def test_count_too_low(self):
        holder, _ = _holder()
        assert "error" in _tool_click(holder, count=0)

    def test_count_too_high(self):
        holder, _ = _holder()
        assert "error" in _tool_click(holder, count=1001)
        assert holder.runtime.get_state().points == 0


# ── wait ─────────────────────────────────────────────────────────────


class TestWait:
    def test_basic_wait(self):
        holder, store = _holder(GameState(auto_rate=0.5))
        result = _tool_wait(holder, 10)
        assert result["waited"] == 10
        assert result["earned"] == 5
        assert result["points"] == 5
        assert result["quacks"] == 5
        assert "new_title" not in result
        assert _saved(store).points == 5

    def test_title_change_reported(self):
        holder, _ = _holder(GameState(points=45, lifetime_points=45, auto_rate=1))
        result = _tool_wait(holder, 10)
        assert result["new_title"] == "Junior Quacker"
        # Loaded progress does not count as new quacks
        assert result["quacks"] == 10

    def test_no_auto_rate(self):
        holder, _ = _holder()
        result = _tool_wait(holder, 60)
        assert result["earned"] == 0
        assert result["quacks"] == 0

    def test_negative_seconds(self):
        holder, _ = _holder()
        assert "error" in _tool_wait(holder, -1)
        assert "error" in _tool_wait(holder, 0)

    def test_exceeds_max(self):
        holder, _ = _holder()
        assert "error" in _tool_wait(holder, 86401)

    @pytest.mark.parametrize("seconds", [float("nan"), float("inf")])
    def test_non_finite_seconds(self, seconds):
        holder, _ = _holder(GameState(points=3, lifetime_points=3, auto_rate=1))
        assert "error" in _tool_wait(holder, seconds)
        assert _tool_get_game_state(holder)["points"] == 3
        assert _tool_click(holder)["new_balance"] == 4


# ── purchase ─────────────────────────────────────────────────────────


class TestPurchase:
    def test_success(self):
        holder, store = _holder(GameState(points=30, lifetime_points=30))
        result = _tool_purchase(holder, "better_finger")
        assert result == {
            "success": True,
            "upgrade_id": "better_finger",
            "message": "Bought: Stronger Finger",
            "cost": 25,
            "new_count": 1,
        }
        saved = _saved(store)
        assert saved.points == 5
        assert saved.action_power == 2

    def test_cost_grows(self):
        holder, _ = _holder(GameState(points=100, lifetime_points=100))
        _tool_purchase(holder, "better_finger")
        assert _tool_purchase(holder, "better_finger")["cost"] == 29

    def test_cannot_afford(self):
        holder, _ = _holder()
        result = _tool_purchase(holder, "better_finger")
        assert result == {"success": False, "reason": "Not enough quacks"}

    def test_locked(self):
        holder, _ = _holder(GameState(points=100, lifetime_points=29.9))
        result = _tool_purchase(holder, "coffee")
        assert result["success"] is False
        assert result["reason"] == "Locked: unlock at 30 total"
        assert holder.runtime.get_state().points == 100

    def test_unknown_upgrade(self):
        holder, _ = _holder()
        assert "error" in _tool_purchase(holder, "golden_duck")


# ── reset ────────────────────────────────────────────────────────────


class TestReset:
    def test_requires_confirmation(self):
        holder, store = _holder(GameState(points=10, lifetime_points=10))
        result = _tool_reset(holder, confirm=False)
        assert result["success"] is False
        assert holder.runtime.get_state().points == 10
        assert store.get(STORAGE_KEY) is not None

    def test_confirmed_reset(self):
        holder, store = _holder(GameState(points=10, lifetime_points=600, owned={"coffee": 2}))
        result = _tool_reset(holder, confirm=True)
        assert result["success"] is True
        assert _tool_get_game_state(holder)["title"] == "Intern Duck"
        assert store.get(STORAGE_KEY) is None

        # Feedback counts from zero again
        assert _tool_click(holder)["quacks"] == 1

"""Tests for persistence module."""
import json

import pytest

from duckclicker.catalog import define_game
from duckclicker.errors import PurchaseError
from duckclicker.persistence import (
    JsonFileStore,
    MemoryStore,
    clear_state,
    load_state,
    read_state,
    serialize_state,
    state_to_dict,
    write_state,
)
from duckclicker.runtime import GameRuntime
from duckclicker.state import GameState

KEY = "rubber_duck_clicker_v1"


class _FailingStore(MemoryStore):
    def get(self, key):
        raise OSError("unreadable")

    def set(self, key, blob):
        raise OSError("unwritable")

    def remove(self, key):
        raise OSError("stuck")


# ── Codec ───────────────────────────────────────────────────────────


HUGE_INT = "1" + "0" * 400


@pytest.mark.parametrize(
    "raw",
    [None, "", "not json", "[1, 2]", "42", "null", b"\xff\xfe", "[" * 100_000],
)
def test_unusable_input_gives_default_state(raw):
    assert load_state(raw) == GameState()


def test_full_blob():
    raw = json.dumps({
        "points": 12.5,
        "totalQuacks": 40.25,
        "clickPower": 3,
        "autoQps": 0.5,
        "owned": {"better_finger": 2, "coffee": 1},
    })
    state = load_state(raw)
    assert state == GameState(
        points=12.5,
        lifetime_points=40.25,
        action_power=3,
        auto_rate=0.5,
        owned={"better_finger": 2, "coffee": 1},
    )


def test_partial_blob_defaults_each_field():
    state = load_state('{"points": 10}')
    assert state.points == 10
    assert state.lifetime_points == 10
    assert state.action_power == 1
    assert state.auto_rate == 0
    assert state.owned == {}


def test_legacy_quacks_key():
    state = load_state('{"quacks": 7, "totalQuacks": 20}')
    assert state.points == 7
    assert state.lifetime_points == 20


def test_points_key_wins_over_legacy():
    assert load_state('{"points": 3, "quacks": 7}').points == 3


def test_malformed_fields():
    raw = json.dumps({
        "points": "abc",
        "totalQuacks": -5,
        "clickPower": -3,
        "autoQps": None,
        "owned": {"coffee": 2, "neg": -1, "frac": 1.5, "str": "3", "zero": 0, "bool": True},
        "extra": {"ignored": True},
    })
    state = load_state(raw)
    assert state.points == 0
    assert state.lifetime_points == 0
    assert state.action_power == 1
    assert state.auto_rate == 0
    assert state.owned == {"coffee": 2, "str": 3}


def test_non_finite_numbers():
    state = load_state({"points": float("nan"), "autoQps": float("inf")})
    assert state.points == 0
    assert state.auto_rate == 0


def test_owned_not_a_mapping():
    assert load_state('{"owned": [1, 2, 3]}').owned == {}


def test_lifetime_never_below_points():
    state = load_state('{"points": 50, "totalQuacks": 10}')
    assert state.lifetime_points == 50


def test_numeric_strings_accepted():
    state = load_state('{"points": "12", "clickPower": "4"}')
    assert state.points == 12
    assert state.action_power == 4


def test_serialized_keys():
    blob = json.loads(serialize_state(GameState(points=1, lifetime_points=2)))
    assert set(blob) == {"points", "totalQuacks", "clickPower", "autoQps", "owned"}
    assert state_to_dict(GameState())["clickPower"] == 1


def test_round_trip_of_played_state():
    rt = GameRuntime(define_game())
    ids = [u.id for u in rt.definition.upgrades]
    for step in range(400):
        rt.record_action()
        rt.accrue(0.37)
        for upgrade_id in ids:
            try:
                rt.purchase(upgrade_id)
            except PurchaseError:
                pass
        if step % 50 == 0:
            assert load_state(serialize_state(rt.state)) == rt.state
    assert rt.state.owned
    assert load_state(serialize_state(rt.state)) == rt.state


# ── Stores ──────────────────────────────────────────────────────────


def test_memory_store():
    store = MemoryStore()
    assert store.get(KEY) is None
    store.set(KEY, "{}")
    assert store.get(KEY) == "{}"
    store.remove(KEY)
    store.remove(KEY)
    assert store.get(KEY) is None


def test_json_file_store(tmp_path):
    path = tmp_path / "nested" / "save.json"
    store = JsonFileStore(path)
    assert store.get(KEY) is None

    store.set(KEY, serialize_state(GameState(points=3, lifetime_points=3)))
    store.set("other", "x")
    assert path.exists()
    assert load_state(JsonFileStore(path).get(KEY)).points == 3

    store.remove(KEY)
    assert store.get(KEY) is None
    assert store.get("other") == "x"
    assert not (tmp_path / "nested" / "save.json.tmp").exists()


def test_json_file_store_corrupt_file(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("{not json")
    store = JsonFileStore(path)

    with pytest.raises(ValueError):
        store.get(KEY)
    assert read_state(store, KEY) == GameState()

    # A write replaces the unreadable document
    assert write_state(store, KEY, GameState(points=1, lifetime_points=1))
    assert read_state(store, KEY).points == 1


def test_json_file_store_non_object_document(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("[]")
    assert read_state(JsonFileStore(path), KEY) == GameState()


def test_failing_store_is_absorbed():
    store = _FailingStore()
    assert read_state(store, KEY) == GameState()
    assert write_state(store, KEY, GameState()) is False
    assert clear_state(store, KEY) is False


def test_read_write_helpers():
    store = MemoryStore()
    state = GameState(points=4, lifetime_points=9, owned={"coffee": 1})
    assert write_state(store, KEY, state)
    assert read_state(store, KEY) == state
    assert clear_state(store, KEY)
    assert read_state(store, KEY) == GameState()


def test_oversized_integers_default():
    raw = (
        f'{{"points": {HUGE_INT}, "totalQuacks": {HUGE_INT}, "clickPower": {HUGE_INT},'
        f' "autoQps": {HUGE_INT}, "owned": {{"coffee": {HUGE_INT}, "tiny_duck": 2}}}}'
    )
    assert load_state(raw) == GameState(owned={"tiny_duck": 2})


def test_deeply_nested_blob_is_absorbed():
    store = MemoryStore({KEY: "[" * 100_000})
    assert read_state(store, KEY) == GameState()

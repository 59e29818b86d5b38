"""Save-blob codec and key-value stores.

The blob is one JSON object under a single key::

    {"points": 12.5, "totalQuacks": 40.5, "clickPower": 2,
     "autoQps": 0.5, "owned": {"better_finger": 1}}

Reading never fails: anything missing or malformed falls back to its
default, field by field.
"""
from __future__ import annotations

import json
import math
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from duckclicker.state import GameState

log = structlog.get_logger()

# Errors a store may raise that are absorbed at the persistence boundary
STORE_ERRORS = (OSError, ValueError, TypeError)


# ── Codec ────────────────────────────────────────────────────────────


def _number(value: Any, default: float, minimum: float = 0.0) -> float:
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return default
    if not isinstance(value, (int, float)):
        return default
    try:
        value = float(value)
    except OverflowError:
        return default
    if not math.isfinite(value) or value < minimum:
        return default
    return value


def _owned(value: Any) -> dict[str, int]:
    if not isinstance(value, Mapping):
        return {}
    owned: dict[str, int] = {}
    for key, count in value.items():
        if not isinstance(key, str):
            continue
        n = _number(count, -1.0)
        if n < 1 or n != int(n):
            continue
        owned[key] = int(n)
    return owned


def _decode(raw: str | bytes | Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return raw
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (ValueError, TypeError, RecursionError):
        log.warning("state.decode_failed", size=len(raw))
        return None
    if not isinstance(data, Mapping):
        return None
    return data


def load_state(raw: str | bytes | Mapping[str, Any] | None = None) -> GameState:
    """Build a GameState from a stored blob, defaulting each field independently."""
    data = _decode(raw)
    if data is None:
        return GameState()

    stored_points = data.get("points")
    if stored_points is None:
        # Saves written before the rename kept the balance under "quacks"
        stored_points = data.get("quacks")
    points = _number(stored_points, 0.0)
    lifetime = _number(data.get("totalQuacks"), points)

    return GameState(
        points=points,
        lifetime_points=max(lifetime, points),
        action_power=_number(data.get("clickPower"), 1.0, minimum=1.0),
        auto_rate=_number(data.get("autoQps"), 0.0),
        owned=_owned(data.get("owned")),
    )


def state_to_dict(state: GameState) -> dict[str, Any]:
    return {
        "points": state.points,
        "totalQuacks": state.lifetime_points,
        "clickPower": state.action_power,
        "autoQps": state.auto_rate,
        "owned": dict(state.owned),
    }


def serialize_state(state: GameState) -> str:
    return json.dumps(state_to_dict(state), sort_keys=True)


# ── Stores ───────────────────────────────────────────────────────────


class KeyValueStore(ABC):
    """Where the save blob lives between sessions."""

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, blob: str) -> None: ...

    @abstractmethod
    def remove(self, key: str) -> None: ...


class MemoryStore(KeyValueStore):
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, blob: str) -> None:
        self.data[key] = blob

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """All keys in one JSON document on disk, replaced atomically on write."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            doc = json.load(f)
        if not isinstance(doc, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return doc

    def _read_for_update(self) -> dict[str, str]:
        try:
            return self._read()
        except ValueError:
            log.warning("store.corrupt_document_replaced", path=str(self.path))
            return {}

    def _write(self, doc: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(doc, f, indent=2, sort_keys=True)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self.path)

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        if value is None:
            return None
        return str(value)

    def set(self, key: str, blob: str) -> None:
        doc = self._read_for_update()
        doc[key] = blob
        self._write(doc)

    def remove(self, key: str) -> None:
        doc = self._read_for_update()
        if key in doc:
            del doc[key]
            self._write(doc)


# ── Fire-and-forget helpers ──────────────────────────────────────────


def read_state(store: KeyValueStore, key: str) -> GameState:
    """Load the saved state, or the default state if the store fails."""
    try:
        raw = store.get(key)
    except STORE_ERRORS as exc:
        log.warning("store.read_failed", key=key, error=str(exc))
        return GameState()
    return load_state(raw)


def write_state(store: KeyValueStore, key: str, state: GameState) -> bool:
    """Persist the state. Returns False when the write was dropped."""
    try:
        store.set(key, serialize_state(state))
    except STORE_ERRORS as exc:
        log.warning("store.write_failed", key=key, error=str(exc))
        return False
    return True


def clear_state(store: KeyValueStore, key: str) -> bool:
    try:
        store.remove(key)
    except STORE_ERRORS as exc:
        log.warning("store.remove_failed", key=key, error=str(exc))
        return False
    return True

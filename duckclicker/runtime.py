from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import structlog

from duckclicker.definition import GameDefinition
from duckclicker.errors import InsufficientFunds, Locked, UnknownUpgrade
from duckclicker.feedback import FeedbackSink, FeedbackTracker
from duckclicker.persistence import KeyValueStore, clear_state, read_state, write_state
from duckclicker.state import GameState
from duckclicker.title import title_for
from duckclicker.upgrade import UpgradeDef, UpgradeStatus

log = structlog.get_logger()

RESET_PROMPT = "Reset all duck progress?"


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a successful purchase."""

    upgrade_id: str
    display_name: str
    cost: int
    new_count: int


class GameRuntime:
    """Authoritative game logic processor.

    Every mutating operation writes the state back to the store, if one is
    attached. Accrual is the exception: frame-sized gains are batched until
    ``config.autosave_interval`` seconds of play have passed.
    """

    def __init__(
        self,
        definition: GameDefinition,
        state: GameState | None = None,
        store: KeyValueStore | None = None,
        feedback: FeedbackSink | None = None,
    ) -> None:
        errors = definition.validate()
        if errors:
            raise ValueError(
                "Invalid GameDefinition:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.definition = definition
        self.store = store
        self.feedback = feedback
        if state is None:
            state = (
                read_state(store, definition.config.storage_key)
                if store is not None
                else GameState()
            )
        self.state = state
        # Seeded with the loaded total so restoring a save stays silent
        self.tracker = FeedbackTracker(state.lifetime_points)
        self._unsaved_accrual = 0.0

    # ── Player actions ───────────────────────────────────────────────

    def record_action(self) -> float:
        """Process one manual click. Returns the quacks granted."""
        gain = self.state.action_power
        self.state.points += gain
        self.state.lifetime_points += gain
        self._emit_feedback()
        self.save()
        return gain

    def accrue(self, elapsed: float) -> float:
        """Apply *elapsed* seconds of auto-quacks. Returns the quacks granted."""
        if self.state.auto_rate <= 0 or not math.isfinite(elapsed) or elapsed <= 0:
            return 0.0
        gain = self.state.auto_rate * elapsed
        self.state.points += gain
        self.state.lifetime_points += gain
        self._emit_feedback()

        self._unsaved_accrual += elapsed
        if self._unsaved_accrual >= self.definition.config.autosave_interval:
            self.save()
        return gain

    def purchase(self, upgrade_id: str) -> PurchaseResult:
        """Buy one unit of an upgrade.

        Raises UnknownUpgrade, Locked or InsufficientFunds, checked in
        that order. Nothing changes when a purchase is rejected.
        """
        udef = self._require(upgrade_id)
        if not self.is_unlocked(upgrade_id):
            raise Locked(upgrade_id, udef.unlock_threshold)

        cost = self.upgrade_cost(upgrade_id)
        if self.state.points < cost:
            raise InsufficientFunds(upgrade_id, cost, self.state.points)

        self.state.points -= cost
        new_count = self.state.owned_count(upgrade_id) + 1
        self.state.owned[upgrade_id] = new_count
        udef.effect.apply(self.state)

        log.info(
            "runtime.purchase",
            upgrade_id=upgrade_id,
            cost=cost,
            count=new_count,
            points=round(self.state.points, 2),
        )
        self.save()
        return PurchaseResult(
            upgrade_id=upgrade_id,
            display_name=udef.display_name,
            cost=cost,
            new_count=new_count,
        )

    def reset(self, confirm: Callable[[str], bool]) -> GameState:
        """Wipe all progress if *confirm* agrees. Returns the resulting state."""
        if not confirm(RESET_PROMPT):
            return self.state

        self.state = GameState()
        self.tracker.rebase(0)
        self._unsaved_accrual = 0.0
        if self.store is not None:
            clear_state(self.store, self.definition.config.storage_key)
        log.info("runtime.reset")
        return self.state

    # ── Queries ──────────────────────────────────────────────────────

    def get_state(self) -> GameState:
        """Return live reference to game state."""
        return self.state

    def upgrade_cost(self, upgrade_id: str) -> int:
        udef = self._require(upgrade_id)
        return udef.cost_at(self.state.owned_count(upgrade_id))

    def is_unlocked(self, upgrade_id: str) -> bool:
        udef = self._require(upgrade_id)
        return math.floor(self.state.lifetime_points) >= udef.unlock_threshold

    def title(self) -> str:
        return title_for(
            self.state.lifetime_points,
            self.definition.titles,
            self.definition.default_title,
        )

    def upgrade_statuses(self) -> list[UpgradeStatus]:
        """Shop listing in catalog order, locked entries included."""
        result: list[UpgradeStatus] = []
        for udef in self.definition.upgrades:
            cost = self.upgrade_cost(udef.id)
            unlocked = self.is_unlocked(udef.id)
            result.append(
                UpgradeStatus(
                    id=udef.id,
                    display_name=udef.display_name,
                    description=udef.description,
                    count=self.state.owned_count(udef.id),
                    unlocked=unlocked,
                    affordable=unlocked and self.state.points >= cost,
                    current_cost=cost,
                    unlock_threshold=udef.unlock_threshold,
                )
            )
        return result

    def get_affordable_purchases(self) -> list[UpgradeStatus]:
        return [s for s in self.upgrade_statuses() if s.affordable]

    def time_to_afford(self, upgrade_id: str) -> float | None:
        """Seconds until affordable at the current auto rate. None if never."""
        cost = self.upgrade_cost(upgrade_id)
        if self.state.points >= cost:
            return 0.0
        if self.state.auto_rate <= 0:
            return None
        return (cost - self.state.points) / self.state.auto_rate

    # ── Persistence ──────────────────────────────────────────────────

    def save(self) -> bool:
        """Write the state to the store. Failures are logged and dropped."""
        self._unsaved_accrual = 0.0
        if self.store is None:
            return False
        return write_state(self.store, self.definition.config.storage_key, self.state)

    # ── Private helpers ──────────────────────────────────────────────

    def _require(self, upgrade_id: str) -> UpgradeDef:
        udef = self.definition.get_upgrade(upgrade_id)
        if udef is None:
            raise UnknownUpgrade(upgrade_id)
        return udef

    def _emit_feedback(self) -> None:
        quacks = self.tracker.observe(self.state.lifetime_points)
        if quacks and self.feedback is not None:
            self.feedback(quacks)

from __future__ import annotations

from dataclasses import dataclass, field

from duckclicker.title import DEFAULT_TITLE, DEFAULT_TITLES, TitleTier
from duckclicker.upgrade import UpgradeDef

STORAGE_KEY = "rubber_duck_clicker_v1"


@dataclass
class GameConfig:
    """Top-level game configuration."""

    name: str = "Untitled"
    storage_key: str = STORAGE_KEY
    frame_rate: int = 60
    # Seconds of accrued play between automatic saves from the frame loop
    autosave_interval: float = 1.0


@dataclass
class GameDefinition:
    """Complete static definition of the game economy."""

    config: GameConfig = field(default_factory=GameConfig)
    upgrades: list[UpgradeDef] = field(default_factory=list)
    titles: list[TitleTier] = field(default_factory=lambda: list(DEFAULT_TITLES))
    default_title: str = DEFAULT_TITLE

    _upgrades_by_id: dict[str, UpgradeDef] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._upgrades_by_id = {u.id: u for u in self.upgrades}

    def get_upgrade(self, id: str) -> UpgradeDef | None:
        return self._upgrades_by_id.get(id)

    def validate(self) -> list[str]:
        """Check for common definition errors. Returns list of error messages."""
        errors: list[str] = []

        seen: set[str] = set()
        for u in self.upgrades:
            if u.id in seen:
                errors.append(f"Duplicate upgrade ID: {u.id!r}")
            seen.add(u.id)

        for u in self.upgrades:
            if u.base_cost <= 0:
                errors.append(f"Upgrade {u.id!r} has non-positive base cost {u.base_cost}")
            if u.cost_growth is not None and u.cost_growth <= 1.0:
                errors.append(
                    f"Upgrade {u.id!r} has cost growth {u.cost_growth}; must be > 1"
                )
            if u.unlock_threshold < 0:
                errors.append(
                    f"Upgrade {u.id!r} has negative unlock threshold {u.unlock_threshold}"
                )
            if u.effect.amount <= 0:
                errors.append(
                    f"Upgrade {u.id!r} has non-positive effect amount {u.effect.amount}"
                )

        seen_thresholds: set[float] = set()
        for t in self.titles:
            if t.threshold in seen_thresholds:
                errors.append(f"Duplicate title threshold: {t.threshold}")
            seen_thresholds.add(t.threshold)

        if self.config.frame_rate <= 0:
            errors.append(f"Frame rate must be positive, got {self.config.frame_rate}")

        return errors

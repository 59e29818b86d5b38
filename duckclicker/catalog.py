"""The Rubber Duck Clicker upgrade catalog."""
from __future__ import annotations

from duckclicker.cost_scaling import CostScaling
from duckclicker.definition import GameConfig, GameDefinition
from duckclicker.effect import Effect
from duckclicker.title import DEFAULT_TITLES
from duckclicker.upgrade import UpgradeDef


def define_game() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Rubber Duck Clicker"),
        upgrades=[
            UpgradeDef(
                id="better_finger",
                display_name="Stronger Finger",
                description="+1 quack per click",
                effect=Effect.click(1),
                unlock_threshold=0,
                base_cost=25,
                cost_scaling=CostScaling.exponential(1.15),
            ),
            UpgradeDef(
                id="coffee",
                display_name="Office Coffee",
                effect=Effect.auto(0.5),
                unlock_threshold=30,
                base_cost=60,
                cost_scaling=CostScaling.exponential(1.17),
            ),
            UpgradeDef(
                id="tiny_duck",
                display_name="Tiny Desk Duck",
                effect=Effect.click(2),
                unlock_threshold=120,
                base_cost=180,
                cost_scaling=CostScaling.exponential(1.18),
            ),
            UpgradeDef(
                id="duck_army",
                display_name="Duck Army",
                effect=Effect.auto(3),
                unlock_threshold=300,
                base_cost=500,
                cost_scaling=CostScaling.exponential(1.2),
            ),
            UpgradeDef(
                id="legendary_duck",
                display_name="Legendary Duck",
                effect=Effect.click(10),
                unlock_threshold=1200,
                base_cost=2500,
                cost_scaling=CostScaling.exponential(1.22),
            ),
            UpgradeDef(
                id="ci_pipeline",
                display_name="CI Pipeline Blessing",
                effect=Effect.auto(15),
                unlock_threshold=3000,
                base_cost=7000,
                cost_scaling=CostScaling.exponential(1.25),
            ),
        ],
        titles=list(DEFAULT_TITLES),
    )

# duckclicker: Rubber Duck Clicker progression engine

from duckclicker.cost_scaling import CostScaling
from duckclicker.effect import EffectType, EffectDef, Effect
from duckclicker.upgrade import UpgradeDef, UpgradeStatus
from duckclicker.title import TitleTier, DEFAULT_TITLES, title_for
from duckclicker.definition import GameDefinition, GameConfig, STORAGE_KEY
from duckclicker.catalog import define_game
from duckclicker.state import GameState
from duckclicker.errors import PurchaseError, UnknownUpgrade, Locked, InsufficientFunds
from duckclicker.feedback import FeedbackSink, FeedbackTracker
from duckclicker.persistence import (
    KeyValueStore,
    MemoryStore,
    JsonFileStore,
    load_state,
    serialize_state,
)
from duckclicker.runtime import GameRuntime, PurchaseResult
from duckclicker.loop import AccrualLoop
from duckclicker.strategy import Strategy, ClickProfile, GreedyCheapest, GreedyROI
from duckclicker.metrics import MetricsCollector
from duckclicker.simulation import Simulation
from duckclicker.report import SimulationReport, build_report
from duckclicker.formatting import format_compact, format_status, format_shop, format_text_report

__all__ = [
    # Cost
    "CostScaling",
    # Effects
    "EffectType",
    "EffectDef",
    "Effect",
    # Data model
    "UpgradeDef",
    "UpgradeStatus",
    "TitleTier",
    "DEFAULT_TITLES",
    "title_for",
    # Definition
    "GameDefinition",
    "GameConfig",
    "STORAGE_KEY",
    "define_game",
    # State
    "GameState",
    # Errors
    "PurchaseError",
    "UnknownUpgrade",
    "Locked",
    "InsufficientFunds",
    # Feedback
    "FeedbackSink",
    "FeedbackTracker",
    # Persistence
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "load_state",
    "serialize_state",
    # Runtime
    "GameRuntime",
    "PurchaseResult",
    "AccrualLoop",
    # Simulation
    "Strategy",
    "ClickProfile",
    "GreedyCheapest",
    "GreedyROI",
    "MetricsCollector",
    "Simulation",
    "SimulationReport",
    "build_report",
    # Formatting
    "format_compact",
    "format_status",
    "format_shop",
    "format_text_report",
]

"""
Engine Core - Event-sourced game state and temporal replay.

The engine is a pure function of (configuration, event log, instant):
1. init_game() builds the initial GameState from a configuration
2. init_process() wraps it with an empty event log
3. process_events() appends submitted events
4. calculate_state() replays the log, interleaved with scheduled ticks,
   through the reducer up to the requested instant
"""

from .state import GameState, GameConfig, PlayerState, Player, BoardDimensions, NO_SURVIVORS
from .events import (
    EventType,
    Direction,
    GameEvent,
    PlayerEvent,
    TickEvent,
    PlaceEvent,
    MoveEvent,
    FireEvent,
    VoteEvent,
    GiftAPEvent,
    GiftHPEvent,
    UpgradeEvent,
)
from .errors import (
    GameRuleError,
    InvalidConfigError,
    GameCompleteError,
    GameNotStartedError,
    InvalidEventError,
    RetroactiveEventError,
)
from .reducer import Reducer, RuleMode, apply_event
from .schedule import TickSchedule, open_schedule
from .replay import calculate_state
from .process import GameProcess, init_process, process_events, checkpoint
from .setup import calc_dimensions, initial_placement, init_game

__all__ = [
    "GameState",
    "GameConfig",
    "PlayerState",
    "Player",
    "BoardDimensions",
    "NO_SURVIVORS",
    "EventType",
    "Direction",
    "GameEvent",
    "PlayerEvent",
    "TickEvent",
    "PlaceEvent",
    "MoveEvent",
    "FireEvent",
    "VoteEvent",
    "GiftAPEvent",
    "GiftHPEvent",
    "UpgradeEvent",
    "GameRuleError",
    "InvalidConfigError",
    "GameCompleteError",
    "GameNotStartedError",
    "InvalidEventError",
    "RetroactiveEventError",
    "Reducer",
    "RuleMode",
    "apply_event",
    "TickSchedule",
    "open_schedule",
    "calculate_state",
    "GameProcess",
    "init_process",
    "process_events",
    "checkpoint",
    "calc_dimensions",
    "initial_placement",
    "init_game",
]

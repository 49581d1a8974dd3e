"""
Game Events - The closed set of events the engine replays.

Events represent:
1. Player actions (place, move, fire, vote, gift, upgrade)
2. Scheduled ticks (synthesized by the replay driver, never submitted)

Every state change flows through an event. Events are frozen so a log can
be shared freely between processes and replays.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar, Union


class EventType(str, Enum):
    """Tag of every event kind."""
    PLACE = "PLACE"
    MOVE = "MOVE"
    FIRE = "FIRE"
    VOTE = "VOTE"
    GIFT_AP = "GIFT_AP"
    GIFT_HP = "GIFT_HP"
    UPGRADE = "UPGRADE"
    TICK = "TICK"


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


@dataclass(frozen=True)
class TickEvent:
    """A turn boundary generated from the game's schedule."""
    submitted_at: datetime

    event_type: ClassVar[EventType] = EventType.TICK


@dataclass(frozen=True)
class PlaceEvent:
    submitted_at: datetime
    player: int
    row: int
    col: int

    event_type: ClassVar[EventType] = EventType.PLACE


@dataclass(frozen=True)
class MoveEvent:
    """
    Move one cell.

    direction is kept as the submitted string; unknown directions are
    rejected by the reducer rather than at construction.
    """
    submitted_at: datetime
    player: int
    direction: str

    event_type: ClassVar[EventType] = EventType.MOVE


@dataclass(frozen=True)
class FireEvent:
    submitted_at: datetime
    player: int
    target: int

    event_type: ClassVar[EventType] = EventType.FIRE


@dataclass(frozen=True)
class VoteEvent:
    submitted_at: datetime
    player: int
    target: int

    event_type: ClassVar[EventType] = EventType.VOTE


@dataclass(frozen=True)
class GiftAPEvent:
    submitted_at: datetime
    player: int
    target: int

    event_type: ClassVar[EventType] = EventType.GIFT_AP


@dataclass(frozen=True)
class GiftHPEvent:
    submitted_at: datetime
    player: int
    target: int

    event_type: ClassVar[EventType] = EventType.GIFT_HP


@dataclass(frozen=True)
class UpgradeEvent:
    submitted_at: datetime
    player: int

    event_type: ClassVar[EventType] = EventType.UPGRADE


GameEvent = Union[
    PlaceEvent,
    MoveEvent,
    FireEvent,
    VoteEvent,
    GiftAPEvent,
    GiftHPEvent,
    UpgradeEvent,
    TickEvent,
]

PlayerEvent = Union[
    PlaceEvent,
    MoveEvent,
    FireEvent,
    VoteEvent,
    GiftAPEvent,
    GiftHPEvent,
    UpgradeEvent,
]

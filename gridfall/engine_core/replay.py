"""
Replay - Reconstructs the game state at an instant.

The replay merges two time-ordered streams:
1. The submitted event log of a process
2. Ticks synthesized from the game's schedule

and feeds the merged stream to the reducer one event at a time. It is a
two-pointer merge: neither stream is ever materialized past its head.
"""

from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
import logging

from ..utils.time import to_iso
from .events import GameEvent, TickEvent
from .reducer import Reducer, RuleMode, default_rule_mode
from .schedule import open_schedule
from .state import GameState

if TYPE_CHECKING:
    from .process import GameProcess

logger = logging.getLogger(__name__)


def calculate_state(
    at: datetime,
    process: GameProcess,
    mode: RuleMode | None = None,
) -> GameState:
    """
    Replay a process up to and including the instant `at`.

    Ordering:
    - Events and ticks are applied in submitted_at order
    - A tick wins a tie with a submitted event
    - Events sharing an instant keep their log order

    Events at or before process.updated_at are already folded into
    process.state and are skipped. Replay stops at the first event after
    `at`, or once the game has a winner. Reducer errors propagate; the
    process itself is never modified.
    """
    reducer = Reducer(mode=mode or default_rule_mode())
    config = process.state.config
    schedule = open_schedule(config.turn_interval, config.turn_interval_tz, config.start_at)

    current = process.state.clone()
    cursor = 0
    applied = 0
    while True:
        event: GameEvent
        if cursor < len(process.events) and process.events[cursor].submitted_at < schedule.peek():
            event = process.events[cursor]
            cursor += 1
        else:
            event = TickEvent(submitted_at=next(schedule))

        if event.submitted_at <= process.updated_at:
            continue
        if event.submitted_at > at or current.is_complete:
            break

        current = reducer.apply(current, event)
        applied += 1

    logger.debug(
        "replayed %d event(s) up to %s (winner=%s)",
        applied,
        to_iso(at),
        current.winner,
    )
    return current

"""
Game Process - The durable unit a caller stores between requests.

A process pairs:
- The state folded up to updated_at
- The full, append-only event log
- updated_at, the last instant already folded into the state

LIFECYCLE:
1. init_process() once, from the initial state
2. process_events() for every batch of submitted events
3. calculate_state() (see replay) as often as needed
4. checkpoint() to fold the log into the stored state

Callers must serialize process_events() per game: the retroactivity check
assumes a single writer.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime
import logging

from ..utils.time import to_iso
from .errors import RetroactiveEventError
from .events import GameEvent
from .reducer import RuleMode
from .replay import calculate_state
from .state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameProcess:
    state: GameState
    updated_at: datetime
    events: tuple[GameEvent, ...] = ()


def init_process(state: GameState) -> GameProcess:
    """Create the process for a freshly initialised game."""
    return GameProcess(state=state, events=(), updated_at=state.config.start_at)


def process_events(process: GameProcess, events: list[GameEvent]) -> GameProcess:
    """
    Append submitted events to the process log.

    The batch is stably sorted by submitted_at. Raises RetroactiveEventError
    if its earliest event is not strictly after process.updated_at.
    The state and updated_at are left as they are.
    """
    if not events:
        return process

    batch = sorted((replace(e) for e in events), key=lambda e: e.submitted_at)
    if batch[0].submitted_at <= process.updated_at:
        raise RetroactiveEventError("invalid events: retroactive events detected")

    logger.info(
        "appending %d event(s) from %s to %s",
        len(batch),
        to_iso(batch[0].submitted_at),
        to_iso(batch[-1].submitted_at),
    )
    return replace(process, events=process.events + tuple(batch))


def checkpoint(process: GameProcess, at: datetime, mode: RuleMode | None = None) -> GameProcess:
    """
    Fold everything up to `at` into the stored state.

    Later appends must then be strictly after `at`. A checkpoint earlier
    than updated_at leaves the process as it is.
    """
    if at <= process.updated_at:
        return process

    state = calculate_state(at, process, mode=mode)
    logger.info("checkpoint at %s (winner=%s)", to_iso(at), state.winner)
    return replace(process, state=state, updated_at=at)

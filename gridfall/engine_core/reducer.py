"""
Reducer - Applies one event to a game state.

The reducer is the single point of state change.
All transitions go through Reducer.apply().

Design principles:
- Pure function: (state, event) -> new_state
- The given state is never touched: preconditions read it, changes land on
  a deep clone
- Failures raise a GameRuleError subclass; there is no partial application

Rule modes:
- COMPATIBLE reproduces the rules exactly as existing games were played,
  quirks included: RIGHT moves up, distance reuses the actor's column for
  the row term, VOTE only accepts the highest-index player and above, and
  PLACE is gated on AP without spending it.
- CORRECTED fixes those quirks and also requires a living GIFT_HP target.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable
import logging

from .. import config
from ..utils.time import to_iso
from .errors import GameCompleteError, GameNotStartedError, InvalidEventError
from .events import (
    Direction,
    EventType,
    FireEvent,
    GameEvent,
    GiftAPEvent,
    GiftHPEvent,
    MoveEvent,
    PlaceEvent,
    PlayerEvent,
    TickEvent,
    UpgradeEvent,
    VoteEvent,
)
from .state import GameState, PlayerState

logger = logging.getLogger(__name__)

UPGRADE_COST = 3
JURY_VOTES_PER_AP = 3


class RuleMode(str, Enum):
    COMPATIBLE = "compatible"
    CORRECTED = "corrected"


_VECTORS: dict[str, tuple[int, int]] = {
    Direction.UP.value: (-1, 0),
    Direction.DOWN.value: (1, 0),
    Direction.LEFT.value: (0, -1),
    Direction.RIGHT.value: (-1, 0),
}

_CORRECTED_VECTORS: dict[str, tuple[int, int]] = {
    **_VECTORS,
    Direction.RIGHT.value: (0, 1),
}


def default_rule_mode() -> RuleMode:
    """Rule mode selected by GRIDFALL_RULE_MODE."""
    return RuleMode(config.GRIDFALL_RULE_MODE.lower())


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class Reducer:
    """
    Reducer applies events to game state.

    Stateless - all state is in GameState.
    """
    mode: RuleMode = RuleMode.COMPATIBLE

    def apply(self, state: GameState, event: GameEvent) -> GameState:
        """
        Apply an event to the game state.

        Returns the new state or raises a GameRuleError.
        """
        if state.is_complete:
            raise GameCompleteError("game already complete")
        if event.submitted_at <= state.config.start_at:
            raise GameNotStartedError("game has not yet started")

        handler = self._get_handler(getattr(event, "event_type", None))
        if handler is None:
            raise InvalidEventError("invalid action: invalid action type")
        if not isinstance(event, TickEvent):
            self._validate_actor(state, event)

        next_state = state.clone()
        handler(state, next_state, event)
        next_state.evaluate_winner()

        logger.debug(
            "applied %s at %s (winner=%s)",
            event.event_type.value,
            to_iso(event.submitted_at),
            next_state.winner,
        )
        return next_state

    def _validate_actor(self, state: GameState, event: PlayerEvent) -> None:
        player = getattr(event, "player", None)
        if not _is_index(player) or not 0 <= player < state.num_players:
            raise InvalidEventError("invalid action: invalid player")
        if state.get_player(player).disqualified:
            raise InvalidEventError("invalid action: player has been disqualified")

    def _get_handler(self, event_type: EventType | None) -> Callable | None:
        """Get the handler function for an event type."""
        handlers = {
            EventType.TICK: self._handle_tick,
            EventType.PLACE: self._handle_place,
            EventType.MOVE: self._handle_move,
            EventType.FIRE: self._handle_fire,
            EventType.GIFT_AP: self._handle_gift_ap,
            EventType.GIFT_HP: self._handle_gift_hp,
            EventType.UPGRADE: self._handle_upgrade,
            EventType.VOTE: self._handle_vote,
        }
        return handlers.get(event_type)

    # -------------------------------------------------------------------------
    # Scheduled events
    # -------------------------------------------------------------------------

    def _handle_tick(self, state: GameState, next_state: GameState, event: TickEvent) -> None:
        """
        Close a turn.

        Unplaced players are disqualified, jury votes are tallied and every
        living placed player is paid its AP for the turn.
        """
        for ps in next_state.player_states:
            if not ps.placed:
                ps.alive = False
                ps.disqualified = True

        vote_counts = [0] * next_state.num_players
        for voter, target in enumerate(next_state.votes):
            if target is None:
                continue
            juror = next_state.player_states[voter]
            if juror.disqualified or juror.alive:
                continue
            # Compatible VOTE validation lets through indices past the last player
            if 0 <= target < next_state.num_players and next_state.player_states[target].alive:
                vote_counts[target] += 1

        for i, ps in enumerate(next_state.player_states):
            if not ps.alive or not ps.placed:
                continue
            ps.ap += 1 + vote_counts[i] // JURY_VOTES_PER_AP

        next_state.votes = [None] * next_state.num_players

    # -------------------------------------------------------------------------
    # Player events
    # -------------------------------------------------------------------------

    def _handle_place(self, state: GameState, next_state: GameState, event: PlaceEvent) -> None:
        """Handle initial placement. No AP is spent."""
        ps = state.get_player(event.player)
        if ps.placed:
            raise InvalidEventError("invalid action: player already placed")
        if self.mode is RuleMode.COMPATIBLE and ps.ap < 1:
            raise InvalidEventError("invalid action: player does not have sufficient AP")

        row, col = event.row, event.col
        if not self._in_bounds(state, row, col):
            raise InvalidEventError("invalid placement: out of bounds")
        if state.occupant(row, col) is not None:
            raise InvalidEventError("invalid placement: space already occupied")

        actor = next_state.player_states[event.player]
        actor.placed = True
        actor.row = row
        actor.col = col
        next_state.board[row][col] = event.player

    def _handle_move(self, state: GameState, next_state: GameState, event: MoveEvent) -> None:
        """Handle a one-cell move."""
        ps = state.get_player(event.player)
        if not ps.placed:
            raise InvalidEventError("invalid movement: player has not yet placed")
        if not ps.alive:
            raise InvalidEventError("invalid movement: player has already died")
        if ps.ap < 1:
            raise InvalidEventError("invalid action: player does not have sufficient AP")

        vectors = _CORRECTED_VECTORS if self.mode is RuleMode.CORRECTED else _VECTORS
        vector = vectors.get(event.direction)
        if vector is None:
            raise InvalidEventError("invalid movement")

        row = ps.row + vector[0]
        col = ps.col + vector[1]
        if not self._in_bounds(state, row, col):
            raise InvalidEventError("invalid movement: out of bounds")
        if state.occupant(row, col) is not None:
            raise InvalidEventError("invalid movement: space already occupied")

        actor = next_state.player_states[event.player]
        actor.ap -= 1
        next_state.board[ps.row][ps.col] = None
        next_state.board[row][col] = event.player
        actor.row = row
        actor.col = col

    def _handle_fire(self, state: GameState, next_state: GameState, event: FireEvent) -> None:
        """
        Handle an attack.

        An attack that drops the target to 0 HP kills it: the target's
        votes are voided and its AP is taken by the attacker.
        """
        ps = state.get_player(event.player)
        if ps.ap < 1:
            raise InvalidEventError("invalid action: player does not have sufficient AP")
        target = event.target
        if not self._valid_target(state, target):
            raise InvalidEventError("invalid action: invalid player target")
        if self._distance(ps, state.player_states[target]) > ps.range:
            raise InvalidEventError("invalid action: target out of range")

        actor = next_state.player_states[event.player]
        victim = next_state.player_states[target]
        victim.hp -= 1
        actor.ap -= 1

        if victim.hp <= 0:
            victim.alive = False
            next_state.votes = [
                None if i == target or v == target else v
                for i, v in enumerate(next_state.votes)
            ]
            actor.ap += victim.ap
            victim.ap = 0

    def _handle_gift_ap(self, state: GameState, next_state: GameState, event: GiftAPEvent) -> None:
        ps = state.get_player(event.player)
        if ps.ap < 1:
            raise InvalidEventError("invalid action: player does not have sufficient AP")
        target = event.target
        if not self._valid_target(state, target):
            raise InvalidEventError("invalid action: invalid player target")
        if not state.player_states[target].alive:
            raise InvalidEventError("invalid action: target is already dead")
        if self._distance(ps, state.player_states[target]) > ps.range:
            raise InvalidEventError("invalid action: target out of range")

        next_state.player_states[target].ap += 1
        next_state.player_states[event.player].ap -= 1

    def _handle_gift_hp(self, state: GameState, next_state: GameState, event: GiftHPEvent) -> None:
        """Handle an HP gift. Giving away the last HP kills the giver."""
        ps = state.get_player(event.player)
        if ps.hp < 1:
            raise InvalidEventError("invalid action: player does not have sufficient HP")
        target = event.target
        if not self._valid_target(state, target):
            raise InvalidEventError("invalid action: invalid player target")
        if self.mode is RuleMode.CORRECTED and not state.player_states[target].alive:
            raise InvalidEventError("invalid action: target is already dead")
        if self._distance(ps, state.player_states[target]) > ps.range:
            raise InvalidEventError("invalid action: target out of range")

        actor = next_state.player_states[event.player]
        next_state.player_states[target].hp += 1
        actor.hp -= 1
        if actor.hp <= 0:
            actor.alive = False

    def _handle_upgrade(self, state: GameState, next_state: GameState, event: UpgradeEvent) -> None:
        if state.player_states[event.player].ap < UPGRADE_COST:
            raise InvalidEventError("invalid action: player does not have sufficient AP")

        actor = next_state.player_states[event.player]
        actor.ap -= UPGRADE_COST
        actor.range += 1

    def _handle_vote(self, state: GameState, next_state: GameState, event: VoteEvent) -> None:
        """Handle a jury vote. Only dead players vote, once per turn."""
        if state.player_states[event.player].alive:
            raise InvalidEventError("invalid action: you may only vote when dead")
        if state.votes[event.player] is not None:
            raise InvalidEventError("invalid action: you may only vote once per round")

        target = event.target
        if self.mode is RuleMode.CORRECTED:
            valid = self._valid_target(state, target)
        else:
            valid = _is_index(target) and target >= 0 and not target < state.num_players - 1
        if not valid:
            raise InvalidEventError("invalid action: invalid target player")

        next_state.votes[event.player] = target

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _in_bounds(self, state: GameState, row: int, col: int) -> bool:
        """Whether a cell is playable. The last board row never is."""
        dims = state.config.dimensions
        return 0 <= row < dims.height - 1 and 0 <= col < dims.width

    def _valid_target(self, state: GameState, target: object) -> bool:
        return _is_index(target) and 0 <= target < state.num_players

    def _distance(self, actor: PlayerState, target: PlayerState) -> int:
        if self.mode is RuleMode.CORRECTED:
            return max(abs(target.col - actor.col), abs(target.row - actor.row))
        return max(abs(target.col - actor.col), abs(target.row - actor.col))


def apply_event(state: GameState, event: GameEvent, mode: RuleMode = RuleMode.COMPATIBLE) -> GameState:
    """
    Convenience function to apply an event.

    Creates a Reducer and applies the event.
    """
    reducer = Reducer(mode=mode)
    return reducer.apply(state, event)

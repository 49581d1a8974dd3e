"""
Game State - Configuration, per-player state, board and votes.

Design principles:
- Snapshot per transition: the reducer never mutates a state it was given,
  it clones and mutates the clone
- Index-addressed: a player's index in the configuration is the only
  identifier used inside the engine
- Serializable: see gridfall.schema for the JSON wire shape
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from copy import deepcopy


STARTING_RANGE = 2
STARTING_AP = 1
STARTING_HP = 3

# Winner value when nobody survives
NO_SURVIVORS = -1


@dataclass
class Player:
    """A participant as listed in the configuration."""
    id: str


@dataclass
class BoardDimensions:
    height: int
    width: int


@dataclass
class GameConfig:
    """
    Game configuration.

    Immutable once the game starts. The order of `players` fixes each
    player's index for the whole game.

    starting_ap/starting_hp default to 1 and 3. Earlier releases started
    every player at 0 AP and 0 HP, which left PLACE unaffordable under the
    compatible rules; pass 0 explicitly to reproduce those games.
    """
    players: list[Player]
    dimensions: BoardDimensions
    start_at: datetime
    turn_interval: str  # 5-field cron expression
    turn_interval_tz: str  # IANA timezone the cron expression is evaluated in
    starting_ap: int = STARTING_AP
    starting_hp: int = STARTING_HP

    @property
    def num_players(self) -> int:
        return len(self.players)


@dataclass
class PlayerState:
    """
    Mutable-per-transition state of one player.

    row/col stay at -1 until the player has placed.
    """
    placed: bool = False
    alive: bool = True
    disqualified: bool = False
    row: int = -1
    col: int = -1
    range: int = STARTING_RANGE
    ap: int = 0
    hp: int = 0


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    winner is None while the game is undecided, the index of the last
    survivor, or NO_SURVIVORS. Either decided value is terminal.
    """
    config: GameConfig
    player_states: list[PlayerState] = field(default_factory=list)
    board: list[list[int | None]] = field(default_factory=list)
    votes: list[int | None] = field(default_factory=list)
    winner: int | None = None

    @property
    def num_players(self) -> int:
        return len(self.player_states)

    @property
    def is_complete(self) -> bool:
        return self.winner is not None

    def get_player(self, index: int) -> PlayerState:
        return self.player_states[index]

    def occupant(self, row: int, col: int) -> int | None:
        """Get the index of the player occupying a cell, if any."""
        return self.board[row][col]

    def survivors(self) -> list[int]:
        """Indices of every player still alive."""
        return [i for i, ps in enumerate(self.player_states) if ps.alive]

    def evaluate_winner(self) -> None:
        """Decide the winner from the survivors (in place, on a fresh clone)."""
        survivors = self.survivors()
        if len(survivors) == 1:
            self.winner = survivors[0]
        elif len(survivors) == 0:
            self.winner = NO_SURVIVORS

    def clone(self) -> GameState:
        """Deep copy the state. Nothing is shared with the source state."""
        return deepcopy(self)


def empty_board(dimensions: BoardDimensions) -> list[list[int | None]]:
    return [[None] * dimensions.width for _ in range(dimensions.height)]

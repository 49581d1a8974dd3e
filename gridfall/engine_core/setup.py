"""
Game Setup - Creates the initial game state.

This module handles:
- Sizing the board for a player count
- Random non-colliding starting cells
- Validating the configuration and building the initial state
"""

from __future__ import annotations
import math
import random
from datetime import datetime
from typing import Any

from .events import PlaceEvent
from .state import GameConfig, GameState, PlayerState, empty_board

# Cells per player used when sizing the board / the placement grid
BOARD_CELLS_PER_PLAYER = 14
PLACEMENT_CELLS_PER_PLAYER = 16


def calc_dimensions(player_count: int) -> int:
    """Edge length of a square board for the given player count."""
    return math.ceil(math.sqrt(BOARD_CELLS_PER_PLAYER * player_count))


def initial_placement(
    n: int,
    submitted_at: datetime,
    random_seed: int | None = None,
) -> list[PlaceEvent]:
    """
    Pick a distinct starting cell for each of n players.

    Runs a partial Fisher-Yates shuffle over a ceil(sqrt(16 n)) square grid.
    The grid is larger than calc_dimensions() sizes the board, so callers
    must fit the result to their board. Pass random_seed to make the result
    reproducible.

    Returns one PLACE event per player, in player order.
    """
    rng = random.Random(random_seed)
    dim = math.ceil(math.sqrt(PLACEMENT_CELLS_PER_PLAYER * n))
    cells = list(range(dim * dim))

    # The swap partner never reaches the last cell
    for i in range(n):
        j = i + math.floor(rng.random() * (len(cells) - 1 - i))
        cells[i], cells[j] = cells[j], cells[i]

    return [
        PlaceEvent(
            submitted_at=submitted_at,
            player=player,
            row=cell // dim,
            col=cell % dim,
        )
        for player, cell in enumerate(cells[:n])
    ]


def init_game(config: GameConfig | dict[str, Any]) -> GameState:
    """
    Set up a new game.

    Args:
        config: A GameConfig or its wire-format mapping

    Returns:
        Initial GameState. Its configuration is an independent copy.

    Raises:
        InvalidConfigError: if the configuration does not validate
    """
    from ..schema.validation import load_config

    game_config = load_config(config)

    player_states = [
        PlayerState(ap=game_config.starting_ap, hp=game_config.starting_hp)
        for _ in game_config.players
    ]

    return GameState(
        config=game_config,
        player_states=player_states,
        board=empty_board(game_config.dimensions),
        votes=[None] * len(player_states),
        winner=None,
    )

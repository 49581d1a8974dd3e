"""
Pytest fixtures for Gridfall tests.
"""

import pytest

from ..engine_core.process import GameProcess, init_process
from ..engine_core.setup import init_game
from ..engine_core.state import GameState
from .helpers import make_config, placed_state


@pytest.fixture
def wire_config() -> dict:
    """Two-player configuration in wire format."""
    return make_config(num_players=2)


@pytest.fixture
def new_game(wire_config: dict) -> GameState:
    """A fresh two-player game; nobody has placed yet."""
    return init_game(wire_config)


@pytest.fixture
def new_process(new_game: GameState) -> GameProcess:
    return init_process(new_game)


@pytest.fixture
def duel_state() -> GameState:
    """Two placed players on row 3, two columns apart and in range of each other."""
    return placed_state([(3, 3), (3, 5)])


@pytest.fixture
def jury_state() -> GameState:
    """
    Five placed players: 0 and 1 alive, 2-4 dead and eligible to vote.
    """
    state = placed_state([(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)])
    for i in (2, 3, 4):
        state.player_states[i].alive = False
        state.player_states[i].hp = 0
    return state

"""Builders shared by the test modules."""

from datetime import datetime, timezone

from ..engine_core.setup import init_game
from ..engine_core.state import GameState

START = datetime(2023, 9, 8, 4, 0, tzinfo=timezone.utc)  # a Friday
SCHEDULE = "0 12 * * 1-5"  # noon on weekdays
SCHEDULE_TZ = "Asia/Seoul"  # noon in Seoul is 03:00 UTC


def at(day: int, hour: int = 4, minute: int = 0) -> datetime:
    """An instant in September 2023 (UTC)."""
    return datetime(2023, 9, day, hour, minute, tzinfo=timezone.utc)


def make_config(num_players: int = 2, height: int = 10, width: int = 10, **extra) -> dict:
    """Wire-format configuration."""
    config = {
        "players": [{"id": f"p{i}"} for i in range(num_players)],
        "dimensions": {"height": height, "width": width},
        "startAt": "2023-09-08T04:00:00.000Z",
        "turnInterval": SCHEDULE,
        "turnIntervalTZ": SCHEDULE_TZ,
    }
    config.update(extra)
    return config


def placed_state(
    positions: list[tuple[int, int]],
    ap: int = 1,
    hp: int = 3,
    height: int = 10,
    width: int = 10,
) -> GameState:
    """A state where player i already stands on positions[i]."""
    state = init_game(make_config(len(positions), height, width))
    for i, (row, col) in enumerate(positions):
        ps = state.player_states[i]
        ps.placed = True
        ps.row = row
        ps.col = col
        ps.ap = ap
        ps.hp = hp
        state.board[row][col] = i
    return state

"""
Pytest configuration and shared fixtures.
"""
import random
from typing import Iterable, List, Tuple

import pytest

from minesuite import (
    Board,
    BoardConfiguration,
    Cell,
    GameClock,
    GameSession,
    Leaderboard,
)


# ============================================================================
# Test Doubles
# ============================================================================

class ScriptedRandom(random.Random):
    """Random source whose randrange replays a fixed list of values."""

    def __init__(self, coordinates: Iterable[Tuple[int, int]]) -> None:
        super().__init__(0)
        self.values: List[int] = [v for pair in coordinates for v in pair]

    def randrange(self, *args, **kwargs) -> int:
        return self.values.pop(0)


class FakeTime:
    """Manually advanced time source for GameClock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_session(
    config: BoardConfiguration,
    mines: Iterable[Tuple[int, int]],
    leaderboard: Leaderboard = None,
    fake_time: FakeTime = None,
) -> GameSession:
    """Session whose first reveal places exactly the given mines."""
    clock = GameClock(fake_time or FakeTime())
    return GameSession(
        config,
        leaderboard=leaderboard,
        rng=ScriptedRandom(mines),
        clock=clock,
    )


# ============================================================================
# Layouts
# ============================================================================

# 6x6, mines packed into the bottom-right 2x2 block.
CORNER_CONFIG = BoardConfiguration(mines=4, rows=6, columns=6)
CORNER_MINES = [(4, 4), (5, 4), (4, 5), (5, 5)]

# 6x6, a wall of mines down column 3 splitting the board in two.
WALL_CONFIG = BoardConfiguration(mines=6, rows=6, columns=6)
WALL_MINES = [(3, row) for row in range(6)]

# 6x6, mines ringing (4, 4) so that (4, 3), (3, 4) and (4, 4) stay hidden
# after the first reveal at (0, 0). (4, 2) is revealed with count 2.
RING_CONFIG = BoardConfiguration(mines=6, rows=6, columns=6)
RING_MINES = [(3, 3), (5, 3), (5, 4), (3, 5), (4, 5), (5, 5)]


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def easy_config() -> BoardConfiguration:
    """Easy preset: 10 mines on 8x8."""
    return BoardConfiguration(mines=10, rows=8, columns=8)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def easy_board(easy_config: BoardConfiguration, rng: random.Random) -> Board:
    """Easy board armed around a first move at (4, 4)."""
    board = Board(easy_config)
    board.place_mines((4, 4), rng)
    return board


@pytest.fixture
def corner_board() -> Board:
    board = Board(CORNER_CONFIG)
    board.set_mine_locations(CORNER_MINES)
    return board


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def leaderboard() -> Leaderboard:
    return Leaderboard()


@pytest.fixture
def corner_session(fake_time: FakeTime, leaderboard: Leaderboard) -> GameSession:
    """Session on the corner layout; nothing revealed yet."""
    return make_session(CORNER_CONFIG, CORNER_MINES, leaderboard, fake_time)


@pytest.fixture
def wall_session(fake_time: FakeTime, leaderboard: Leaderboard) -> GameSession:
    """Session on the wall layout; nothing revealed yet."""
    return make_session(WALL_CONFIG, WALL_MINES, leaderboard, fake_time)


@pytest.fixture
def ring_session(fake_time: FakeTime, leaderboard: Leaderboard) -> GameSession:
    """Session on the ring layout, already opened at (0, 0)."""
    session = make_session(RING_CONFIG, RING_MINES, leaderboard, fake_time)
    session.reveal((0, 0))
    return session


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(armed=True)

"""
Minesweeper rules engine.

Provides board generation, reveal and marking rules, win/loss detection,
and a best-time leaderboard. Presentation is left to the caller, which
applies the change events returned by each GameSession action.
"""
from .cell import Cell, Marking
from .config import (
    BoardConfiguration,
    GameStatus,
    InvalidConfigurationError,
    Mode,
    EASY,
    MEDIUM,
    HARD,
    MIN_AXIS_SIZE,
    MAX_AXIS_SIZE,
    MIN_MINE_PERCENT,
    MAX_MINE_PERCENT,
    preset,
    random_configuration,
    status_messages,
    validate,
)
from .board import Board
from .clock import GameClock
from .events import (
    BoardCreated,
    CellMarkingChanged,
    CellRevealed,
    GameEvent,
    GameLost,
    GameWon,
    MarkingRatioChanged,
)
from .leaderboard import Leaderboard, LeaderboardEntry, MAX_ENTRIES
from .session import GameSession, GameState
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "Marking",
    "BoardConfiguration",
    "GameStatus",
    "InvalidConfigurationError",
    "Mode",
    "EASY",
    "MEDIUM",
    "HARD",
    "MIN_AXIS_SIZE",
    "MAX_AXIS_SIZE",
    "MIN_MINE_PERCENT",
    "MAX_MINE_PERCENT",
    "preset",
    "random_configuration",
    "status_messages",
    "validate",
    "Board",
    "GameClock",
    "BoardCreated",
    "CellMarkingChanged",
    "CellRevealed",
    "GameEvent",
    "GameLost",
    "GameWon",
    "MarkingRatioChanged",
    "Leaderboard",
    "LeaderboardEntry",
    "MAX_ENTRIES",
    "GameSession",
    "GameState",
    "MinesweeperEnv",
]

"""
Change events emitted by a game session.

The session never calls into the presentation layer; every action returns
the list of events the presentation layer should apply, in order.
"""
from dataclasses import dataclass
from typing import Tuple, Union

from .cell import Marking

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class BoardCreated:
    """The board was materialized on the first reveal."""

    rows: int
    columns: int


@dataclass(frozen=True)
class CellRevealed:
    """A safe cell was uncovered and should show its proximity count."""

    coordinate: Coordinate
    proximity_count: int


@dataclass(frozen=True)
class CellMarkingChanged:
    """A hidden cell moved to a new marking state."""

    coordinate: Coordinate
    marking: Marking


@dataclass(frozen=True)
class MarkingRatioChanged:
    """Flags placed against the total number of mines."""

    marked: int
    total: int


@dataclass(frozen=True)
class GameWon:
    """
    Every mine is flagged and every other cell uncovered.

    Attributes:
        elapsed_ms: Play time excluding pauses.
        is_new_record: Whether the time made it onto the leaderboard.
    """

    elapsed_ms: int
    is_new_record: bool


@dataclass(frozen=True)
class GameLost:
    """
    A mine was revealed.

    Attributes:
        mine_coordinates: Every mine on the board, in placement order.
        losing_coordinate: The mine that was stepped on.
    """

    mine_coordinates: Tuple[Coordinate, ...]
    losing_coordinate: Coordinate


GameEvent = Union[
    BoardCreated,
    CellRevealed,
    CellMarkingChanged,
    MarkingRatioChanged,
    GameWon,
    GameLost,
]

"""
Cell module for the minesweeper rules engine.

Represents one unit of land on the board: whether it hides a mine, how many
mines surround it, how the player has marked it, and whether it is revealed.
"""
from enum import Enum
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class Marking(Enum):
    """Marking states a player can cycle through on a hidden cell."""

    NOT_MARKED = 0
    MARKED = 1
    QUESTIONED = 2

    def next(self) -> "Marking":
        """Following state in the NOT_MARKED -> MARKED -> QUESTIONED cycle."""
        return _MARKING_CYCLE[self]


_MARKING_CYCLE = {
    Marking.NOT_MARKED: Marking.MARKED,
    Marking.MARKED: Marking.QUESTIONED,
    Marking.QUESTIONED: Marking.NOT_MARKED,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the minesweeper grid.

    Attributes:
        armed: Whether this cell contains a mine.
        proximity_count: Count of mines in neighboring cells (0-8).
        marking: Current player marking.
        revealed: Whether the cell has been uncovered.
    """

    armed: bool = False
    proximity_count: int = 0
    marking: Marking = Marking.NOT_MARKED
    revealed: bool = False

    def increment_proximity_count(self) -> None:
        """Record one more armed neighbor."""
        self.proximity_count += 1

    def next_marking(self) -> Marking:
        """
        Advance the marking cycle.

        Returns:
            The marking state after the change.
        """
        self.marking = self.marking.next()
        return self.marking

    def reveal(self) -> None:
        """Uncover the cell, dropping a question mark if it carries one."""
        self.revealed = True
        if self.marking is Marking.QUESTIONED:
            self.marking = Marking.NOT_MARKED

    @property
    def is_marked(self) -> bool:
        """Check if cell carries a flag."""
        return self.marking is Marking.MARKED

    @property
    def is_activated(self) -> bool:
        """Check if the cell has been revealed or flagged."""
        return self.revealed or self.marking is Marking.MARKED

    def to_observation(self) -> int:
        """
        Convert cell to an observation value.

        Returns:
            -1: Hidden cell
            -2: Marked cell
            -3: Questioned cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.marking is Marking.MARKED:
            return -2
        if self.marking is Marking.QUESTIONED:
            return -3
        if not self.revealed:
            return -1
        if self.armed:
            return 9
        return self.proximity_count

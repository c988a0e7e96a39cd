"""
Board module for the minesweeper rules engine.

Implements the grid of cells with mine placement around a safe first move,
proximity counting, and bounds-checked adjacency queries.

Coordinates are (column, row) pairs: index 0 is x (the column) and index 1
is y (the row). The grid itself is stored row-major, so every lookup maps
(x, y) to grid[y][x].
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, Marking
from .config import BoardConfiguration

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns the grid of cells for one game and the coordinates of its mines.
    Shape is fixed at creation; only per-cell fields change afterwards.
    """

    config: BoardConfiguration
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _mine_locations: List[Coordinate] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a grid of unarmed, hidden cells."""
        self._grid = [
            [Cell() for _ in range(self.config.columns)]
            for _ in range(self.config.rows)
        ]

    def place_mines(
        self, seed: Coordinate, rng: Optional[random.Random] = None
    ) -> None:
        """
        Arm the board, keeping the 3x3 zone around the seed mine-free.

        Coordinates are sampled uniformly and rejected when already chosen
        or inside the safe zone, until the configured number of distinct
        mines has been accepted. Proximity counts are generated afterwards.

        Args:
            seed: (column, row) of the first move.
            rng: Random source. A fresh unseeded one is used when omitted.

        Raises:
            RuntimeError: If mines were already placed.
            ValueError: If the cells outside the safe zone cannot hold
                the configured number of mines.
        """
        if self._mine_locations:
            raise RuntimeError("Mines have already been placed")

        rng = rng or random.Random()
        safe_zone = set(self.safe_zone(seed))
        available = self.config.area - len(safe_zone)
        if self.config.mines > available:
            raise ValueError(
                f"Cannot place {self.config.mines} mines outside the safe "
                f"zone of {seed} ({available} cells available)"
            )

        chosen: Set[Coordinate] = set()
        locations: List[Coordinate] = []
        while len(chosen) < self.config.mines:
            candidate = (
                rng.randrange(self.config.columns),
                rng.randrange(self.config.rows),
            )
            if candidate in chosen or candidate in safe_zone:
                continue
            chosen.add(candidate)
            locations.append(candidate)

        self.set_mine_locations(locations)
        logger.debug(
            "Placed %d mines on %dx%d board, safe seed %s",
            self.config.mines, self.config.rows, self.config.columns, seed,
        )

    def set_mine_locations(self, locations: List[Coordinate]) -> None:
        """
        Arm the given coordinates and generate proximity values.

        Args:
            locations: Distinct in-bounds (column, row) coordinates, one per
                configured mine.

        Raises:
            RuntimeError: If mines were already placed.
            ValueError: If the coordinates are not distinct or do not match
                the configured mine count.
            IndexError: If a coordinate lies outside the board.
        """
        if self._mine_locations:
            raise RuntimeError("Mines have already been placed")
        locations = [tuple(coordinate) for coordinate in locations]
        if len(set(locations)) != len(locations):
            raise ValueError("Mine coordinates must be distinct")
        if len(locations) != self.config.mines:
            raise ValueError(
                f"Expected {self.config.mines} mines, got {len(locations)}"
            )
        for coordinate in locations:
            if not self.is_in_bounds(coordinate):
                raise IndexError(
                    f"Coordinate {coordinate} is outside the board"
                )

        for coordinate in locations:
            self.get_cell(coordinate).armed = True
        self._mine_locations = locations
        self.generate_proximity_values()

    def generate_proximity_values(self) -> None:
        """Increment the proximity count of every neighbor of every mine."""
        for position in self._mine_locations:
            for coordinate in self.get_adjacent_nodes(position):
                self.get_cell(coordinate).increment_proximity_count()

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_adjacent_nodes(self, coordinate: Coordinate) -> List[Coordinate]:
        """
        Get valid neighboring cell positions.

        Args:
            coordinate: (column, row) of the center cell.

        Returns:
            In-bounds (column, row) neighbors, excluding the center.
        """
        column, row = coordinate
        neighbors = []
        for delta_x in (-1, 0, 1):
            for delta_y in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                x = column + delta_x
                y = row + delta_y
                if (self.bounds_check(x, self.config.columns - 1)
                        and self.bounds_check(y, self.config.rows - 1)):
                    neighbors.append((x, y))
        return neighbors

    def safe_zone(self, coordinate: Coordinate) -> List[Coordinate]:
        """The coordinate itself plus its in-bounds neighbors."""
        return [coordinate] + self.get_adjacent_nodes(coordinate)

    @staticmethod
    def bounds_check(value: int, boundary: int) -> bool:
        """Check that 0 <= value <= boundary."""
        return 0 <= value <= boundary

    def is_in_bounds(self, coordinate: Coordinate) -> bool:
        """Check that a (column, row) coordinate lies on the board."""
        column, row = coordinate
        return (self.bounds_check(column, self.config.columns - 1)
                and self.bounds_check(row, self.config.rows - 1))

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def get_cell(self, coordinate: Coordinate) -> Cell:
        """
        Get the cell at a (column, row) coordinate.

        Raises:
            IndexError: If the coordinate lies outside the board.
        """
        if not self.is_in_bounds(coordinate):
            raise IndexError(f"Coordinate {coordinate} is outside the board")
        column, row = coordinate
        return self._grid[row][column]

    @property
    def mine_locations(self) -> List[Coordinate]:
        """Mine coordinates in placement order."""
        return list(self._mine_locations)

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def columns(self) -> int:
        return self.config.columns

    def iter_cells(self) -> Iterator[Tuple[Coordinate, Cell]]:
        """Yield ((column, row), cell) pairs in row-major order."""
        for row, cells in enumerate(self._grid):
            for column, cell in enumerate(cells):
                yield (column, row), cell

    def unactivated_count(self) -> int:
        """Count cells that are neither revealed nor flagged."""
        return sum(
            1 for row in self._grid for cell in row if not cell.is_activated
        )

    def all_activated(self) -> bool:
        """Check that no cell remains both hidden and unflagged."""
        return all(cell.is_activated for row in self._grid for cell in row)

    def count_marked_neighbors(self, coordinate: Coordinate) -> int:
        """Count flagged cells around a coordinate."""
        return sum(
            1 for neighbor in self.get_adjacent_nodes(coordinate)
            if self.get_cell(neighbor).marking is Marking.MARKED
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array indexed [row, column].

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = marked
                -3 = questioned
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.rows, self.config.columns), dtype=np.int8)
        for (column, row), cell in self.iter_cells():
            obs[row, column] = cell.to_observation()
        return obs

    def mine_mask(self) -> np.ndarray:
        """Boolean array indexed [row, column], True where armed."""
        mask = np.zeros((self.config.rows, self.config.columns), dtype=bool)
        for column, row in self._mine_locations:
            mask[row, column] = True
        return mask

    def proximity_grid(self) -> np.ndarray:
        """Proximity counts indexed [row, column]."""
        counts = np.zeros(
            (self.config.rows, self.config.columns), dtype=np.int8
        )
        for (column, row), cell in self.iter_cells():
            counts[row, column] = cell.proximity_count
        return counts

    def render(self) -> str:
        """Render the solved board: '*' for mines, digits for counts."""
        lines = []
        for cells in self._grid:
            row_str = ""
            for cell in cells:
                if cell.armed:
                    row_str += " *"
                elif cell.proximity_count == 0:
                    row_str += "  "
                else:
                    row_str += f" {cell.proximity_count}"
            lines.append(row_str)
        return "\n".join(lines)

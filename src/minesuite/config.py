"""
Board configuration module.

Holds the validated game parameters, the violation codes produced by the
validator, the difficulty presets, and the random configuration generator.
"""
import math
import random
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional


# ============================================================================
# Constants
# ============================================================================

MIN_AXIS_SIZE = 6
MAX_AXIS_SIZE = 100
MIN_MINE_PERCENT = 0.1
MAX_MINE_PERCENT = 0.6


class GameStatus(Enum):
    """Validation outcomes reported back to the presentation layer."""

    ROWS_BELOW_MIN = auto()
    ROWS_ABOVE_MAX = auto()
    COLUMNS_BELOW_MIN = auto()
    COLUMNS_ABOVE_MAX = auto()
    MINES_BELOW_MIN = auto()
    MINES_ABOVE_MAX = auto()
    FAILURE = auto()
    SUCCESS = auto()


STATUS_MESSAGES: Mapping[GameStatus, str] = MappingProxyType({
    GameStatus.ROWS_BELOW_MIN: f"Rows need to be above {MIN_AXIS_SIZE}",
    GameStatus.ROWS_ABOVE_MAX: f"Rows need to be below {MAX_AXIS_SIZE}",
    GameStatus.COLUMNS_BELOW_MIN: f"Columns need to be above {MIN_AXIS_SIZE}",
    GameStatus.COLUMNS_ABOVE_MAX: f"Columns need to be below {MAX_AXIS_SIZE}",
    GameStatus.MINES_BELOW_MIN: (
        f"Mines needs to be above {MIN_MINE_PERCENT * 100}% of area."
    ),
    GameStatus.MINES_ABOVE_MAX: (
        f"Mines needs to be below {MAX_MINE_PERCENT * 100}% of area."
    ),
    GameStatus.FAILURE: "Something failed!",
    GameStatus.SUCCESS: "Success",
})


def status_messages(codes: Iterable[GameStatus]) -> List[str]:
    """Map violation codes to their user-facing messages, keeping order."""
    return [STATUS_MESSAGES[code] for code in codes]


class InvalidConfigurationError(ValueError):
    """Raised when a configuration fails validation."""

    def __init__(self, violations: List[GameStatus]) -> None:
        self.violations = list(violations)
        super().__init__("; ".join(status_messages(self.violations)))


# ============================================================================
# Validation
# ============================================================================

def validate(mines: int, rows: int, columns: int) -> List[GameStatus]:
    """
    Check a requested configuration against the game bounds.

    Every bound is evaluated, so the caller receives the complete set of
    violations in one pass.

    Args:
        mines: Requested mine count.
        rows: Requested row count.
        columns: Requested column count.

    Returns:
        List of violation codes. Empty when the configuration is valid.
    """
    area = rows * columns
    violations = []

    if rows < MIN_AXIS_SIZE:
        violations.append(GameStatus.ROWS_BELOW_MIN)
    if rows > MAX_AXIS_SIZE:
        violations.append(GameStatus.ROWS_ABOVE_MAX)
    if columns < MIN_AXIS_SIZE:
        violations.append(GameStatus.COLUMNS_BELOW_MIN)
    if columns > MAX_AXIS_SIZE:
        violations.append(GameStatus.COLUMNS_ABOVE_MAX)
    if mines < area * MIN_MINE_PERCENT:
        violations.append(GameStatus.MINES_BELOW_MIN)
    if mines > area * MAX_MINE_PERCENT:
        violations.append(GameStatus.MINES_ABOVE_MAX)

    return violations


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfiguration:
    """
    Parameters of a single game.

    Attributes:
        mines: Number of mines to place.
        rows: Number of rows (y axis).
        columns: Number of columns (x axis).
    """

    mines: int
    rows: int
    columns: int

    @classmethod
    def validated(
        cls, mines: int, rows: int, columns: int
    ) -> "BoardConfiguration":
        """
        Build a configuration, rejecting values outside the game bounds.

        Raises:
            InvalidConfigurationError: If any bound is violated.
        """
        violations = validate(mines, rows, columns)
        if violations:
            raise InvalidConfigurationError(violations)
        return cls(mines, rows, columns)

    @classmethod
    def from_strings(
        cls, mines: str, rows: str, columns: str
    ) -> "BoardConfiguration":
        """
        Build a validated configuration from user-entered text.

        Raises:
            InvalidConfigurationError: If the text is not a base-10 integer
                or the parsed values violate the game bounds.
        """
        try:
            values = [int(text.strip(), 10) for text in (mines, rows, columns)]
        except (AttributeError, ValueError) as exc:
            raise InvalidConfigurationError([GameStatus.FAILURE]) from exc
        return cls.validated(*values)

    @property
    def area(self) -> int:
        """Total number of cells."""
        return self.rows * self.columns

    def violations(self) -> List[GameStatus]:
        """Validation codes for this configuration."""
        return validate(self.mines, self.rows, self.columns)

    @property
    def is_valid(self) -> bool:
        return not self.violations()

    def __str__(self) -> str:
        return f"{self.mines}:{self.rows}:{self.columns}"


# ============================================================================
# Presets
# ============================================================================

class Mode(Enum):
    """Difficulty modes offered to the player."""

    EASY = auto()
    MEDIUM = auto()
    HARD = auto()
    CUSTOM = auto()
    RANDOM = auto()


EASY = BoardConfiguration(mines=10, rows=8, columns=8)
MEDIUM = BoardConfiguration(mines=40, rows=16, columns=16)
HARD = BoardConfiguration(mines=99, rows=16, columns=30)

PRESETS: Mapping[Mode, BoardConfiguration] = MappingProxyType({
    Mode.EASY: EASY,
    Mode.MEDIUM: MEDIUM,
    Mode.HARD: HARD,
})


def random_configuration(
    rng: Optional[random.Random] = None,
) -> BoardConfiguration:
    """
    Generate a random valid configuration.

    Axis sizes are uniform in [MIN_AXIS_SIZE, MAX_AXIS_SIZE]; the mine count
    is uniform over the integers allowed for the resulting area.

    Args:
        rng: Random source. A fresh unseeded one is used when omitted.
    """
    rng = rng or random.Random()
    rows = rng.randint(MIN_AXIS_SIZE, MAX_AXIS_SIZE)
    columns = rng.randint(MIN_AXIS_SIZE, MAX_AXIS_SIZE)
    area = rows * columns
    low = math.ceil(area * MIN_MINE_PERCENT)
    high = math.floor(area * MAX_MINE_PERCENT)
    return BoardConfiguration(rng.randint(low, high), rows, columns)


def preset(
    mode: Mode, rng: Optional[random.Random] = None
) -> BoardConfiguration:
    """
    Get the configuration for a difficulty mode.

    Args:
        mode: Difficulty mode.
        rng: Random source, used only by Mode.RANDOM.

    Raises:
        ValueError: For Mode.CUSTOM, which has no fixed parameters.
    """
    if mode is Mode.RANDOM:
        return random_configuration(rng)
    if mode not in PRESETS:
        raise ValueError(f"{mode.name} has no preset configuration")
    return PRESETS[mode]

"""
Game session module.

Orchestrates one playthrough: the board is created lazily on the first
reveal, player actions are dispatched to the board, and win/loss is
evaluated. Every action returns the change events the presentation layer
should apply.
"""
import logging
import random
from enum import Enum, auto
from typing import Iterable, List, Optional

from .board import Board, Coordinate
from .cell import Marking
from .clock import GameClock
from .config import BoardConfiguration, GameStatus, InvalidConfigurationError
from .events import (
    BoardCreated,
    CellMarkingChanged,
    CellRevealed,
    GameEvent,
    GameLost,
    GameWon,
    MarkingRatioChanged,
)
from .leaderboard import Leaderboard

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    Rules engine for one game at a time.

    Attributes:
        leaderboard: Optional best-time table consulted on a win.
        clock: Measures play time from the first reveal.
        rng: Random source used for mine placement.
    """

    def __init__(
        self,
        config: Optional[BoardConfiguration] = None,
        leaderboard: Optional[Leaderboard] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[GameClock] = None,
    ) -> None:
        """
        Initialize a session.

        Args:
            config: Configuration of the first game. Can be supplied later
                through new_game.
            leaderboard: Best-time table updated on wins.
            rng: Random source (default: fresh unseeded instance).
            clock: Game clock (default: monotonic clock).

        Raises:
            InvalidConfigurationError: If config violates the game bounds.
        """
        self.leaderboard = leaderboard
        self.rng = rng or random.Random()
        self.clock = clock or GameClock()

        self._config: Optional[BoardConfiguration] = None
        self._board: Optional[Board] = None
        self._marked_count = 0
        self._first_move = True
        self._game_state = GameState.PLAYING

        if config is not None:
            violations = self.new_game(config)
            if violations:
                raise InvalidConfigurationError(violations)

    # ========================================================================
    # Game Lifecycle
    # ========================================================================

    def new_game(self, config: BoardConfiguration) -> List[GameStatus]:
        """
        Start over with a new configuration.

        An invalid configuration is rejected and the current game is left
        untouched.

        Returns:
            Violation codes. Empty when the new game was set up.
        """
        violations = config.violations()
        if violations:
            logger.debug("Rejected configuration %s: %s", config, violations)
            return violations

        self.clear_game()
        self._config = config
        return []

    def clear_game(self) -> None:
        """Discard the board and reset the per-game counters."""
        self._board = None
        self._marked_count = 0
        self._first_move = True
        self._game_state = GameState.PLAYING
        self.clock.reset()

    def _create_board(self, seed: Coordinate) -> List[GameEvent]:
        """Materialize the board around the first move."""
        config = self._require_config()
        board = Board(config)
        if not board.is_in_bounds(seed):
            raise IndexError(f"Coordinate {seed} is outside the board")

        board.place_mines(seed, self.rng)
        self._board = board
        self._first_move = False
        self.clock.start()
        logger.debug("Created board %s from first move %s", config, seed)
        return [BoardCreated(config.rows, config.columns)]

    def _require_config(self) -> BoardConfiguration:
        if self._config is None:
            raise RuntimeError("No game configured; call new_game first")
        return self._config

    def pause(self) -> None:
        self.clock.pause()

    def resume(self) -> None:
        self.clock.resume()

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, coordinate: Coordinate) -> List[GameEvent]:
        """
        Reveal a cell.

        The first reveal of a game creates the board with this coordinate
        as the safe seed. Revealing a mine loses the game; revealing a cell
        with no armed neighbors cascades. A click on a flagged or questioned
        cell is ignored and the cell stays hidden, though a cascade or chord
        may still uncover a questioned cell.

        Args:
            coordinate: (column, row) to reveal.

        Returns:
            Change events in the order they happened.

        Raises:
            IndexError: If the coordinate lies outside the board.
            RuntimeError: If no configuration has been set.
        """
        events: List[GameEvent] = []
        if self._first_move:
            events.extend(self._create_board(coordinate))

        cell = self._board.get_cell(coordinate)
        if (not self.is_playing or cell.revealed
                or cell.marking is not Marking.NOT_MARKED):
            return events

        self._reveal_from([coordinate], events)
        self._evaluate_win(events)
        return events

    def cycle_marking(self, coordinate: Coordinate) -> List[GameEvent]:
        """
        Advance the marking of a hidden cell.

        The cycle is NOT_MARKED -> MARKED -> QUESTIONED -> NOT_MARKED. Once
        as many flags as mines are placed, unmarked cells refuse new flags.

        Returns:
            Change events, empty if nothing changed.

        Raises:
            IndexError: If the coordinate lies outside the board.
        """
        if self._board is None or not self.is_playing:
            return []

        cell = self._board.get_cell(coordinate)
        if cell.revealed:
            return []
        if (self._marked_count >= self._config.mines
                and cell.marking is Marking.NOT_MARKED):
            return []

        previous = cell.marking
        marking = cell.next_marking()
        if marking is Marking.MARKED:
            self._marked_count += 1
        elif previous is Marking.MARKED:
            self._marked_count -= 1

        events: List[GameEvent] = [
            CellMarkingChanged(coordinate, marking),
            MarkingRatioChanged(self._marked_count, self._config.mines),
        ]
        self._evaluate_win(events)
        return events

    def chord(self, coordinate: Coordinate) -> List[GameEvent]:
        """
        Reveal the neighbors of a revealed cell whose flags are all placed.

        When the number of flagged neighbors equals the cell's proximity
        count, every neighbor that is neither flagged nor revealed is
        revealed as if clicked. A wrongly placed flag therefore can lose
        the game.

        Returns:
            Change events, empty if the flag count does not match.

        Raises:
            IndexError: If the coordinate lies outside the board.
        """
        if self._board is None or not self.is_playing:
            return []

        cell = self._board.get_cell(coordinate)
        if not cell.revealed or cell.marking is not Marking.NOT_MARKED:
            return []
        marked = self._board.count_marked_neighbors(coordinate)
        if marked != cell.proximity_count:
            return []

        events: List[GameEvent] = []
        self._reveal_from(self._nearby_unrevealed(coordinate), events)
        self._evaluate_win(events)
        return events

    # ========================================================================
    # Reveal Cascade (Low-level)
    # ========================================================================

    def _nearby_unrevealed(self, coordinate: Coordinate) -> List[Coordinate]:
        """Neighbors that are neither flagged nor revealed."""
        nearby = []
        for neighbor in self._board.get_adjacent_nodes(coordinate):
            cell = self._board.get_cell(neighbor)
            if not cell.revealed and cell.marking is not Marking.MARKED:
                nearby.append(neighbor)
        return nearby

    def _reveal_from(
        self, coordinates: Iterable[Coordinate], events: List[GameEvent]
    ) -> None:
        """
        Reveal cells, flooding outward through zero-count cells.

        Uses an explicit stack; a cell is revealed at most once, so the
        walk ends after at most rows * columns reveals. Flagged cells are
        barriers; questioned cells are uncovered like any other. Stops at the
        first mine.
        """
        stack = list(reversed(list(coordinates)))
        while stack:
            coordinate = stack.pop()
            cell = self._board.get_cell(coordinate)
            if cell.revealed or cell.marking is Marking.MARKED:
                continue

            cell.reveal()
            if cell.armed:
                self._lose(coordinate, events)
                return

            events.append(CellRevealed(coordinate, cell.proximity_count))
            if cell.proximity_count == 0:
                stack.extend(reversed(self._nearby_unrevealed(coordinate)))

    # ========================================================================
    # Win / Loss
    # ========================================================================

    def check_win_conditions(self) -> bool:
        """
        Check whether the board is solved.

        Every mine must be flagged (compared by count first) and no cell
        may remain both hidden and unflagged.
        """
        if self._board is None:
            return False
        if self._marked_count != self._config.mines:
            return False
        return self._board.all_activated()

    def _evaluate_win(self, events: List[GameEvent]) -> None:
        if not self.is_playing or not self.check_win_conditions():
            return

        self._game_state = GameState.WON
        elapsed = self.clock.stop()
        is_new_record = False
        if self.leaderboard is not None:
            is_new_record = self.leaderboard.new_best_time_add(
                elapsed, self._config
            )
        logger.info(
            "Game won on %s in %d ms (new record: %s)",
            self._config, elapsed, is_new_record,
        )
        events.append(GameWon(elapsed, is_new_record))

    def _lose(self, coordinate: Coordinate, events: List[GameEvent]) -> None:
        self._game_state = GameState.LOST
        self.clock.stop()
        logger.info("Game lost on %s at %s", self._config, coordinate)
        events.append(
            GameLost(tuple(self._board.mine_locations), coordinate)
        )

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def config(self) -> Optional[BoardConfiguration]:
        return self._config

    @property
    def board(self) -> Optional[Board]:
        """Current board, or None before the first reveal."""
        return self._board

    @property
    def marked_count(self) -> int:
        """Number of cells currently flagged."""
        return self._marked_count

    @property
    def first_move(self) -> bool:
        return self._first_move

    @property
    def game_state(self) -> GameState:
        return self._game_state

    @property
    def is_playing(self) -> bool:
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._game_state == GameState.LOST

    def marking_at(self, coordinate: Coordinate) -> Marking:
        """Current marking of a cell; NOT_MARKED before the board exists."""
        if self._board is None:
            return Marking.NOT_MARKED
        return self._board.get_cell(coordinate).marking

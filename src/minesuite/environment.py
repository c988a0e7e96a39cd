"""
Gymnasium environment wrapper for the minesweeper rules engine.

Drives a GameSession headlessly so scripts and agents can play full games,
including flags and chords.
"""
import random
from typing import Any, Dict, List, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Coordinate
from .config import EASY, BoardConfiguration, InvalidConfigurationError
from .events import CellRevealed, GameEvent
from .leaderboard import Leaderboard
from .session import GameSession


# ============================================================================
# Constants
# ============================================================================

REVEAL = 0
CYCLE_MARKING = 1
CHORD = 2
ACTION_KINDS = 3

WIN_REWARD = 10.0
LOSS_REWARD = -10.0
NO_OP_REWARD = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for minesweeper.

    Observation:
        2D array indexed [row, column] where:
        - -1 = hidden cell
        - -2 = marked cell
        - -3 = questioned cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 3 * rows * columns.
        Action a decodes to kind a // (rows * columns) (0 reveal, 1 cycle
        marking, 2 chord) on cell index a % (rows * columns), where cell
        index i is column i % columns of row i // columns.

    Rewards:
        - +10 for winning the game
        - -10 for hitting a mine
        - +1 per newly revealed safe cell
        - -0.1 for actions that change nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfiguration] = None,
        render_mode: Optional[str] = None,
        leaderboard: Optional[Leaderboard] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: the easy preset).
            render_mode: How to render the environment.
            leaderboard: Optional best-time table passed to the session.

        Raises:
            InvalidConfigurationError: If config violates the game bounds.
        """
        super().__init__()

        self.config = config or EASY
        violations = self.config.violations()
        if violations:
            raise InvalidConfigurationError(violations)

        self.session = GameSession(self.config, leaderboard=leaderboard)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-3,
            high=9,
            shape=(self.config.rows, self.config.columns),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(ACTION_KINDS * self.config.area)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new game.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.session.rng = random.Random(
            int(self.np_random.integers(0, 2**31 - 1))
        )
        self.session.new_game(self.config)
        self._steps = 0
        return self._get_observation(), self._get_info([])

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action.

        Chords and markings before the first reveal change nothing.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).

        Raises:
            ValueError: If action lies outside the action space.
        """
        if not self.action_space.contains(action):
            raise ValueError(
                f"Action {action} is outside {self.action_space}"
            )
        kind, coordinate = self.decode_action(action)
        self._steps += 1

        if kind == REVEAL:
            events = self.session.reveal(coordinate)
        elif kind == CYCLE_MARKING:
            events = self.session.cycle_marking(coordinate)
        else:
            events = self.session.chord(coordinate)

        reward = self._calculate_reward(events)
        terminated = not self.session.is_playing
        return (
            self._get_observation(), reward, terminated, False,
            self._get_info(events),
        )

    def decode_action(self, action: int) -> Tuple[int, Coordinate]:
        """Split a flat action into (kind, (column, row))."""
        kind, index = divmod(int(action), self.config.area)
        row, column = divmod(index, self.config.columns)
        return kind, (column, row)

    def encode_action(self, kind: int, coordinate: Coordinate) -> int:
        column, row = coordinate
        return kind * self.config.area + row * self.config.columns + column

    def _calculate_reward(self, events: List[GameEvent]) -> float:
        if self.session.is_won:
            return WIN_REWARD
        if self.session.is_lost:
            return LOSS_REWARD
        if not events:
            return NO_OP_REWARD
        return float(sum(isinstance(e, CellRevealed) for e in events))

    def _get_observation(self) -> np.ndarray:
        if self.session.board is None:
            return np.full(
                (self.config.rows, self.config.columns), -1, dtype=np.int8
            )
        return self.session.board.get_observation()

    def _get_info(self, events: List[GameEvent]) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "events": events,
            "game_state": self.session.game_state.name,
            "marked": self.session.marked_count,
            "total_mines": self.config.mines,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        symbols = {-1: ".", -2: "F", -3: "?", 9: "*", 0: " "}
        lines = []
        for values in self._get_observation():
            lines.append(
                " ".join(symbols.get(int(v), str(int(v))) for v in values)
            )
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the game.

        Returns:
            Boolean array where True = reveal or marking on a hidden cell,
            or chord on a revealed numbered cell. Only reveals are valid
            before the first move.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.session.board is None:
            mask[:self.config.area] = True
            return mask

        obs = self._get_observation()
        for row in range(self.config.rows):
            for column in range(self.config.columns):
                value = obs[row, column]
                coordinate = (column, row)
                if value == -1:
                    mask[self.encode_action(REVEAL, coordinate)] = True
                if value in (-1, -2, -3):
                    mask[self.encode_action(CYCLE_MARKING, coordinate)] = True
                if 1 <= value <= 8:
                    mask[self.encode_action(CHORD, coordinate)] = True
        return mask

"""
Gymnasium environment wrapper for the reveal engine.

Hosts one board per episode so agents can play through a standard
RL interface.
"""
import logging
from enum import Enum, auto
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .engine import RevealEngine
from .minefield import BoardConfig, MineField
from .tile import Coordinate, RevealKind


logger = logging.getLogger(__name__)


class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Reveal Environment
# ============================================================================

class RevealEnv(gym.Env):
    """
    Gymnasium environment for revealing tiles on a minesweeper board.

    Observation:
        2D array where:
        - -1 = covered tile
        - 0-8 = uncovered tile with adjacent mine count
        - 9 = uncovered mine

    Actions:
        Discrete action space of size dimension * dimension.
        Action i corresponds to tile (i // dimension, i % dimension).

    Rewards:
        - +1 for revealing a safe tile
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for revealing an already uncovered tile
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        safe_first_reveal: bool = True,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
            safe_first_reveal: Place mines after the first action so
                that it never hits one.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.safe_first_reveal = safe_first_reveal

        dimension = self.config.dimension
        self.observation_space = spaces.Box(
            low=-1,
            high=9,
            shape=(dimension, dimension),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(dimension * dimension)

        self.engine: Optional[RevealEngine] = None
        self._game_state = GameState.PLAYING
        self._steps = 0
        self._last_uncovered = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self._game_state = GameState.PLAYING
        self._steps = 0
        self._last_uncovered = 0

        if self.safe_first_reveal:
            self.engine = None
        else:
            self.engine = RevealEngine(
                MineField.random(self.config, self.np_random)
            )

        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal one tile.

        Args:
            action: Tile index (row * dimension + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self._game_state != GameState.PLAYING:
            return self._get_observation(), 0.0, True, False, self._get_info()

        coord = self._action_to_position(action)
        self._steps += 1
        reward = self._calculate_reward(coord)

        terminated = self._game_state != GameState.PLAYING
        observation = self._get_observation()
        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Coordinate:
        """Convert flat action index to (row, col) position."""
        dimension = self.config.dimension
        return int(action) // dimension, int(action) % dimension

    def _calculate_reward(self, coord: Coordinate) -> float:
        """Reveal a tile and score the result."""
        if self.engine is None:
            field = MineField.random(
                self.config, self.np_random, exclude=coord
            )
            self.engine = RevealEngine(field)

        outcome = self.engine.reveal(coord)
        self._last_uncovered = outcome.uncovered

        if outcome.kind == RevealKind.ALREADY_UNCOVERED:
            return -0.1
        if outcome.kind == RevealKind.HIT_MINE:
            self._game_state = GameState.LOST
            logger.debug("Episode lost after %d steps", self._steps)
            return -10.0
        if self.engine.evaluate():
            self._game_state = GameState.WON
            logger.debug("Episode won after %d steps", self._steps)
            return 10.0
        return 1.0

    def _get_observation(self) -> np.ndarray:
        if self.engine is None:
            dimension = self.config.dimension
            return np.full((dimension, dimension), -1, dtype=np.int8)
        return self.engine.get_observation()

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        revealed = self.engine.uncovered_count if self.engine else 0
        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self.config.total_safe,
            "game_state": self._game_state.name,
            "valid_actions": int(self.get_action_mask().sum()),
            "last_uncovered": self._last_uncovered,
        }

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        return render_observation(self._get_observation())

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = covered tile.
        """
        return self._get_observation().flatten() == -1


def render_observation(obs: np.ndarray) -> str:
    """
    Render an observation grid as text.

    Covered tiles show as '.', mines as '*', zero-count tiles as a
    blank and numbered tiles as their count.
    """
    lines = []
    for row in obs:
        row_str = ""
        for val in row:
            if val == -1:
                row_str += "."
            elif val == 9:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str)
    return "\n".join(lines)


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
    asynchronous: bool = True,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment with one board per worker.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.
        asynchronous: Run each board in its own process.

    Returns:
        Vectorized environment.
    """
    def make_env() -> RevealEnv:
        return RevealEnv(config=config)

    env_fns = [make_env for _ in range(n_envs)]
    if asynchronous:
        return gym.vector.AsyncVectorEnv(env_fns)
    return gym.vector.SyncVectorEnv(env_fns)

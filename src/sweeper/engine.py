"""
Reveal engine module.

Applies the two player-visible rules to a board: revealing a tile
(with the flood-fill cascade over zero-count regions) and checking
whether the game has been won.
"""
import logging
from typing import List, Optional

import numpy as np

from .board_state import BoardState
from .minefield import TileFactsSource
from .tile import Coordinate, RevealOutcome


logger = logging.getLogger(__name__)


# ============================================================================
# Reveal Engine
# ============================================================================

class RevealEngine:
    """
    Reveal logic over one board.

    The engine reads mine facts from a TileFactsSource and writes
    coverage into a BoardState it owns. It does not track whether the
    game is over; callers stop revealing after a mine or a win.
    """

    def __init__(
        self,
        facts: TileFactsSource,
        state: Optional[BoardState] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            facts: Read-only mine flags and adjacent counts.
            state: Coverage grid (a fresh fully covered one if None).
        """
        if state is None:
            state = BoardState(facts.dimension)
        elif state.dimension != facts.dimension:
            raise ValueError(
                f"Board state dimension {state.dimension} does not match "
                f"facts dimension {facts.dimension}"
            )
        self.facts = facts
        self.state = state

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, coord: Coordinate) -> RevealOutcome:
        """
        Reveal a tile.

        A mine is uncovered and reported without any cascade. A safe tile
        with no adjacent mines also opens its connected zero-count region
        and the numbered tiles bordering it.

        Args:
            coord: (row, col) to reveal.

        Returns:
            The outcome, with the number of tiles newly uncovered.

        Raises:
            OutOfBoundsError: If coord is outside the board.
        """
        if not self.state.is_covered(coord):
            return RevealOutcome.already_uncovered()

        self.state.set_uncovered(coord)
        if self.facts.is_mine(coord):
            logger.debug("Revealed mine at %s", coord)
            return RevealOutcome.hit_mine()

        uncovered = 1 + self._cascade(coord)
        logger.debug("Revealed %s, %d tiles uncovered", coord, uncovered)
        return RevealOutcome.safe_reveal(uncovered)

    def _cascade(self, start: Coordinate) -> int:
        """
        Flood-fill outward from a revealed tile.

        Returns:
            Number of tiles uncovered, not counting the start.
        """
        visited = {start}
        stack: List[Coordinate] = []
        if self.facts.adjacent_mine_count(start) == 0:
            stack.append(start)

        uncovered = 0
        while stack:
            current = stack.pop()
            for neighbor in self.state.neighbors(current):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                if self.facts.is_mine(neighbor):
                    continue
                if self.state.set_uncovered(neighbor):
                    uncovered += 1
                # Numbered tiles are opened but bound the region
                if self.facts.adjacent_mine_count(neighbor) == 0:
                    stack.append(neighbor)
        return uncovered

    def evaluate(self) -> bool:
        """
        Check the win condition without changing anything.

        Returns:
            True if every non-mine tile is uncovered. Covered mines are
            allowed.
        """
        for coord in self.state.all_tiles():
            if self.state.is_covered(coord) and not self.facts.is_mine(coord):
                return False
        return True

    def uncover_remaining(self) -> int:
        """
        Uncover every tile still covered, mines included.

        This is an end-of-game display policy and is never applied by
        reveal or evaluate.

        Returns:
            Number of tiles uncovered.
        """
        count = 0
        for coord in self.state.all_tiles():
            if self.state.set_uncovered(coord):
                count += 1
        return count

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def dimension(self) -> int:
        return self.state.dimension

    def is_covered(self, coord: Coordinate) -> bool:
        return self.state.is_covered(coord)

    @property
    def uncovered_count(self) -> int:
        return self.state.uncovered_count

    @property
    def mine_count(self) -> int:
        """Total mines on the board."""
        return sum(
            1 for coord in self.state.all_tiles() if self.facts.is_mine(coord)
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = covered
                0-8 = uncovered with adjacent count
                9 = uncovered mine
        """
        obs = np.full((self.dimension, self.dimension), -1, dtype=np.int8)
        for row, col in self.state.all_tiles():
            if self.state.is_covered((row, col)):
                continue
            if self.facts.is_mine((row, col)):
                obs[row, col] = 9
            else:
                obs[row, col] = self.facts.adjacent_mine_count((row, col))
        return obs

    def get_valid_actions(self) -> List[Coordinate]:
        """Covered tiles, in row-major order."""
        return [
            coord for coord in self.state.all_tiles()
            if self.state.is_covered(coord)
        ]

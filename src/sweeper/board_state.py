"""
Board state module for the reveal engine.

Holds the covered/uncovered status of every tile on a square grid.
Knows nothing about mines or game rules.
"""
from typing import List

import numpy as np

from .exceptions import check_bounds
from .tile import Coordinate, TileState


# ============================================================================
# Board State
# ============================================================================

class BoardState:
    """
    Coverage of a dimension x dimension grid of tiles.

    Tiles are addressed by (row, col). Every tile starts covered and can
    only move to uncovered. The grid never changes size.
    """

    def __init__(self, dimension: int) -> None:
        """
        Create a fully covered grid.

        Args:
            dimension: Number of rows (and columns) of the board.
        """
        if dimension < 1:
            raise ValueError("Board dimension must be positive")
        self._dimension = dimension
        self._covered = np.ones((dimension, dimension), dtype=bool)

    # ========================================================================
    # Bounds and Neighbors (Low-level)
    # ========================================================================

    @property
    def dimension(self) -> int:
        """Side length of the board."""
        return self._dimension

    def contains(self, coord: Coordinate) -> bool:
        """Check if coordinate is within board bounds."""
        row, col = coord
        return 0 <= row < self._dimension and 0 <= col < self._dimension

    def neighbors(self, coord: Coordinate) -> List[Coordinate]:
        """
        Get the 8-connected neighbors of a tile, clipped to the board.

        Args:
            coord: (row, col) of the center tile.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        check_bounds(coord, self._dimension)
        row, col = coord
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                neighbor = (row + delta_row, col + delta_col)
                if self.contains(neighbor):
                    neighbors.append(neighbor)
        return neighbors

    def all_tiles(self) -> List[Coordinate]:
        """All coordinates in row-major order."""
        return [
            (row, col)
            for row in range(self._dimension)
            for col in range(self._dimension)
        ]

    # ========================================================================
    # Coverage Accessors
    # ========================================================================

    def is_covered(self, coord: Coordinate) -> bool:
        """
        Check whether a tile is still covered.

        Raises:
            OutOfBoundsError: If coord is outside the board.
        """
        check_bounds(coord, self._dimension)
        row, col = coord
        return bool(self._covered[row, col])

    def set_uncovered(self, coord: Coordinate) -> bool:
        """
        Uncover a tile. Uncovering an uncovered tile is a no-op.

        Returns:
            True if the tile was covered before this call.

        Raises:
            OutOfBoundsError: If coord is outside the board.
        """
        check_bounds(coord, self._dimension)
        row, col = coord
        if not self._covered[row, col]:
            return False
        self._covered[row, col] = False
        return True

    def tile_state(self, coord: Coordinate) -> TileState:
        """Snapshot of a single tile's coverage."""
        return TileState(covered=self.is_covered(coord))

    @property
    def uncovered_count(self) -> int:
        """Number of tiles uncovered so far."""
        return int(self._covered.size - np.count_nonzero(self._covered))

    def covered_mask(self) -> np.ndarray:
        """Copy of the grid where True marks a covered tile."""
        return self._covered.copy()

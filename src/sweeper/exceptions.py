"""
Exceptions for the reveal engine.

The only recoverable error is a coordinate that falls outside the board.
"""
from typing import Tuple


class OutOfBoundsError(IndexError):
    """Raised when a coordinate lies outside a dimension x dimension board."""

    def __init__(self, coord: Tuple[int, int], dimension: int) -> None:
        self.coord = coord
        self.dimension = dimension
        super().__init__(
            f"Coordinate {coord} is outside the {dimension}x{dimension} board"
        )


def check_bounds(coord: Tuple[int, int], dimension: int) -> None:
    """
    Validate a coordinate against board bounds.

    Args:
        coord: (row, col) position.
        dimension: Side length of the board.

    Raises:
        OutOfBoundsError: If row or col is outside [0, dimension).
    """
    row, col = coord
    if not (0 <= row < dimension and 0 <= col < dimension):
        raise OutOfBoundsError(coord, dimension)

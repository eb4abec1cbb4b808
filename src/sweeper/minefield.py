"""
Mine field module.

Supplies the fixed per-tile facts (mine flag and adjacent mine count)
that the reveal engine consumes. Boards are built from explicit mine
positions, from a text layout, or by random placement.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence

import numpy as np

from .exceptions import check_bounds
from .tile import Coordinate, TileFacts


logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a square board.

    Attributes:
        dimension: Number of rows and columns.
        num_mines: Total mines to place.
    """

    dimension: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.dimension < 1:
            raise ValueError("Board dimension must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.dimension * self.dimension - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_safe(self) -> int:
        """Number of tiles without a mine."""
        return self.dimension * self.dimension - self.num_mines


# Preset difficulty levels
BEGINNER = BoardConfig(9, 10)
INTERMEDIATE = BoardConfig(16, 40)
EXPERT = BoardConfig(24, 99)


# ============================================================================
# Facts Source Interface
# ============================================================================

class TileFactsSource(Protocol):
    """Read-only per-tile facts a board exposes to the reveal engine."""

    @property
    def dimension(self) -> int:
        ...

    def is_mine(self, coord: Coordinate) -> bool:
        ...

    def adjacent_mine_count(self, coord: Coordinate) -> int:
        ...


def _count_adjacent_mines(mines: np.ndarray) -> np.ndarray:
    """Count mines among each tile's 8 neighbors."""
    dimension = mines.shape[0]
    padded = np.pad(mines.astype(np.int8), 1)
    counts = np.zeros((dimension, dimension), dtype=np.int8)
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            counts += padded[
                1 + delta_row:1 + delta_row + dimension,
                1 + delta_col:1 + delta_col + dimension,
            ]
    return counts


# ============================================================================
# Mine Field
# ============================================================================

class MineField:
    """
    Immutable mine layout of a square board.

    Adjacent mine counts are computed once on construction; both the
    mine mask and the counts are read-only afterwards.
    """

    def __init__(self, mines: np.ndarray) -> None:
        """
        Build a field from a boolean mine mask.

        Args:
            mines: Square 2D array, True where a mine sits.
        """
        mines = np.array(mines, dtype=bool)
        if mines.ndim != 2 or mines.shape[0] != mines.shape[1]:
            raise ValueError("Mine mask must be a square 2D array")
        if mines.shape[0] < 1:
            raise ValueError("Board dimension must be positive")

        self._mines = mines
        self._counts = _count_adjacent_mines(mines)
        self._mines.setflags(write=False)
        self._counts.setflags(write=False)

    # ========================================================================
    # Constructors
    # ========================================================================

    @classmethod
    def from_mines(
        cls, dimension: int, positions: Iterable[Coordinate]
    ) -> "MineField":
        """
        Build a field with mines at the given positions.

        Args:
            dimension: Side length of the board.
            positions: (row, col) of each mine.
        """
        if dimension < 1:
            raise ValueError("Board dimension must be positive")
        mines = np.zeros((dimension, dimension), dtype=bool)
        for coord in positions:
            check_bounds(coord, dimension)
            row, col = coord
            mines[row, col] = True
        return cls(mines)

    @classmethod
    def from_layout(cls, rows: Sequence[str]) -> "MineField":
        """
        Build a field from text rows, '*' for a mine and '.' otherwise.

        Example:
            MineField.from_layout(["...", ".*.", "..."])
        """
        if any(len(line) != len(rows) for line in rows):
            raise ValueError("Layout must be square")
        for line in rows:
            if set(line) - {"*", "."}:
                raise ValueError(f"Unexpected character in layout row {line!r}")
        return cls(np.array([[char == "*" for char in line] for line in rows]))

    @classmethod
    def random(
        cls,
        config: BoardConfig,
        rng: Optional[np.random.Generator] = None,
        exclude: Optional[Coordinate] = None,
    ) -> "MineField":
        """
        Place mines uniformly at random.

        Args:
            config: Board size and mine count.
            rng: Random generator (a fresh unseeded one if None).
            exclude: (row, col) position to keep mine-free.
        """
        rng = rng if rng is not None else np.random.default_rng()
        dimension = config.dimension
        positions = np.arange(dimension * dimension)
        if exclude is not None:
            check_bounds(exclude, dimension)
            positions = positions[positions != exclude[0] * dimension + exclude[1]]

        chosen = rng.choice(positions, size=config.num_mines, replace=False)
        mines = np.zeros(dimension * dimension, dtype=bool)
        mines[chosen] = True
        logger.debug(
            "Placed %d mines on %dx%d board (excluding %s)",
            config.num_mines, dimension, dimension, exclude,
        )
        return cls(mines.reshape(dimension, dimension))

    # ========================================================================
    # Fact Lookup
    # ========================================================================

    @property
    def dimension(self) -> int:
        """Side length of the board."""
        return self._mines.shape[0]

    @property
    def num_mines(self) -> int:
        """Total mines on the board."""
        return int(np.count_nonzero(self._mines))

    def is_mine(self, coord: Coordinate) -> bool:
        """Check if a tile holds a mine."""
        check_bounds(coord, self.dimension)
        row, col = coord
        return bool(self._mines[row, col])

    def adjacent_mine_count(self, coord: Coordinate) -> int:
        """Count of mines among a tile's neighbors."""
        check_bounds(coord, self.dimension)
        row, col = coord
        return int(self._counts[row, col])

    def facts(self, coord: Coordinate) -> TileFacts:
        """Get both facts of a tile at once."""
        return TileFacts(
            is_mine=self.is_mine(coord),
            adjacent_mines=self.adjacent_mine_count(coord),
        )

    def mine_positions(self) -> List[Coordinate]:
        """Mine coordinates in row-major order."""
        return [(int(row), int(col)) for row, col in np.argwhere(self._mines)]

"""
Tile module for the reveal engine.

Defines the per-tile facts supplied by a board, the mutable coverage
state owned by BoardState, and the outcome of a reveal.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple


Coordinate = Tuple[int, int]


# ============================================================================
# Tile Facts and State
# ============================================================================

@dataclass(frozen=True)
class TileFacts:
    """
    Immutable facts about a tile, fixed at board construction.

    Attributes:
        is_mine: Whether this tile holds a mine.
        adjacent_mines: Count of mines in neighboring tiles (0-8).
    """

    is_mine: bool = False
    adjacent_mines: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.adjacent_mines <= 8:
            raise ValueError("Adjacent mine count must be between 0 and 8")


@dataclass
class TileState:
    """Mutable coverage of a tile. Starts covered, is only ever uncovered."""

    covered: bool = True

    def uncover(self) -> bool:
        """
        Uncover this tile.

        Returns:
            True if the tile changed state, False if already uncovered.
        """
        if not self.covered:
            return False
        self.covered = False
        return True

    @property
    def is_uncovered(self) -> bool:
        return not self.covered


# ============================================================================
# Reveal Outcome
# ============================================================================

class RevealKind(Enum):
    """Possible results of revealing a tile."""

    ALREADY_UNCOVERED = auto()
    HIT_MINE = auto()
    SAFE_REVEAL = auto()


@dataclass(frozen=True)
class RevealOutcome:
    """
    Value returned by RevealEngine.reveal.

    Attributes:
        kind: What happened.
        uncovered: Number of tiles newly uncovered by the call.
    """

    kind: RevealKind
    uncovered: int = 0

    @classmethod
    def already_uncovered(cls) -> "RevealOutcome":
        return cls(RevealKind.ALREADY_UNCOVERED, 0)

    @classmethod
    def hit_mine(cls) -> "RevealOutcome":
        return cls(RevealKind.HIT_MINE, 1)

    @classmethod
    def safe_reveal(cls, uncovered: int) -> "RevealOutcome":
        return cls(RevealKind.SAFE_REVEAL, uncovered)

    @property
    def is_mine_hit(self) -> bool:
        """Check if the reveal ended the round in a loss."""
        return self.kind == RevealKind.HIT_MINE

    @property
    def is_safe(self) -> bool:
        """Check if the reveal uncovered at least one safe tile."""
        return self.kind == RevealKind.SAFE_REVEAL

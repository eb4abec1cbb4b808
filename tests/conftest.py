"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import BoardConfig, BoardState, MineField, RevealEngine


# ============================================================================
# Mine Field Fixtures
# ============================================================================

@pytest.fixture
def center_mine_field() -> MineField:
    """3x3 field with a single mine in the middle."""
    return MineField.from_mines(3, [(1, 1)])


@pytest.fixture
def corner_mine_field() -> MineField:
    """3x3 field with a single mine in the bottom-right corner."""
    return MineField.from_mines(3, [(2, 2)])


@pytest.fixture
def empty_field() -> MineField:
    """5x5 field with no mines for cascade testing."""
    return MineField.from_mines(5, [])


@pytest.fixture
def walled_field() -> MineField:
    """7x7 field split by a column of mines."""
    return MineField.from_layout([
        "...*...",
        "...*...",
        "...*...",
        "...*...",
        "...*...",
        "...*...",
        "...*...",
    ])


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def center_mine_engine(center_mine_field: MineField) -> RevealEngine:
    """Engine over the 3x3 center mine field."""
    return RevealEngine(center_mine_field)


@pytest.fixture
def corner_mine_engine(corner_mine_field: MineField) -> RevealEngine:
    """Engine over the 3x3 corner mine field."""
    return RevealEngine(corner_mine_field)


@pytest.fixture
def empty_engine(empty_field: MineField) -> RevealEngine:
    """Engine over the 5x5 field with no mines."""
    return RevealEngine(empty_field)


@pytest.fixture
def walled_engine(walled_field: MineField) -> RevealEngine:
    """Engine over the 7x7 field with a wall of mines."""
    return RevealEngine(walled_field)


# ============================================================================
# State and Configuration Fixtures
# ============================================================================

@pytest.fixture
def small_state() -> BoardState:
    """Fully covered 3x3 board state."""
    return BoardState(3)


@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 10)


@pytest.fixture
def tiny_config() -> BoardConfig:
    """Small board used by environment tests."""
    return BoardConfig(4, 3)

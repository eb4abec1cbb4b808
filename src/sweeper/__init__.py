"""
Minesweeper reveal engine.

Provides tile coverage state, the cascading reveal and win check, the
mine field collaborator, and a gymnasium environment.
"""
from .exceptions import OutOfBoundsError
from .tile import Coordinate, TileFacts, TileState, RevealKind, RevealOutcome
from .board_state import BoardState
from .minefield import (
    BoardConfig,
    MineField,
    TileFactsSource,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .engine import RevealEngine
from .environment import GameState, RevealEnv, make_vec_env, render_observation

__all__ = [
    "OutOfBoundsError",
    "Coordinate",
    "TileFacts",
    "TileState",
    "RevealKind",
    "RevealOutcome",
    "BoardState",
    "BoardConfig",
    "MineField",
    "TileFactsSource",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "RevealEngine",
    "GameState",
    "RevealEnv",
    "make_vec_env",
    "render_observation",
]

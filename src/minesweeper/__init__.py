"""
Minesweeper board engine.

Provides the immutable game board, cell states, errors and a
Gymnasium environment built on top of them.
"""
from .cell import Cell, CellState, Covered, Exposed, Marker
from .errors import (
    BoardError,
    InvalidDimensionsError,
    InvalidOperationError,
    OutOfBoundsError,
)
from .board import (
    Board,
    BoardConfig,
    Coord,
    GameInfo,
    GameStatus,
    NEIGHBOR_OFFSETS,
    SAFE_ZONE_SIZE,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellState",
    "Covered",
    "Exposed",
    "Marker",
    "BoardError",
    "InvalidDimensionsError",
    "InvalidOperationError",
    "OutOfBoundsError",
    "Board",
    "BoardConfig",
    "Coord",
    "GameInfo",
    "GameStatus",
    "NEIGHBOR_OFFSETS",
    "SAFE_ZONE_SIZE",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "MinesweeperEnv",
    "make_vec_env",
]

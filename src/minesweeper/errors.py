"""
Exceptions raised by the Minesweeper board engine.
"""


class BoardError(Exception):
    """Base class for all board engine errors."""


class OutOfBoundsError(BoardError, IndexError):
    """A (row, column) coordinate lies outside the grid."""

    def __init__(self, row: int, column: int, num_rows: int, num_columns: int) -> None:
        super().__init__(
            f"({row}, {column}) out of bounds for "
            f"{num_rows}x{num_columns} board"
        )
        self.row = row
        self.column = column


class InvalidDimensionsError(BoardError, ValueError):
    """Board dimensions, cell count or mine count are inconsistent."""


class InvalidOperationError(BoardError, ValueError):
    """The requested action does not apply to the cell's current state."""

"""
Board module for Minesweeper game.

Implements the immutable game board: lazy mine placement with a safe
first-click zone, flood-fill revealing, chord clearing, markers and
win/lose detection. Every action returns a new Board; earlier boards
are never modified, so callers can keep them as undo history.
"""
import logging
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from .cell import Cell, CellState, Exposed, Marker
from .errors import InvalidDimensionsError, InvalidOperationError, OutOfBoundsError


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

Coord = Tuple[int, int]

# Anything np.random.default_rng accepts: None, an int seed, a Generator...
RandomSource = Union[None, int, np.random.SeedSequence, np.random.Generator]

NEIGHBOR_OFFSETS: Tuple[Coord, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

# First clicked cell plus its 8 neighbors
SAFE_ZONE_SIZE = 9


class GameStatus(Enum):
    """Possible outcomes of the game."""

    IN_PROGRESS = auto()
    WIN = auto()
    LOSE = auto()


@dataclass(frozen=True)
class GameInfo:
    """
    Summary derived from the cells of a board.

    Attributes:
        num_mines: Total mines on the board.
        num_marked_mines: Cells flagged as mine plus exploded mines.
        num_exploded: Exposed cells that contained a mine.
        status: Current game status.
    """

    num_mines: int
    num_marked_mines: int
    num_exploded: int
    status: GameStatus


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidDimensionsError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidDimensionsError("Number of mines cannot be negative")
        if self.num_mines > self.max_mines:
            raise InvalidDimensionsError(f"Too many mines (max {self.max_mines})")

    @property
    def max_mines(self) -> int:
        """Most mines that still leave room for the safe first-click zone."""
        return max(self.width * self.height - SAFE_ZONE_SIZE, 0)


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass(frozen=True)
class Board:
    """
    Immutable Minesweeper game board.

    Cells are stored in row-major order. Mines are placed lazily on the
    first clear_cell() unless the board was built from explicit cells.
    Use create(), from_config() or from_cells() to build a board.
    """

    num_rows: int
    num_columns: int
    cells: Tuple[Cell, ...] = field(repr=False)
    num_mines: int = 0
    mines_allocated: bool = False
    rng: RandomSource = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Freeze the cell sequence and check it matches the dimensions."""
        object.__setattr__(self, "cells", tuple(self.cells))
        if self.num_rows < 1 or self.num_columns < 1:
            raise InvalidDimensionsError("Board dimensions must be positive")
        if len(self.cells) != self.num_rows * self.num_columns:
            raise InvalidDimensionsError(
                f"Expected {self.num_rows * self.num_columns} cells, "
                f"got {len(self.cells)}"
            )

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def create(
        cls,
        num_rows: int,
        num_columns: int,
        num_mines: int = 0,
        rng: RandomSource = None,
    ) -> "Board":
        """
        Create a covered board whose mines are placed on the first reveal.

        Args:
            num_rows: Number of rows.
            num_columns: Number of columns.
            num_mines: Mines to place on the first reveal.
            rng: Randomness source for mine placement.
        """
        config = BoardConfig(width=num_columns, height=num_rows, num_mines=num_mines)
        return cls.from_config(config, rng=rng)

    @classmethod
    def from_config(cls, config: BoardConfig, rng: RandomSource = None) -> "Board":
        """Create a covered board from a BoardConfig."""
        return cls(
            num_rows=config.height,
            num_columns=config.width,
            cells=(Cell(),) * (config.width * config.height),
            num_mines=config.num_mines,
            rng=rng,
        )

    @classmethod
    def from_cells(
        cls, num_rows: int, num_columns: int, cells: Iterable[Cell]
    ) -> "Board":
        """
        Create a board from an explicit row-major cell sequence.

        The mine layout is taken as final, so no lazy placement happens.

        Raises:
            InvalidDimensionsError: If the cell count is not rows * columns.
        """
        cells = tuple(cells)
        return cls(
            num_rows=num_rows,
            num_columns=num_columns,
            cells=cells,
            num_mines=sum(1 for cell in cells if cell.has_mine),
            mines_allocated=True,
        )

    # ========================================================================
    # Coordinate Utilities (Low-level)
    # ========================================================================

    @property
    def num_cells(self) -> int:
        """Total number of cells."""
        return self.num_rows * self.num_columns

    def _index(self, row: int, column: int) -> int:
        """Row-major index of a position."""
        return row * self.num_columns + column

    def _coord(self, index: int) -> Coord:
        """Position of a row-major index."""
        return divmod(index, self.num_columns)

    def _is_valid_position(self, row: int, column: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.num_rows and 0 <= column < self.num_columns

    def _validate_coord(self, row: int, column: int) -> None:
        """Raise OutOfBoundsError if position is outside the grid."""
        if not self._is_valid_position(row, column):
            raise OutOfBoundsError(row, column, self.num_rows, self.num_columns)

    def _neighbor_coords(self, row: int, column: int) -> List[Coord]:
        """Get neighboring positions without validating the center."""
        return [
            (row + delta_row, column + delta_col)
            for delta_row, delta_col in NEIGHBOR_OFFSETS
            if self._is_valid_position(row + delta_row, column + delta_col)
        ]

    def _cell(self, row: int, column: int) -> Cell:
        """Get the cell at a validated position."""
        self._validate_coord(row, column)
        return self.cells[self._index(row, column)]

    def _count_adjacent_mines(self, row: int, column: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for n_row, n_col in self._neighbor_coords(row, column)
            if self.cells[self._index(n_row, n_col)].has_mine
        )

    # ========================================================================
    # Queries
    # ========================================================================

    def cell_state(self, row: int, column: int) -> CellState:
        """
        Get the visible state of a cell.

        Raises:
            OutOfBoundsError: If the position is outside the grid.
        """
        return self._cell(row, column).state

    def neighbor_coords(self, row: int, column: int) -> List[Coord]:
        """
        Get the up-to-8 neighboring positions, clipped to the grid.

        Neighbors are listed in NEIGHBOR_OFFSETS order.

        Raises:
            OutOfBoundsError: If the position is outside the grid.
        """
        self._validate_coord(row, column)
        return self._neighbor_coords(row, column)

    def neighbors(self, row: int, column: int) -> List[Tuple[Coord, CellState]]:
        """Get neighboring positions paired with their visible state."""
        return [
            ((n_row, n_col), self.cells[self._index(n_row, n_col)].state)
            for n_row, n_col in self.neighbor_coords(row, column)
        ]

    @property
    def game_info(self) -> GameInfo:
        """Compute mine counts and game status in one pass over the cells."""
        num_marked = 0
        num_exploded = 0
        all_settled = True

        for cell in self.cells:
            if cell.is_exploded:
                num_exploded += 1
                num_marked += 1
            elif cell.is_flagged:
                num_marked += 1
                if not cell.has_mine:
                    all_settled = False
            elif cell.is_covered:
                all_settled = False
            # exposed safe cells are always settled

        if num_exploded > 0:
            status = GameStatus.LOSE
        elif all_settled:
            status = GameStatus.WIN
        else:
            status = GameStatus.IN_PROGRESS

        return GameInfo(
            num_mines=self.num_mines,
            num_marked_mines=num_marked,
            num_exploded=num_exploded,
            status=status,
        )

    @property
    def num_exposed(self) -> int:
        """Number of exposed cells, exploded ones included."""
        return sum(1 for cell in self.cells if cell.is_exposed)

    @property
    def game_status(self) -> GameStatus:
        """Get current game status."""
        return self.game_info.status

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.game_status == GameStatus.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self.game_status == GameStatus.WIN

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self.game_status == GameStatus.LOSE

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array of Cell.to_observation() values.
        """
        obs = np.fromiter(
            (cell.to_observation() for cell in self.cells),
            dtype=np.int8,
            count=self.num_cells,
        )
        return obs.reshape(self.num_rows, self.num_columns)

    def get_valid_actions(self) -> List[Coord]:
        """
        Get list of cells that can be cleared.

        Returns:
            (row, col) positions of covered cells not flagged as mines.
        """
        return [
            self._coord(index)
            for index, cell in enumerate(self.cells)
            if cell.is_covered and not cell.is_flagged
        ]

    # ========================================================================
    # Game Actions
    # ========================================================================

    def clear_cell(self, row: int, column: int) -> "Board":
        """
        Expose a cell, cascading through neighbors with no nearby mines.

        On the first clear of a lazily mined board, mines are placed
        first, avoiding the cleared cell and its neighbors.

        Args:
            row: Row index to clear.
            column: Column index to clear.

        Returns:
            New board, or this board if the cell is already exposed.

        Raises:
            OutOfBoundsError: If the position is outside the grid.
        """
        cell = self._cell(row, column)
        if cell.is_exposed:
            return self

        if not self.mines_allocated:
            return self._allocate_mines(row, column).clear_cell(row, column)

        return self._expose_cascade([self._index(row, column)])

    def clear_neighbors(self, row: int, column: int) -> "Board":
        """
        Chord: clear all unflagged covered neighbors of an exposed cell.

        Only applies when the number of neighbors flagged as mine equals
        the cell's nearby mine count.

        Returns:
            New board, or this board if the chord does not apply.

        Raises:
            OutOfBoundsError: If the position is outside the grid.
        """
        state = self.cell_state(row, column)
        if not isinstance(state, Exposed) or state.exploded:
            return self

        to_clear = []
        num_flagged = 0
        for n_row, n_col in self._neighbor_coords(row, column):
            index = self._index(n_row, n_col)
            neighbor = self.cells[index]
            if neighbor.is_flagged:
                num_flagged += 1
            elif neighbor.is_covered:
                to_clear.append(index)

        if num_flagged != state.num_mines_nearby or not to_clear:
            return self

        return self._expose_cascade(to_clear)

    def mark_cell(
        self, row: int, column: int, marker: Optional[Marker] = None
    ) -> "Board":
        """
        Set or clear the marker on a covered cell.

        Args:
            row: Row index.
            column: Column index.
            marker: Marker to apply, or None to remove the current one.

        Raises:
            OutOfBoundsError: If the position is outside the grid.
            InvalidOperationError: If the cell is already exposed.
        """
        cell = self._cell(row, column)
        if cell.is_exposed:
            raise InvalidOperationError(
                f"Can't mark exposed cell ({row}, {column})"
            )

        new_cell = cell.with_marker(marker)
        if new_cell is cell:
            return self
        return self._with_cell(self._index(row, column), new_cell)

    # ========================================================================
    # Transitions (Internal)
    # ========================================================================

    def _with_cell(self, index: int, cell: Cell) -> "Board":
        """Copy of the board with one cell replaced."""
        cells = list(self.cells)
        cells[index] = cell
        return replace(self, cells=cells)

    def _allocate_mines(self, row: int, column: int) -> "Board":
        """
        Place mines randomly outside the safe zone around (row, column).

        Raises:
            InvalidOperationError: If the safe zone leaves too few cells.
        """
        safe_zone = {self._index(row, column)}
        safe_zone.update(
            self._index(n_row, n_col)
            for n_row, n_col in self._neighbor_coords(row, column)
        )
        candidates = [i for i in range(self.num_cells) if i not in safe_zone]
        if self.num_mines > len(candidates):
            raise InvalidOperationError(
                f"Cannot place {self.num_mines} mines: only {len(candidates)} "
                f"cells outside the safe zone"
            )

        mine_indexes = set()
        if self.num_mines > 0:
            rng = np.random.default_rng(self.rng)
            chosen = rng.choice(
                np.asarray(candidates, dtype=np.intp),
                size=self.num_mines,
                replace=False,
            )
            mine_indexes = set(chosen.tolist())

        logger.debug(
            "Placed %d mines avoiding (%d, %d) on %dx%d board",
            self.num_mines, row, column, self.num_rows, self.num_columns,
        )
        cells = [
            replace(cell, has_mine=index in mine_indexes)
            for index, cell in enumerate(self.cells)
        ]
        return replace(self, cells=cells, mines_allocated=True)

    def _expose_cascade(self, start: Iterable[int]) -> "Board":
        """
        Expose cells starting from the given indexes, flooding outward.

        A safe cell with no nearby mines queues its covered neighbors,
        except those flagged as mines. Each cell is queued at most once.
        """
        cells = list(self.cells)
        pending = deque(start)
        queued = set(pending)

        while pending:
            index = pending.popleft()
            cell = cells[index]
            if cell.is_exposed:
                continue

            row, column = self._coord(index)
            exposed = cell.expose(self._count_adjacent_mines(row, column))
            cells[index] = exposed

            if exposed.has_mine:
                logger.info("Mine exploded at (%d, %d)", row, column)
                continue
            if exposed.state.num_mines_nearby > 0:
                continue

            for n_row, n_col in self._neighbor_coords(row, column):
                n_index = self._index(n_row, n_col)
                if n_index in queued:
                    continue
                neighbor = cells[n_index]
                if neighbor.is_covered and not neighbor.is_flagged:
                    queued.add(n_index)
                    pending.append(n_index)

        return replace(self, cells=cells)

"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, List

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, Exposed, Marker


def board_from_layout(layout: List[str]) -> Board:
    """Build a board from rows of '*' (mine) and '.' (safe)."""
    cells = [Cell(has_mine=char == "*") for row in layout for char in row]
    return Board.from_cells(len(layout), len(layout[0]), cells)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def make_board() -> Callable[[List[str]], Board]:
    """Factory building boards with explicit mine layouts."""
    return board_from_layout


@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board.from_config(BoardConfig(), rng=1234)


@pytest.fixture
def empty_board() -> Board:
    """Create a 5x6 board with no mines for cascade testing."""
    return Board.create(5, 6)


@pytest.fixture
def two_mine_board() -> Board:
    """2x2 board with mines along the top row."""
    return board_from_layout(["**", ".."])


@pytest.fixture
def corner_mine_board() -> Board:
    """3x3 board with a single mine in the top-left corner."""
    return board_from_layout(["*..", "...", "..."])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def covered_cell() -> Cell:
    """Create a covered cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a covered cell containing a mine."""
    return Cell(has_mine=True)


@pytest.fixture
def flagged_cell() -> Cell:
    """Create a covered cell flagged as a mine."""
    return Cell().with_marker(Marker.MINE)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create an exposed cell with adjacent mines."""
    return Cell(state=Exposed(num_mines_nearby=3))


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def no_mine_config() -> BoardConfig:
    """Small configuration without mines."""
    return BoardConfig(5, 4, 0)

"""
Unit tests for Cell class.

Tests cell states, exposure, markers and observation conversion.
"""
import pytest
from minesweeper import Cell, Covered, Exposed, InvalidOperationError, Marker


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        assert Cell().has_mine is False

    def test_default_cell_is_covered_without_marker(self) -> None:
        """New cell should be covered with no marker."""
        cell = Cell()
        assert cell.state == Covered()
        assert cell.is_covered is True
        assert cell.marker is None

    def test_cells_compare_by_value(self) -> None:
        """Equal fields make equal cells."""
        assert Cell(has_mine=True) == Cell(has_mine=True)
        assert Cell() != Cell(state=Covered(Marker.MAYBE))

    def test_cell_is_immutable(self, covered_cell: Cell) -> None:
        """Cells cannot be modified in place."""
        with pytest.raises(AttributeError):
            covered_cell.has_mine = True


# ============================================================================
# Cell Expose Tests
# ============================================================================

class TestCellExpose:
    """Test cell exposure behavior."""

    def test_expose_records_nearby_count(self, covered_cell: Cell) -> None:
        """Exposing a safe cell records its count and does not explode."""
        exposed = covered_cell.expose(2)
        assert exposed.state == Exposed(exploded=False, num_mines_nearby=2)
        assert exposed.is_exposed is True

    def test_expose_does_not_modify_original(self, covered_cell: Cell) -> None:
        """Exposing returns a new cell."""
        covered_cell.expose(0)
        assert covered_cell.is_covered is True

    def test_expose_mine_explodes(self, mine_cell: Cell) -> None:
        """Exposing a mine marks it exploded."""
        exposed = mine_cell.expose(1)
        assert exposed.is_exploded is True

    def test_expose_exposed_cell_is_noop(self, numbered_cell: Cell) -> None:
        """An exposed cell never changes again."""
        assert numbered_cell.expose(0) is numbered_cell

    def test_expose_drops_marker(self, flagged_cell: Cell) -> None:
        """Exposed cells carry no marker."""
        exposed = flagged_cell.expose(0)
        assert exposed.marker is None
        assert exposed.is_flagged is False


# ============================================================================
# Cell Marker Tests
# ============================================================================

class TestCellMarker:
    """Test cell marker behavior."""

    @pytest.mark.parametrize("marker", [Marker.MINE, Marker.MAYBE])
    def test_set_marker(self, covered_cell: Cell, marker: Marker) -> None:
        """Covered cells accept either marker."""
        assert covered_cell.with_marker(marker).marker is marker

    def test_flag_as_mine(self, flagged_cell: Cell) -> None:
        """Mine marker makes the cell flagged."""
        assert flagged_cell.is_flagged is True

    def test_clear_marker(self, flagged_cell: Cell) -> None:
        """Passing None removes the marker."""
        assert flagged_cell.with_marker(None) == Cell()

    def test_same_marker_returns_same_cell(self, flagged_cell: Cell) -> None:
        """Reapplying the current marker changes nothing."""
        assert flagged_cell.with_marker(Marker.MINE) is flagged_cell

    def test_mark_exposed_cell_raises(self, numbered_cell: Cell) -> None:
        """Exposed cells cannot be marked."""
        with pytest.raises(InvalidOperationError):
            numbered_cell.with_marker(Marker.MINE)

    def test_unknown_marker_raises(self, covered_cell: Cell) -> None:
        """Values outside Marker are rejected."""
        with pytest.raises(InvalidOperationError):
            covered_cell.with_marker("maybe")


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation values."""

    def test_covered_cell_observation_is_negative_one(
        self, covered_cell: Cell
    ) -> None:
        """Covered cell should return -1 for observation."""
        assert covered_cell.to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(
        self, flagged_cell: Cell
    ) -> None:
        """Flagged cell should return -2 for observation."""
        assert flagged_cell.to_observation() == -2

    def test_maybe_cell_observation_is_negative_three(
        self, covered_cell: Cell
    ) -> None:
        """Maybe-marked cell should return -3 for observation."""
        assert covered_cell.with_marker(Marker.MAYBE).to_observation() == -3

    def test_covered_mine_is_hidden(self, mine_cell: Cell) -> None:
        """Covered mines look like any other covered cell."""
        assert mine_cell.to_observation() == -1

    @pytest.mark.parametrize("count", range(0, 9))
    def test_exposed_cell_observation_matches_count(self, count: int) -> None:
        """Exposed cell returns its adjacent mine count."""
        assert Cell().expose(count).to_observation() == count

    def test_exploded_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """Exploded mine should return 9 for observation."""
        assert mine_cell.expose(0).to_observation() == 9

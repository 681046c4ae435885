"""
Cell module for Minesweeper game.

A cell holds its ground truth (whether it contains a mine) and its
visible state. The visible state is either covered, optionally carrying
a marker, or exposed, carrying the neighbor mine count captured at the
moment of exposure. Cells are immutable: every change returns a new cell.
"""
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Optional, Union

from .errors import InvalidOperationError


# ============================================================================
# Constants
# ============================================================================

class Marker(Enum):
    """Annotations a player can put on a covered cell."""

    MINE = auto()
    MAYBE = auto()


# ============================================================================
# Cell States
# ============================================================================

@dataclass(frozen=True)
class Covered:
    """Cell not yet exposed, with an optional player marker."""

    marker: Optional[Marker] = None


@dataclass(frozen=True)
class Exposed:
    """
    Cell that has been exposed.

    Attributes:
        exploded: True if the cell had a mine when it was exposed.
        num_mines_nearby: Mines in the 8-neighborhood at exposure time.
    """

    exploded: bool = False
    num_mines_nearby: int = 0


CellState = Union[Covered, Exposed]


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        has_mine: Whether this cell contains a mine.
        state: Current visible state (covered or exposed).
    """

    has_mine: bool = False
    state: CellState = field(default_factory=Covered)

    def expose(self, num_mines_nearby: int) -> "Cell":
        """
        Expose this cell.

        Args:
            num_mines_nearby: Count of neighboring mines to record.

        Returns:
            Exposed copy of the cell, or this cell if already exposed.
        """
        if self.is_exposed:
            return self
        return replace(
            self,
            state=Exposed(exploded=self.has_mine, num_mines_nearby=num_mines_nearby),
        )

    def with_marker(self, marker: Optional[Marker]) -> "Cell":
        """
        Set or clear (None) the marker on this cell.

        Raises:
            InvalidOperationError: If the cell is already exposed or the
                marker is neither None nor a Marker.
        """
        if marker is not None and not isinstance(marker, Marker):
            raise InvalidOperationError(f"Unknown marker: {marker!r}")
        if self.is_exposed:
            raise InvalidOperationError("Can't mark an exposed cell")
        if self.marker is marker:
            return self
        return replace(self, state=Covered(marker=marker))

    @property
    def is_covered(self) -> bool:
        """Check if cell is covered."""
        return isinstance(self.state, Covered)

    @property
    def is_exposed(self) -> bool:
        """Check if cell is exposed."""
        return isinstance(self.state, Exposed)

    @property
    def is_exploded(self) -> bool:
        """Check if cell is an exposed mine."""
        return isinstance(self.state, Exposed) and self.state.exploded

    @property
    def marker(self) -> Optional[Marker]:
        """Marker on a covered cell; always None once exposed."""
        if isinstance(self.state, Covered):
            return self.state.marker
        return None

    @property
    def is_flagged(self) -> bool:
        """Check if cell is covered and flagged as a mine."""
        return self.marker is Marker.MINE

    def to_observation(self) -> int:
        """
        Convert cell to observation value for agents and renderers.

        Returns:
            -1: Covered cell without marker
            -2: Covered cell flagged as mine
            -3: Covered cell marked maybe
            0-8: Exposed cell with adjacent mine count
            9: Exploded mine
        """
        state = self.state
        if isinstance(state, Covered):
            if state.marker is Marker.MINE:
                return -2
            if state.marker is Marker.MAYBE:
                return -3
            return -1
        if state.exploded:
            return 9
        return state.num_mines_nearby

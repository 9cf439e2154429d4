"""Two-valued cell state."""

from enum import IntEnum


class Cell(IntEnum):
    """State of a single cell.

    Values match the int8 storage used by the grid, so a ``Cell`` can be
    written straight into the cell array.
    """

    DEAD = 0
    ALIVE = 1

    @classmethod
    def from_bool(cls, value: bool) -> "Cell":
        """Convert a boolean into a cell state (True is alive)."""
        return cls.ALIVE if value else cls.DEAD

    @property
    def glyph(self) -> str:
        """Display character for this state."""
        return "█" if self is Cell.ALIVE else "░"

    def __str__(self) -> str:
        return self.glyph

"""Seed patterns for N-dimensional grids and a small pattern library."""

from typing import Dict, List, Optional, Sequence, Tuple

from .cell import Cell
from .errors import OutOfBoundsError
from .grid import Grid

Coords = Tuple[int, ...]


class Pattern:
    """A set of living cells in a fixed number of dimensions."""

    def __init__(
        self,
        name: str,
        cells: Sequence[Sequence[int]],
        description: str = "",
        dim: Optional[int] = None,
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: Coordinates of living cells, one tuple per cell
            description: Optional description
            dim: Dimension count; required only when ``cells`` is empty

        Raises:
            ValueError: If cell coordinates disagree on their length
        """
        self.name = name
        self.cells: List[Coords] = [tuple(int(c) for c in cell) for cell in cells]
        self.description = description

        lengths = {len(cell) for cell in self.cells}
        if dim is not None:
            lengths.add(dim)
        if len(lengths) != 1:
            raise ValueError(f"Pattern '{name}' needs cells of one dimensionality, got lengths {sorted(lengths)}")
        self.dim = lengths.pop()

    def get_bounding_box(self) -> Tuple[Coords, Coords]:
        """Get per-axis bounds of the pattern.

        Returns:
            Tuple of (min_coords, max_coords)
        """
        if not self.cells:
            origin = (0,) * self.dim
            return (origin, origin)

        axes = list(zip(*self.cells))
        return (tuple(min(axis) for axis in axes), tuple(max(axis) for axis in axes))

    def get_size(self) -> Coords:
        """Extent of the pattern along each axis."""
        mins, maxs = self.get_bounding_box()
        return tuple(high - low + 1 for low, high in zip(mins, maxs))

    def normalize(self) -> "Pattern":
        """Return a copy shifted so the bounding box starts at the origin."""
        mins, _ = self.get_bounding_box()
        cells = [tuple(c - low for c, low in zip(cell, mins)) for cell in self.cells]
        return Pattern(self.name, cells, self.description, dim=self.dim)

    def centered_offset(self, grid: Grid) -> Coords:
        """Offset that places the pattern in the middle of ``grid``."""
        return tuple(max(0, (grid.size - extent) // 2) for extent in self.get_size())

    def apply_to_grid(self, grid: Grid, offset: Optional[Sequence[int]] = None, clear: bool = True) -> None:
        """Apply this pattern to a grid.

        Cells that land outside the grid are skipped.

        Args:
            grid: Target grid
            offset: Per-axis shift (defaults to the origin)
            clear: Whether to clear the grid first

        Raises:
            ValueError: If the pattern and grid dimensions differ
        """
        if grid.dim != self.dim:
            raise ValueError(f"Pattern '{self.name}' is {self.dim}D but the grid is {grid.dim}D")

        offset = tuple(offset) if offset is not None else (0,) * self.dim
        if clear:
            grid.clear()
        for cell in self.cells:
            try:
                grid.set_cell_at(tuple(c + o for c, o in zip(cell, offset)), Cell.ALIVE)
            except OutOfBoundsError:
                pass

    @classmethod
    def from_grid(cls, grid: Grid, name: str, description: str = "") -> "Pattern":
        """Create a pattern from the living cells of a grid."""
        cells = [grid.index_to_coords(index) for index, value in enumerate(grid.cells) if value]
        return cls(name, cells, description, dim=grid.dim)

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, {len(self.cells)} cells, {self.dim}D)"


class PatternLibrary:
    """Manages a collection of patterns."""

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in patterns."""
        # One dimension
        self.add_pattern(Pattern("Dot", [(0,)], "Single live cell"))
        self.add_pattern(Pattern("Pair", [(0,), (1,)], "Two adjacent live cells"))

        # Two dimensions (classic Life under either rule variant)
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))
        self.add_pattern(
            Pattern(
                "Beehive",
                [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (2, 2)],
                "Beehive still life",
            )
        )
        self.add_pattern(Pattern("Blinker", [(0, 1), (1, 1), (2, 1)], "Period-2 oscillator"))
        self.add_pattern(
            Pattern(
                "Toad",
                [(1, 0), (2, 0), (3, 0), (0, 1), (1, 1), (2, 1)],
                "Period-2 oscillator",
            )
        )
        self.add_pattern(
            Pattern(
                "Glider",
                [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)],
                "Smallest spaceship, period-4",
            )
        )
        self.add_pattern(
            Pattern(
                "R-pentomino",
                [(1, 0), (2, 0), (0, 1), (1, 1), (1, 2)],
                "Famous methuselah that stabilizes after 1103 generations",
            )
        )

        # Three dimensions
        self.add_pattern(
            Pattern(
                "Cross3D",
                [(1, 1, 1), (0, 1, 1), (2, 1, 1), (1, 0, 1), (1, 2, 1), (1, 1, 0), (1, 1, 2)],
                "Center cell and its six face neighbors",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library, replacing one with the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def list_patterns_for_dim(self, dim: int) -> List[str]:
        """Names of the patterns that fit a ``dim``-dimensional grid."""
        return [name for name, pattern in self._patterns.items() if pattern.dim == dim]

    def get_patterns_by_dimension(self) -> Dict[int, List[str]]:
        """Pattern names grouped by dimension count, lowest first."""
        groups: Dict[int, List[str]] = {}
        for name, pattern in self._patterns.items():
            groups.setdefault(pattern.dim, []).append(name)
        return dict(sorted(groups.items()))

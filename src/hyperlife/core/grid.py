"""Dense N-dimensional grid for cellular automata."""

import logging
import operator
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import torch
import torch.nn.functional as F

from .cell import Cell
from .coords import cell_count, check_shape, coords_to_index, index_to_coords
from .errors import CoordinateLengthError, OutOfBoundsError
from .neighbors import neighbor_indices, neighbor_offsets
from .rules import RuleParameters, RuleVariant, derive

logger = logging.getLogger(__name__)

CellState = Union[Cell, bool, int]
RandomSource = Union[None, int, np.random.Generator]

_CONVOLUTIONS = {1: F.conv1d, 2: F.conv2d, 3: F.conv3d}


class Grid:
    """A hypercubic grid of ``size**dim`` cells with bounded edges.

    Cells are stored flat in a numpy int8 array, indexed by the mixed-radix
    encoding of their coordinates (axis 0 least significant). A second
    buffer of the same shape holds the previous generation.
    """

    def __init__(self, variant: Union[str, RuleVariant], dimensions: int, size: int) -> None:
        """Initialize a new grid with every cell dead.

        Args:
            variant: Rule variant used to derive the thresholds
            dimensions: Number of axes (at least 1)
            size: Number of cells along every axis (at least 1)

        Raises:
            DegenerateGridError: If ``dimensions`` or ``size`` is not positive
            ValueError: If ``variant`` is unknown
        """
        check_shape(size, dimensions)
        self.dim = dimensions
        self.size = size
        self.variant = RuleVariant.from_name(variant)
        self.rules: RuleParameters = derive(dimensions, self.variant)

        count = cell_count(size, dimensions)
        self._cells = np.zeros(count, dtype=np.int8)
        self._previous_cells = np.zeros(count, dtype=np.int8)

        # Zero-padded convolution kernel: all ones except the center cell
        self._torch_kernel: Optional[torch.Tensor] = None
        if dimensions in _CONVOLUTIONS:
            kernel = torch.ones((3,) * dimensions, dtype=torch.float32)
            kernel[(1,) * dimensions] = 0
            self._torch_kernel = kernel.unsqueeze(0).unsqueeze(0)

        logger.debug(
            "Created %dD grid of side %d (%d cells), %s rules %s",
            dimensions,
            size,
            count,
            self.variant.value,
            self.rules.describe(),
        )

    @property
    def min_neighbors(self) -> int:
        """Fewest alive neighbors a cell needs to stay alive."""
        return self.rules.min_neighbors

    @property
    def min_breed_neighbors(self) -> int:
        """Fewest alive neighbors that bring a cell to life."""
        return self.rules.min_breed_neighbors

    @property
    def max_neighbors(self) -> int:
        """Most alive neighbors a cell tolerates."""
        return self.rules.max_neighbors

    @property
    def cells(self) -> np.ndarray:
        """Get the current flat cell array."""
        return self._cells

    @property
    def previous_cells(self) -> np.ndarray:
        """Get the previous flat cell array."""
        return self._previous_cells

    @property
    def shape(self) -> Tuple[int, ...]:
        """Grid shape, one entry per axis."""
        return (self.size,) * self.dim

    @property
    def lattice(self) -> np.ndarray:
        """Current cells viewed as an N-d array where axis k is coordinate k."""
        return self._cells.reshape(self.shape, order="F")

    def __len__(self) -> int:
        return len(self._cells)

    def _check_index(self, index: int) -> int:
        index = operator.index(index)
        if not 0 <= index < len(self._cells):
            raise OutOfBoundsError(f"Index {index} outside [0, {len(self._cells)})")
        return index

    def coords_to_index(self, coords: Sequence[int]) -> int:
        """Encode coordinates on this grid as a flat index."""
        return coords_to_index(self.size, self.dim, coords)

    def index_to_coords(self, index: int) -> Tuple[int, ...]:
        """Decode a flat index on this grid into coordinates."""
        return index_to_coords(self.size, self.dim, index)

    def get_cell(self, index: int) -> Cell:
        """Get the state of a cell.

        Raises:
            OutOfBoundsError: If ``index`` is outside the grid
            TypeError: If ``index`` is not an integer
        """
        return Cell(int(self._cells[self._check_index(index)]))

    def set_cell(self, index: int, state: CellState) -> None:
        """Set the state of a cell.

        Args:
            index: Flat cell index
            state: A ``Cell`` or anything truthy for alive

        Raises:
            OutOfBoundsError: If ``index`` is outside the grid
            TypeError: If ``index`` is not an integer
        """
        self._cells[self._check_index(index)] = Cell.from_bool(bool(state))

    def toggle_cell(self, index: int) -> Cell:
        """Flip a cell and return its new state."""
        new_state = Cell.from_bool(not self.get_cell(index))
        self.set_cell(index, new_state)
        return new_state

    def get_cell_at(self, coords: Sequence[int]) -> Cell:
        """Get the state of the cell at ``coords``."""
        return self.get_cell(self.coords_to_index(coords))

    def set_cell_at(self, coords: Sequence[int], state: CellState) -> None:
        """Set the state of the cell at ``coords``."""
        self.set_cell(self.coords_to_index(coords), state)

    def get_neighbor_indices(self, index: int) -> List[int]:
        """Indices of all in-bounds neighbors of a cell."""
        return neighbor_indices(self.size, self.dim, index)

    def count_alive_neighbors(self, index: int, cells: Optional[np.ndarray] = None) -> int:
        """Count alive neighbors of one cell by enumerating its neighborhood.

        Args:
            index: Flat cell index
            cells: Flat cell array to read from (defaults to the current cells)
        """
        source = self._cells if cells is None else cells
        return sum(1 for neighbor in self.get_neighbor_indices(index) if source[neighbor])

    def count_all_neighbors(self, cells: Optional[np.ndarray] = None) -> np.ndarray:
        """Count alive neighbors for every cell at once.

        One to three dimensional grids use a PyTorch convolution with zero
        padding; higher dimensions sum shifted slices of a zero-padded numpy
        array, one slice per neighbor offset.

        Args:
            cells: Flat cell array to read from (defaults to the current cells)

        Returns:
            Flat int array of neighbor counts in index order
        """
        source = self._cells if cells is None else cells
        lattice = (source.reshape(self.shape, order="F") > 0)

        if self._torch_kernel is not None:
            conv = _CONVOLUTIONS[self.dim]
            tensor = torch.from_numpy(np.ascontiguousarray(lattice, dtype=np.float32))
            counts = conv(tensor.unsqueeze(0).unsqueeze(0), self._torch_kernel, padding=1)
            counts = np.rint(counts[0, 0].numpy()).astype(np.int64)
        else:
            padded = np.pad(lattice.astype(np.int64), 1)
            counts = np.zeros(self.shape, dtype=np.int64)
            for offset in neighbor_offsets(self.dim):
                window = tuple(slice(1 + step, 1 + step + self.size) for step in offset)
                counts += padded[window]

        return counts.ravel(order="F")

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._cells.fill(Cell.DEAD)

    def randomize(self, probability: float = 0.5, rng: RandomSource = None) -> None:
        """Randomly populate the grid.

        Args:
            probability: Chance each cell will be alive (0.0 to 1.0)
            rng: Random generator or seed; a fresh generator when None
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Probability must be between 0.0 and 1.0, got {probability}")
        generator = np.random.default_rng(rng)
        mask = generator.random(len(self._cells)) < probability
        self._cells[mask] = Cell.ALIVE
        self._cells[~mask] = Cell.DEAD

    def randomize_grid(self, rng: RandomSource = None) -> None:
        """Give every cell an even chance of being alive."""
        self.randomize(0.5, rng)

    def copy(self) -> "Grid":
        """Return an independent grid with the same rules and cells."""
        clone = Grid(self.variant, self.dim, self.size)
        clone.copy_from(self)
        clone._previous_cells[:] = self._previous_cells
        return clone

    def copy_from(self, other: "Grid") -> None:
        """Copy cell states from another grid.

        Raises:
            ValueError: If grids have different shapes
        """
        if other.shape != self.shape:
            raise ValueError(f"Grid shapes don't match: {other.shape} vs {self.shape}")

        self._cells[:] = other._cells

    def save_state(self) -> None:
        """Save current state to previous state."""
        self._previous_cells[:] = self._cells

    def get_changed_indices(self) -> Iterator[int]:
        """Yield indices of cells that changed since the last ``save_state()``."""
        for index in np.flatnonzero(self._cells != self._previous_cells):
            yield int(index)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def to_list(self) -> List[int]:
        """Flat list of cell states (0 or 1) in index order."""
        return self._cells.tolist()

    def from_list(self, data: Sequence[CellState]) -> None:
        """Load cells from a flat sequence in index order.

        Raises:
            ValueError: If the length doesn't match the grid
        """
        arr = np.asarray([bool(value) for value in data], dtype=np.int8)
        if arr.shape != self._cells.shape:
            raise ValueError(f"Expected {len(self._cells)} cells, got {len(arr)}")

        self._cells[:] = arr

    def get_bounding_box(self) -> Optional[Tuple[Tuple[int, ...], Tuple[int, ...]]]:
        """Get the per-axis bounds of living cells.

        Returns:
            ``(min_coords, max_coords)`` or None if no cell is alive
        """
        living = np.nonzero(self.lattice)
        if len(living[0]) == 0:
            return None

        mins = tuple(int(axis.min()) for axis in living)
        maxs = tuple(int(axis.max()) for axis in living)
        return (mins, maxs)

    def render_plane(self, fixed: Optional[Sequence[int]] = None) -> str:
        """Render a 2D cross-section as rows of cell glyphs.

        Axis 0 runs along each row and axis 1 down the rows. Axes beyond the
        second are held at the coordinates in ``fixed`` (all zero by default).
        A one dimensional grid renders as a single row.

        Raises:
            CoordinateLengthError: If ``fixed`` doesn't cover the extra axes
        """
        extra = max(self.dim - 2, 0)
        fixed = tuple(fixed) if fixed is not None else (0,) * extra
        if len(fixed) != extra:
            raise CoordinateLengthError(f"Expected {extra} fixed coordinates, got {len(fixed)}")

        if self.dim == 1:
            return "".join(Cell(int(value)).glyph for value in self._cells)

        rows = []
        for y in range(self.size):
            row = [self.get_cell_at((x, y) + fixed).glyph for x in range(self.size)]
            rows.append("".join(row))
        return "\n".join(rows)

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return False
        return (
            self.shape == other.shape
            and self.variant == other.variant
            and np.array_equal(self._cells, other._cells)
        )

    def __str__(self) -> str:
        """Glyph rendering of the grid (the first plane for 3D and up)."""
        return self.render_plane()

    def __repr__(self) -> str:
        return f"Grid(variant={self.variant.value!r}, dimensions={self.dim}, size={self.size})"

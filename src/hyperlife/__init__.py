"""N-dimensional cellular automata with generalized Game of Life rules."""

__version__ = "0.1.0"

from .core.cell import Cell
from .core.coords import coords_to_index, index_to_coords
from .core.errors import CoordinateLengthError, DegenerateGridError, HyperlifeError, OutOfBoundsError
from .core.game import GameOfLife
from .core.grid import Grid
from .core.neighbors import neighbor_indices
from .core.patterns import Pattern, PatternLibrary
from .core.rules import RuleParameters, RuleVariant, derive as derive_rules

__all__ = [
    "Cell",
    "CoordinateLengthError",
    "DegenerateGridError",
    "GameOfLife",
    "Grid",
    "HyperlifeError",
    "OutOfBoundsError",
    "Pattern",
    "PatternLibrary",
    "RuleParameters",
    "RuleVariant",
    "coords_to_index",
    "derive_rules",
    "index_to_coords",
    "neighbor_indices",
]

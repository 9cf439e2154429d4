"""Conversion between flat cell indices and N-dimensional coordinates.

Coordinates use mixed-radix (base ``size``) positional encoding with axis 0
as the least significant digit::

    index = coords[0] + size * coords[1] + size**2 * coords[2] + ...
"""

import operator
from typing import Sequence, Tuple

from .errors import CoordinateLengthError, DegenerateGridError, OutOfBoundsError


def check_shape(size: int, dim: int) -> None:
    """Reject non-positive axis sizes and dimension counts.

    Raises:
        DegenerateGridError: If ``size`` or ``dim`` is less than 1
    """
    if dim < 1:
        raise DegenerateGridError(f"Dimension count must be at least 1, got {dim}")
    if size < 1:
        raise DegenerateGridError(f"Axis size must be at least 1, got {size}")


def cell_count(size: int, dim: int) -> int:
    """Total number of cells in a ``dim``-dimensional grid of side ``size``."""
    check_shape(size, dim)
    return size**dim


def coords_to_index(size: int, dim: int, coords: Sequence[int]) -> int:
    """Encode a coordinate vector as a flat index.

    Args:
        size: Number of cells along each axis
        dim: Number of axes
        coords: One coordinate per axis, axis 0 first

    Returns:
        Flat index in ``[0, size**dim)``

    Raises:
        CoordinateLengthError: If ``len(coords) != dim``
        OutOfBoundsError: If any component is outside ``[0, size)``
        TypeError: If a component is not an integer
    """
    check_shape(size, dim)
    if len(coords) != dim:
        raise CoordinateLengthError(f"Expected {dim} coordinates, got {len(coords)}: {tuple(coords)}")

    index = 0
    scale = 1
    for axis, coord in enumerate(coords):
        coord = operator.index(coord)
        if not 0 <= coord < size:
            raise OutOfBoundsError(f"Coordinate {coord} on axis {axis} outside [0, {size})")
        index += scale * coord
        scale *= size

    return index


def index_to_coords(size: int, dim: int, index: int) -> Tuple[int, ...]:
    """Decode a flat index into its coordinate vector.

    Digits are peeled off from the most significant axis down and returned
    with axis 0 first.

    Raises:
        OutOfBoundsError: If ``index`` is outside ``[0, size**dim)``
        TypeError: If ``index`` is not an integer
    """
    index = operator.index(index)
    total = cell_count(size, dim)
    if not 0 <= index < total:
        raise OutOfBoundsError(f"Index {index} outside [0, {total})")

    remainder = index
    coords = [0] * dim
    for axis in range(dim - 1, -1, -1):
        scale = size**axis
        digit = remainder // scale
        remainder -= digit * scale
        coords[axis] = digit

    return tuple(coords)

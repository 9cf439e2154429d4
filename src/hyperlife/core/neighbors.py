"""Moore neighborhood enumeration in any number of dimensions."""

from functools import lru_cache
from typing import List, Tuple

from .coords import check_shape, coords_to_index, index_to_coords


def decode_offset(offset_id: int, dim: int) -> Tuple[int, ...]:
    """Turn a neighbor id into a relative offset.

    The id is read as ``dim`` base-3 digits, axis 0 least significant. Digit
    0 keeps the axis, 1 steps back and 2 steps forward.

    Args:
        offset_id: Neighbor id in ``[0, 3**dim)``
        dim: Number of axes

    Returns:
        Offset tuple with one entry in ``{-1, 0, 1}`` per axis
    """
    offset = [0] * dim
    remainder = offset_id
    for axis in range(dim - 1, -1, -1):
        place = 3**axis
        digit = remainder // place
        remainder -= digit * place
        if digit == 1:
            offset[axis] = -1
        elif digit == 2:
            offset[axis] = 1
    return tuple(offset)


@lru_cache(maxsize=None)
def neighbor_offsets(dim: int) -> Tuple[Tuple[int, ...], ...]:
    """All ``3**dim - 1`` neighbor offsets, ordered by ascending id."""
    check_shape(1, dim)
    return tuple(decode_offset(offset_id, dim) for offset_id in range(1, 3**dim))


def neighbor_indices(size: int, dim: int, index: int) -> List[int]:
    """Flat indices of every in-bounds neighbor of the cell at ``index``.

    There is no wraparound: a candidate that would step below 0 or reach
    ``size`` on any axis is dropped entirely. Cells on the boundary therefore
    get fewer than ``3**dim - 1`` neighbors.

    Raises:
        OutOfBoundsError: If ``index`` is outside the grid
    """
    coords = index_to_coords(size, dim, index)
    indices = []

    for offset in neighbor_offsets(dim):
        shifted = []
        for coord, step in zip(coords, offset):
            moved = coord + step
            if moved < 0 or moved >= size:
                break
            shifted.append(moved)
        else:
            indices.append(coords_to_index(size, dim, shifted))

    return indices

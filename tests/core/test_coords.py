"""Tests for the coordinate codec."""

import itertools

import numpy as np
import pytest

from hyperlife.core.coords import cell_count, coords_to_index, index_to_coords
from hyperlife.core.errors import CoordinateLengthError, DegenerateGridError, OutOfBoundsError


class TestCoordinateCodec:
    """Test cases for flat index / coordinate conversion."""

    def test_axis_zero_is_least_significant(self):
        """Axis 0 changes fastest in the flat order."""
        assert coords_to_index(10, 3, (1, 2, 3)) == 321
        assert coords_to_index(4, 2, (1, 0)) == 1
        assert coords_to_index(4, 2, (0, 1)) == 4

    def test_index_to_coords(self):
        """Digits are returned axis 0 first."""
        assert index_to_coords(10, 3, 321) == (1, 2, 3)
        assert index_to_coords(4, 2, 4) == (0, 1)
        assert index_to_coords(3, 1, 2) == (2,)

    @pytest.mark.parametrize("size,dim", [(1, 1), (5, 1), (3, 2), (4, 3), (2, 5)])
    def test_index_round_trip(self, size, dim):
        """Every index decodes and re-encodes to itself."""
        for index in range(cell_count(size, dim)):
            assert coords_to_index(size, dim, index_to_coords(size, dim, index)) == index

    @pytest.mark.parametrize("size,dim", [(3, 2), (3, 3)])
    def test_coords_round_trip(self, size, dim):
        """Every coordinate vector encodes and decodes to itself."""
        for coords in itertools.product(range(size), repeat=dim):
            assert index_to_coords(size, dim, coords_to_index(size, dim, coords)) == coords

    def test_cell_count(self):
        """Cell count is size to the power of dim."""
        assert cell_count(5, 1) == 5
        assert cell_count(3, 4) == 81
        assert cell_count(1, 6) == 1

    def test_wrong_length(self):
        """Coordinate vectors must have one entry per axis."""
        with pytest.raises(CoordinateLengthError):
            coords_to_index(5, 2, (1,))

        with pytest.raises(ValueError):
            coords_to_index(5, 2, (1, 2, 3))

    def test_component_out_of_range(self):
        """Components outside [0, size) are rejected rather than wrapped."""
        with pytest.raises(OutOfBoundsError):
            coords_to_index(5, 2, (5, 0))

        with pytest.raises(IndexError):
            coords_to_index(5, 2, (0, -1))

    def test_index_out_of_range(self):
        """Indices outside the grid are rejected."""
        with pytest.raises(OutOfBoundsError):
            index_to_coords(3, 2, 9)

        with pytest.raises(OutOfBoundsError):
            index_to_coords(3, 2, -1)

    def test_degenerate_shape(self):
        """Zero dimensions or zero size are rejected."""
        with pytest.raises(DegenerateGridError):
            coords_to_index(0, 1, (0,))

        with pytest.raises(DegenerateGridError):
            index_to_coords(3, 0, 0)

        with pytest.raises(DegenerateGridError):
            cell_count(3, 0)

    def test_non_integer_components_rejected(self):
        """Fractional coordinates and indices raise instead of truncating."""
        with pytest.raises(TypeError):
            coords_to_index(5, 2, (1.5, 0))

        with pytest.raises(TypeError):
            coords_to_index(5, 2, (1, 0.0))

        with pytest.raises(TypeError):
            index_to_coords(3, 2, 2.0)

    def test_numpy_integers_accepted(self):
        """Numpy integer scalars behave like ints."""
        assert coords_to_index(5, 2, (np.int64(1), np.int8(2))) == 11
        assert index_to_coords(5, 2, np.int64(11)) == (1, 2)

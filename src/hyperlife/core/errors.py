"""Exceptions raised by the hyperlife core."""


class HyperlifeError(Exception):
    """Base class for all hyperlife errors."""


class OutOfBoundsError(HyperlifeError, IndexError):
    """An index or coordinate component lies outside the grid."""


class CoordinateLengthError(HyperlifeError, ValueError):
    """A coordinate vector does not have one component per dimension."""


class DegenerateGridError(HyperlifeError, ValueError):
    """Grid dimensions or axis size are not positive."""

"""Threshold rules for N-dimensional Life.

Given ``d`` dimensions there are ``n = 3**d - 1`` cells in a full Moore
neighborhood. Each rule variant turns ``n`` into three thresholds:

* ``BASIC``
    - die with fewer than ``floor(n / 4)`` alive neighbors
    - die with more than ``floor((n + 1) / 3)`` alive neighbors
    - come to life with exactly ``floor((n + 1) / 3)`` alive neighbors
* ``PERCENTAGE``
    - die with fewer than ``0.25 n`` alive neighbors
    - die with more than ``0.40625 n`` alive neighbors
    - come to life with ``0.34375 n <= alive <= 0.40625 n``

In two dimensions both variants reduce to Conway's B3/S23.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .coords import check_shape


class RuleVariant(Enum):
    """Named policy for deriving thresholds from the dimension count."""

    BASIC = "basic"
    PERCENTAGE = "percentage"

    @classmethod
    def from_name(cls, name: Union[str, "RuleVariant"]) -> "RuleVariant":
        """Look up a variant by its (case-insensitive) name.

        Raises:
            ValueError: If the name does not match any variant
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            available = ", ".join(variant.value for variant in cls)
            raise ValueError(f"Unknown rule variant '{name}'. Available: {available}") from None


@dataclass(frozen=True)
class RuleParameters:
    """Survival and birth thresholds for one grid."""

    min_neighbors: int
    min_breed_neighbors: int
    max_neighbors: int
    neighborhood_size: int

    @property
    def has_survive_zone(self) -> bool:
        """Whether some counts keep a cell as it is without breeding."""
        return self.min_neighbors < self.min_breed_neighbors

    def describe(self) -> str:
        """Short human readable summary, e.g. ``B3/S2-3``."""
        if self.min_breed_neighbors > self.max_neighbors:
            birth = "B-"
        elif self.min_breed_neighbors == self.max_neighbors:
            birth = f"B{self.max_neighbors}"
        else:
            birth = f"B{self.min_breed_neighbors}-{self.max_neighbors}"
        return f"{birth}/S{self.min_neighbors}-{self.max_neighbors}"


def neighborhood_size(dim: int) -> int:
    """Number of cells in a full Moore neighborhood, excluding the center."""
    return 3**dim - 1


def derive(dim: int, variant: Union[str, RuleVariant]) -> RuleParameters:
    """Compute the thresholds for ``dim`` dimensions under ``variant``.

    The percentage fractions are exact binary fractions (11/32 and 13/32), so
    they are evaluated with integer arithmetic: ceil for the breed threshold,
    floor for the other two.

    Raises:
        DegenerateGridError: If ``dim`` is less than 1
        ValueError: If ``variant`` is not a known rule variant
    """
    check_shape(1, dim)
    variant = RuleVariant.from_name(variant)
    n = neighborhood_size(dim)

    min_neighbors = n // 4
    if variant is RuleVariant.BASIC:
        min_breed_neighbors = (n + 1) // 3
        max_neighbors = (n + 1) // 3
    else:
        min_breed_neighbors = -((-n * 11) // 32)
        max_neighbors = (n * 13) // 32

    return RuleParameters(
        min_neighbors=min_neighbors,
        min_breed_neighbors=min_breed_neighbors,
        max_neighbors=max_neighbors,
        neighborhood_size=n,
    )

"""Configuration for a simulation run."""

import argparse
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .rules import RuleVariant


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""

    dimensions: int = 2
    size: int = 100
    rules: RuleVariant = RuleVariant.PERCENTAGE
    population_rate: float = 0.5
    max_generations: int = 1000
    pattern: Optional[str] = None
    seed: Optional[int] = None
    plane: Optional[Sequence[int]] = None

    def validate(self) -> List[str]:
        """Check the configuration.

        Returns:
            List of error messages, empty when the configuration is valid
        """
        errors = []

        if self.dimensions <= 0:
            errors.append("Dimensions must be positive")

        if self.size <= 0:
            errors.append("Size must be positive")

        if not 0.0 <= self.population_rate <= 1.0:
            errors.append("Population rate must be between 0.0 and 1.0")

        if self.max_generations <= 0:
            errors.append("Max generations must be positive")

        if self.plane is not None:
            if len(self.plane) != max(self.dimensions - 2, 0):
                errors.append(f"Plane needs {max(self.dimensions - 2, 0)} coordinates for a {self.dimensions}D grid")
            elif any(not 0 <= coord < self.size for coord in self.plane):
                errors.append("Plane coordinates must lie inside the grid")

        return errors

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "SimulationConfig":
        """Build a configuration from parsed command-line arguments."""
        return cls(
            dimensions=args.dimensions,
            size=args.size,
            rules=RuleVariant.from_name(args.rules),
            population_rate=args.population,
            max_generations=args.max_generations,
            pattern=args.pattern,
            seed=args.seed,
            plane=args.plane,
        )

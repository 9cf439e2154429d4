"""Command-line interface for N-dimensional Life."""

import argparse
import logging
import sys
import time
from typing import List, Optional, Sequence, Tuple

from ..core.config import SimulationConfig
from ..core.game import GameOfLife
from ..core.grid import Grid
from ..core.patterns import PatternLibrary
from ..core.rules import RuleVariant
from ..logging_config import setup_logging

logger = logging.getLogger(__name__)


class CLIGameOfLife:
    """Command-line interface for running N-dimensional Life simulations."""

    def __init__(self) -> None:
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def build_grid(self, config: SimulationConfig) -> Grid:
        """Create a grid and seed it from a pattern or at random.

        Raises:
            ValueError: If the pattern is unknown or has the wrong dimension count
        """
        grid = Grid(config.rules, config.dimensions, config.size)

        if config.pattern:
            pattern = self.pattern_library.get_pattern(config.pattern)
            if pattern is None:
                raise ValueError(f"Pattern '{config.pattern}' not found")
            offset = pattern.centered_offset(grid)
            logger.info("Placing pattern '%s' at %s", pattern.name, offset)
            pattern.apply_to_grid(grid, offset)
        else:
            logger.info("Generating random population (rate: %.2f, seed: %s)", config.population_rate, config.seed)
            grid.randomize(config.population_rate, rng=config.seed)

        return grid

    def run_simulation(
        self,
        config: SimulationConfig,
        show_grid: bool = False,
        show_steps: bool = False,
    ) -> Tuple[int, str, dict]:
        """Run a simulation until it stabilizes or hits the generation limit.

        Args:
            config: Simulation configuration
            show_grid: Show initial and final grid states
            show_steps: Show the grid after every generation

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        grid = self.build_grid(config)
        game = GameOfLife(grid)
        initial_population = game.population

        if show_grid or show_steps:
            print("Initial grid:")
            print(self._format_grid(grid, config.plane))

        def print_generation(current: GameOfLife) -> None:
            print(f"\nGeneration {current.generation}:")
            print(self._format_grid(current.grid, config.plane))

        start_time = time.time()
        final_generation, reason = game.run_until_stable(
            config.max_generations,
            on_step=print_generation if show_steps else None,
        )
        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid and not show_steps and reason != "extinction":
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_grid(grid, config.plane))

        return final_generation, reason, stats

    def _format_grid(self, grid: Grid, plane: Optional[Sequence[int]] = None, max_size: int = 100) -> str:
        """Format a grid plane for display, refusing very large grids."""
        if grid.size > max_size:
            return f"Grid too large to display (side {grid.size})"

        return grid.render_plane(plane)

    def list_patterns(self) -> None:
        """List available patterns grouped by dimension count."""
        print("Available patterns:")
        for dim, names in self.pattern_library.get_patterns_by_dimension().items():
            print(f"\n{dim}D:")
            for name in names:
                pattern = self.pattern_library.get_pattern(name)
                size = "x".join(str(extent) for extent in pattern.get_size())
                print(f"  {name}: {size}, {len(pattern.cells)} cells")
                if pattern.description:
                    print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Run N-dimensional Game of Life simulations from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Random 100x100 grid with percentage rules
  hyperlife-cli

  # Glider on a 20x20 grid with basic rules, showing every generation
  hyperlife-cli -d 2 -s 20 -r basic --pattern Glider --show-steps -m 40

  # Random 3D grid, rendering the plane z = 4
  hyperlife-cli -d 3 -s 10 --plane 4 --show-grid --seed 7

  # List available patterns
  hyperlife-cli --list-patterns
        """,
    )

    parser.add_argument("-d", "--dimensions", type=int, default=2, help="Number of dimensions (default: 2)")

    parser.add_argument("-s", "--size", type=int, default=100, help="Cells along every axis (default: 100)")

    parser.add_argument(
        "-r",
        "--rules",
        choices=[variant.value for variant in RuleVariant],
        default=RuleVariant.PERCENTAGE.value,
        help="Rule variant (default: percentage)",
    )

    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.5,
        help="Initial random population rate 0.0-1.0 (default: 0.5)",
    )

    parser.add_argument("--seed", type=int, help="Random seed for reproducible runs")

    parser.add_argument("--pattern", type=str, help="Start from a named pattern instead of a random population")

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=1000,
        help="Maximum generations to simulate (default: 1000)",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final grid states",
    )

    parser.add_argument(
        "--show-steps",
        action="store_true",
        help="Display the grid after every generation",
    )

    parser.add_argument(
        "--plane",
        type=int,
        nargs="+",
        help="Coordinates of the axes beyond the second for the rendered plane (3D and up)",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument("--log-file", type=str, help="Also write log messages to this file")

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display."""
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid: {stats['dimensions']}D, side {stats['grid_size']}")
        print(f"  Rules: {stats['rules']} ({stats['thresholds']})")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            mins, maxs = stats["bounding_box"]
            extent = "x".join(str(e) for e in stats["bounding_box_size"])
            print(f"  Bounding box: {mins} to {maxs} [{extent}]")
    else:
        print(
            "Population: {} -> {}, "
            "Duration: {:.3f}s, "
            "Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats.get("duration_seconds", 0),
                stats.get("generations_per_second", 0),
            )
        )


def validate_args(args: argparse.Namespace, library: Optional[PatternLibrary] = None) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments
        library: Pattern library used to check ``--pattern``

    Returns:
        True if arguments are valid
    """
    errors: List[str] = SimulationConfig.from_args(args).validate()

    if args.pattern and library is not None:
        pattern = library.get_pattern(args.pattern)
        if pattern is None:
            errors.append(f"Pattern '{args.pattern}' not found (use --list-patterns)")
        elif pattern.dim != args.dimensions:
            errors.append(f"Pattern '{args.pattern}' is {pattern.dim}D but the grid is {args.dimensions}D")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args, cli.pattern_library):
        return 1

    config = SimulationConfig.from_args(args)

    try:
        final_generation, reason, stats = cli.run_simulation(
            config,
            show_grid=args.show_grid,
            show_steps=args.show_steps,
        )
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except (ValueError, MemoryError) as e:
        logger.debug("Simulation failed", exc_info=True)
        print(f"Error: {e}")
        return 1

    print_results(final_generation, reason, stats, args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())

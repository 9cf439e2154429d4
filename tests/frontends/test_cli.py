"""Tests for the CLI frontend."""

import argparse
import logging
from io import StringIO
from unittest.mock import patch

import pytest

from hyperlife.core.config import SimulationConfig
from hyperlife.core.patterns import PatternLibrary
from hyperlife.core.rules import RuleVariant
from hyperlife.frontends.cli import (
    CLIGameOfLife,
    create_parser,
    format_finish_reason,
    main,
    print_results,
    validate_args,
)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logging.getLogger("hyperlife").handlers.clear()


class TestCLIGameOfLife:
    """Test cases for the CLI Game of Life."""

    def test_initialization(self):
        """Test CLI initialization."""
        cli = CLIGameOfLife()
        assert len(cli.pattern_library.list_patterns()) > 0

    def test_build_grid_random_is_seeded(self):
        """The same seed gives the same starting grid."""
        cli = CLIGameOfLife()
        config = SimulationConfig(dimensions=3, size=5, population_rate=0.3, seed=4)

        assert cli.build_grid(config) == cli.build_grid(config)

    def test_build_grid_with_pattern(self):
        """Patterns are centered on the grid."""
        cli = CLIGameOfLife()
        config = SimulationConfig(dimensions=1, size=5, rules=RuleVariant.BASIC, pattern="Pair")

        grid = cli.build_grid(config)

        assert grid.to_list() == [0, 1, 1, 0, 0]

    def test_build_grid_unknown_pattern(self):
        """Unknown patterns raise."""
        cli = CLIGameOfLife()
        with pytest.raises(ValueError):
            cli.build_grid(SimulationConfig(size=5, pattern="Nonexistent"))

    def test_run_simulation_random(self):
        """Test running simulation with random population."""
        cli = CLIGameOfLife()
        config = SimulationConfig(dimensions=2, size=10, population_rate=0.3, max_generations=50, seed=1)

        final_gen, reason, stats = cli.run_simulation(config)

        assert 0 < final_gen <= 50
        assert reason in ["extinction", "cycle", "max_generations"]
        assert stats["generation"] == final_gen
        assert "duration_seconds" in stats
        assert "initial_population" in stats

    def test_run_simulation_with_pattern(self):
        """A blinker is reported as a period-2 cycle."""
        cli = CLIGameOfLife()
        config = SimulationConfig(size=9, rules=RuleVariant.BASIC, pattern="Blinker", max_generations=20)

        final_gen, reason, stats = cli.run_simulation(config)

        assert reason == "cycle"
        assert stats["cycle_length"] == 2
        assert stats["initial_population"] == 3

    def test_run_simulation_show_steps(self):
        """Every generation is printed when requested."""
        cli = CLIGameOfLife()
        config = SimulationConfig(dimensions=1, size=5, rules=RuleVariant.BASIC, pattern="Dot", max_generations=3)

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            final_gen, _, _ = cli.run_simulation(config, show_steps=True)

        output = mock_stdout.getvalue()
        assert "Initial grid:" in output
        for generation in range(1, final_gen + 1):
            assert f"Generation {generation}:" in output

    def test_format_grid_too_large(self):
        """Large grids are not rendered."""
        cli = CLIGameOfLife()
        grid = cli.build_grid(SimulationConfig(dimensions=1, size=200, seed=0))
        assert "too large" in cli._format_grid(grid)

    def test_list_patterns(self):
        """Patterns are listed by dimension."""
        cli = CLIGameOfLife()

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            cli.list_patterns()

        output = mock_stdout.getvalue()
        assert "Available patterns:" in output
        assert "1D:" in output
        assert "Glider: 3x3, 5 cells" in output
        assert "Cross3D" in output


class TestParser:
    """Test cases for argument parsing and validation."""

    def test_defaults(self):
        """Defaults mirror SimulationConfig."""
        args = create_parser().parse_args([])
        assert args.dimensions == 2
        assert args.size == 100
        assert args.rules == "percentage"
        assert args.population == 0.5
        assert args.max_generations == 1000
        assert args.plane is None

    def test_all_options(self):
        """Test parsing every option."""
        args = create_parser().parse_args(
            ["-d", "3", "-s", "12", "-r", "basic", "-p", "0.2", "-m", "7", "--seed", "3", "--plane", "4", "-g", "-v"]
        )
        assert args.dimensions == 3
        assert args.size == 12
        assert args.rules == "basic"
        assert args.plane == [4]
        assert args.show_grid
        assert args.verbose

    def test_invalid_rule_choice(self):
        """Unknown rule names are rejected by the parser."""
        with patch("sys.stderr", new_callable=StringIO):
            with pytest.raises(SystemExit):
                create_parser().parse_args(["-r", "highlife"])

    def test_validate_args(self):
        """Invalid values and mismatched patterns are reported."""
        parser = create_parser()
        library = PatternLibrary()

        assert validate_args(parser.parse_args(["-s", "10"]), library)

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            assert not validate_args(parser.parse_args(["-s", "0"]), library)
            assert not validate_args(parser.parse_args(["-d", "3", "--pattern", "Glider"]), library)
            assert not validate_args(parser.parse_args(["--pattern", "Nonexistent"]), library)

        output = mock_stdout.getvalue()
        assert "Size must be positive" in output
        assert "is 2D but the grid is 3D" in output
        assert "not found" in output


class TestOutput:
    """Test cases for result formatting."""

    def test_format_finish_reason(self):
        """Test formatting finish reasons."""
        assert "Extinction" in format_finish_reason("extinction", {})
        assert "length 2" in format_finish_reason("cycle", {"cycle_length": 2, "cycle_start_generation": 1})
        assert "(40)" in format_finish_reason("max_generations", {"generation": 40})
        assert "Unknown" in format_finish_reason("other", {})

    def test_print_results(self):
        """Verbose output includes the detailed statistics."""
        stats = {
            "generation": 3,
            "population": 2,
            "population_density": 0.1,
            "population_change_rate": -0.5,
            "dimensions": 2,
            "grid_size": 5,
            "rules": "basic",
            "thresholds": "B3/S2-3",
            "initial_population": 3,
            "duration_seconds": 0.01,
            "generations_per_second": 300,
            "bounding_box": ((1, 2), (2, 2)),
            "bounding_box_size": (2, 1),
        }

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            print_results(3, "max_generations", stats, verbose=True)
            print_results(3, "max_generations", stats, verbose=False)

        output = mock_stdout.getvalue()
        assert "Simulation completed after 3 generations" in output
        assert "Rules: basic (B3/S2-3)" in output
        assert "Bounding box: (1, 2) to (2, 2) [2x1]" in output
        assert "Population: 3 -> 2" in output


class TestMain:
    """Test cases for the CLI entry point."""

    def test_main_runs_simulation(self):
        """A valid run exits with 0 and prints a summary."""
        argv = ["-d", "1", "-s", "5", "-r", "basic", "--pattern", "Pair", "-m", "5", "-g"]

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            assert main(argv) == 0

        output = mock_stdout.getvalue()
        assert "Initial grid:" in output
        assert "░██░░" in output
        assert "Simulation completed" in output

    def test_main_three_dimensions(self):
        """Higher-dimensional runs render the requested plane."""
        argv = ["-d", "3", "-s", "4", "--seed", "2", "-p", "0.3", "-m", "3", "--plane", "1", "-g"]

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            assert main(argv) == 0

        assert "Simulation completed" in mock_stdout.getvalue()

    def test_main_list_patterns(self):
        """Listing patterns exits with 0."""
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            assert main(["--list-patterns"]) == 0

        assert "Blinker" in mock_stdout.getvalue()

    def test_main_invalid_arguments(self):
        """Invalid arguments exit with 1."""
        with patch("sys.stdout", new_callable=StringIO):
            assert main(["-s", "0"]) == 1
            assert main(["-d", "2", "--plane", "1"]) == 1

    def test_main_handles_keyboard_interrupt(self):
        """Interrupting the run exits with 1."""
        with patch.object(CLIGameOfLife, "run_simulation", side_effect=KeyboardInterrupt):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                assert main(["-s", "5"]) == 1

        assert "interrupted" in mock_stdout.getvalue()

    def test_validate_args_accepts_namespace(self):
        """Validation works on a hand-built namespace."""
        args = argparse.Namespace(
            dimensions=1,
            size=3,
            rules="basic",
            population=0.5,
            max_generations=1,
            pattern=None,
            seed=None,
            plane=None,
        )
        assert validate_args(args)

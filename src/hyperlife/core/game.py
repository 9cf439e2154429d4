"""Synchronous step engine for N-dimensional Life."""

import hashlib
import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, Optional, Tuple

import numpy as np

from .cell import Cell
from .grid import Grid
from .rules import RuleParameters

logger = logging.getLogger(__name__)


def apply_rule(state: Cell, alive: int, rules: RuleParameters) -> Cell:
    """Next state of one cell given how many of its neighbors are alive.

    Counts outside ``[min_neighbors, max_neighbors]`` kill the cell. Counts in
    ``[min_breed_neighbors, max_neighbors]`` make it alive. Anything else
    (enough neighbors to survive but too few to breed) leaves it unchanged.
    """
    if alive < rules.min_neighbors or alive > rules.max_neighbors:
        return Cell.DEAD
    if rules.min_breed_neighbors <= alive <= rules.max_neighbors:
        return Cell.ALIVE
    return Cell(state)


def next_state(prior: np.ndarray, counts: np.ndarray, rules: RuleParameters) -> np.ndarray:
    """Vectorized form of :func:`apply_rule` over a whole cell array.

    Args:
        prior: Flat cell array of the previous generation
        counts: Alive neighbor count per cell, same length as ``prior``
        rules: Thresholds to apply

    Returns:
        New flat cell array; ``prior`` is left untouched
    """
    dies = (counts < rules.min_neighbors) | (counts > rules.max_neighbors)
    breeds = ~dies & (counts >= rules.min_breed_neighbors) & (counts <= rules.max_neighbors)

    result = prior.copy()
    result[dies] = Cell.DEAD
    result[breeds] = Cell.ALIVE
    return result


class GameOfLife:
    """Life simulation engine over a :class:`Grid` of any dimension.

    Every step reads only from a snapshot of the previous generation, so no
    cell sees a neighbor's updated state within the same step.
    """

    def __init__(self, grid: Grid, vectorized: bool = True, history_size: int = 1000) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The cellular grid to simulate
            vectorized: Count neighbors for the whole grid at once instead of
                enumerating each cell's neighborhood
            history_size: Number of past generations remembered for cycle
                detection
        """
        self.grid = grid
        self.vectorized = vectorized
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._state_history: Deque[bytes] = deque(maxlen=history_size)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by exactly one generation."""
        self.grid.save_state()
        self._check_for_cycles()
        self._apply_rules()

        self._generation += 1
        self._update_population_history()
        logger.debug("Generation %d: population %d", self._generation, self.population)

    def run(self, generations: int) -> None:
        """Advance the simulation by ``generations`` steps."""
        for _ in range(generations):
            self.step()

    def _apply_rules(self) -> None:
        """Write the next generation into the grid, reading the saved snapshot."""
        prior = self.grid.previous_cells
        rules = self.grid.rules

        if self.vectorized:
            counts = self.grid.count_all_neighbors(prior)
            self.grid.cells[:] = next_state(prior, counts, rules)
            return

        cells = self.grid.cells
        for index in range(len(cells)):
            alive = self.grid.count_alive_neighbors(index, prior)
            cells[index] = apply_rule(Cell(int(prior[index])), alive, rules)

    def _update_population_history(self) -> None:
        """Update the population history."""
        self._population_history.append(self.population)

    def _state_digest(self) -> bytes:
        """Fixed-size fingerprint of the current cells."""
        return hashlib.blake2b(self.grid.cells.tobytes(), digest_size=16).digest()

    def _check_for_cycles(self) -> None:
        """Check if the current state has been seen before."""
        if self._cycle_detected:
            return

        current_state = self._state_digest()

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            logger.info(
                "Cycle of length %d detected at generation %d (started at %d)",
                self._cycle_length,
                self._generation,
                first_occurrence,
            )
            return

        # Forget the oldest state once the history is full
        if len(self._state_history) == self._state_history.maxlen:
            oldest = self._state_history[0]
            if self._seen_states.get(oldest) == self._generation - len(self._state_history):
                del self._seen_states[oldest]

        self._seen_states[current_state] = self._generation
        self._state_history.append(current_state)

    def reset(self, clear_grid: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_grid: Whether to clear the grid as well
        """
        if clear_grid:
            self.grid.clear()

        self._generation = 0
        self._population_history.clear()
        self.clear_cycle_detection()
        self._update_population_history()

    def clear_cycle_detection(self) -> None:
        """Forget cycle detection state, keeping generation and population history.

        Call this after modifying the grid by hand, since earlier states no
        longer describe the same run.
        """
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def run_until_stable(
        self,
        max_generations: int = 10000,
        on_step: Optional[Callable[["GameOfLife"], None]] = None,
    ) -> Tuple[int, str]:
        """Run simulation until it becomes stable or cycles.

        Args:
            max_generations: Maximum generations to run
            on_step: Called with the game after every generation

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()
            if on_step is not None:
                on_step(self)

            if self._cycle_detected:
                return self._generation, "cycle"

            if self.population == 0:
                return self._generation, "extinction"

        return self._generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Average population change per generation over the recent window."""
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_statistics(self) -> Dict[str, Any]:
        """Get simulation statistics.

        Returns:
            Dictionary with generation, population, cycle and extent figures
        """
        bbox = self.grid.get_bounding_box()

        stats: Dict[str, Any] = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "dimensions": self.grid.dim,
            "grid_size": self.grid.size,
            "rules": self.grid.variant.value,
            "thresholds": self.grid.rules.describe(),
            "population_density": self.population / len(self.grid),
        }

        if bbox:
            mins, maxs = bbox
            extent = tuple(high - low + 1 for low, high in zip(mins, maxs))
            stats["bounding_box"] = bbox
            stats["bounding_box_size"] = extent
            stats["bounding_box_volume"] = int(np.prod(extent))
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0,) * self.grid.dim
            stats["bounding_box_volume"] = 0

        return stats

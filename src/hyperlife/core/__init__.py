"""Core cellular automata logic."""

from .cell import Cell
from .config import SimulationConfig
from .game import GameOfLife
from .grid import Grid
from .patterns import Pattern, PatternLibrary
from .rules import RuleParameters, RuleVariant

__all__ = ["Cell", "GameOfLife", "Grid", "Pattern", "PatternLibrary", "RuleParameters", "RuleVariant", "SimulationConfig"]

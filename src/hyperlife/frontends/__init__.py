"""User interface frontends for N-dimensional Life."""

from .cli import CLIGameOfLife

__all__ = ["CLIGameOfLife"]

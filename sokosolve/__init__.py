"""
Sokoban Solver - push-search solver with a background worker.

See sokosolve.solver for the search itself.
"""

from sokosolve.solver import prepare, solve, Direction, Level, parse_xsb, parse_tiles
from sokosolve.solver_worker import SolverWorker

__version__ = "0.1.0"

__all__ = [
    "prepare",
    "solve",
    "Direction",
    "Level",
    "parse_xsb",
    "parse_tiles",
    "SolverWorker",
]

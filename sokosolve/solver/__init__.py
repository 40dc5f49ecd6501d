"""
Solver Package - Push-search solver for Sokoban puzzles.

This package finds move sequences that put every box on a goal. The
search is pluggable: strategies register themselves by name and are
created through the factory.

Public API:
    - prepare(): Build Board and DeadlockMap from a layout
    - solve(): Search and return the move list (raises on failure)
    - Board: Immutable walls and goals
    - DeadlockMap: Precomputed dead squares
    - Level: Board plus start configuration, from parse_xsb()/parse_tiles()
    - PuzzleState / StateArena: Search nodes and their store
    - Direction: Elementary moves, with parse_moves()/format_moves()
    - Solution / SolutionMetrics / SolveStatus: Strategy results
    - SolutionContext: Cancellation and progress for strategies
    - SolverStrategy: Abstract base for strategies
    - create_strategy(): Factory function

Usage:
    from sokosolve.solver import parse_xsb, SolutionContext, create_strategy

    level = parse_xsb(text)
    context = SolutionContext.from_level(level)

    strategy = create_strategy("astar")
    solution = strategy.solve(context)

    if solution.is_solved:
        print(solution.as_text())
"""

# Core data structures
from .move import Cell, Direction, DIRECTIONS, parse_moves, format_moves
from .board import Board
from .deadlock import DeadlockMap
from .level import (
    Level,
    parse_tiles,
    parse_xsb,
    load_level,
    load_level_file,
    validate_configuration,
)
from .state import PuzzleState, StateArena
from .heuristic import estimate
from .pathfinder import find_path
from .replay import apply_move, replay, is_solved
from .solution import Solution, SolutionMetrics, SolveStatus
from .context import SolutionContext
from .errors import (
    SokobanError,
    SolveError,
    InvalidConfigurationError,
    NoSolutionError,
    SolveCancelledError,
    IllegalMoveError,
)

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    DEFAULT_STRATEGY,
    register_strategy,
)

# Import strategies to register them
from . import strategies

from .api import prepare, solve

__all__ = [
    # Data structures
    "Cell",
    "Direction",
    "DIRECTIONS",
    "parse_moves",
    "format_moves",
    "Board",
    "DeadlockMap",
    "Level",
    "parse_tiles",
    "parse_xsb",
    "load_level",
    "load_level_file",
    "validate_configuration",
    "PuzzleState",
    "StateArena",
    "estimate",
    "find_path",
    "apply_move",
    "replay",
    "is_solved",
    "Solution",
    "SolutionMetrics",
    "SolveStatus",
    "SolutionContext",
    # Errors
    "SokobanError",
    "SolveError",
    "InvalidConfigurationError",
    "NoSolutionError",
    "SolveCancelledError",
    "IllegalMoveError",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "DEFAULT_STRATEGY",
    "register_strategy",
    # Operations
    "prepare",
    "solve",
]

"""
Errors Module - Exception hierarchy for the solver.
"""


class SokobanError(Exception):
    """Base exception for all solver errors."""


class SolveError(SokobanError):
    """Base exception for outcomes of a solve that carry no move sequence."""


class InvalidConfigurationError(SolveError, ValueError):
    """
    Raised before search starts when a board or start configuration is
    unusable (no goals, no player, box/goal count mismatch, ...).
    """


class NoSolutionError(SolveError):
    """Raised when the search space was exhausted without a win."""


class SolveCancelledError(SolveError):
    """Raised when the caller cancelled the search. Safe to retry."""


class IllegalMoveError(SokobanError):
    """Raised when replaying a move that breaks the movement rules."""

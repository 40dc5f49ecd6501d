"""
Solution Module - Result of strategy computation.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List

from .errors import NoSolutionError, SolveCancelledError
from .move import Direction, format_moves


class SolveStatus(Enum):
    """
    Outcome of a search that got past configuration checks.

    States:
        SOLVED: A complete move sequence reaching a win was found
        NO_SOLUTION: The state space was exhausted
        CANCELLED: The caller stopped the search early
    """
    SOLVED = auto()
    NO_SOLUTION = auto()
    CANCELLED = auto()


@dataclass
class SolutionMetrics:
    """
    Performance metrics for solution computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of states finalized (closed set size)
        states_generated: Number of successor states pushed on the open set
        pruned_branches: Pushes rejected because the box would land on a dead square
        strategy_name: Name of strategy that computed this solution
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    states_generated: int = 0
    pruned_branches: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Result of a strategy computation.

    There are no partial results: moves is empty unless status is SOLVED.

    Attributes:
        status: How the search ended
        moves: Elementary moves from the start to a winning configuration
        pushes: Number of box pushes in moves
        metrics: Performance statistics
    """
    status: SolveStatus
    moves: List[Direction] = field(default_factory=list)
    pushes: int = 0
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def is_solved(self) -> bool:
        """True if a winning move sequence was found."""
        return self.status is SolveStatus.SOLVED

    @property
    def was_cancelled(self) -> bool:
        """True if the search stopped on request."""
        return self.status is SolveStatus.CANCELLED

    @property
    def move_count(self) -> int:
        """Number of elementary moves in solution."""
        return len(self.moves)

    def as_text(self) -> str:
        """Moves as a formatted U/D/L/R string."""
        return format_moves(self.moves)

    def unwrap(self) -> List[Direction]:
        """
        Get the move sequence, raising if there is none.

        Returns:
            Copy of the moves list

        Raises:
            NoSolutionError: If the search space was exhausted
            SolveCancelledError: If the search was cancelled
        """
        if self.status is SolveStatus.CANCELLED:
            raise SolveCancelledError(
                f"Search cancelled after {self.metrics.states_explored} states"
            )
        if self.status is SolveStatus.NO_SOLUTION:
            raise NoSolutionError(
                f"No solution after exploring {self.metrics.states_explored} states"
            )
        return list(self.moves)

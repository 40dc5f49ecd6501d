"""
Greedy Strategy - Best-first push search ordered by the estimate alone.
"""

from ..state import PuzzleState
from ..factory import register_strategy
from .astar import AStarStrategy


@register_strategy
class GreedyStrategy(AStarStrategy):
    """
    Same search as A* but ignores pushes already made when ordering.

    Usually reaches a solution after far fewer states on open boards,
    at the price of longer push sequences.
    """
    name = "greedy"
    description = "Greedy best-first (fast) - Always expands the lowest estimate"
    log_tag = "Greedy"

    def priority(self, state: PuzzleState) -> int:
        return state.h

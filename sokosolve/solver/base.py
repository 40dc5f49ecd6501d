"""
Base Strategy Module - Abstract base class for solving strategies.
"""

import time
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .board import Board
from .context import SolutionContext
from .deadlock import DeadlockMap
from .heuristic import estimate
from .level import validate_configuration
from .move import DIRECTIONS, Direction
from .pathfinder import find_path
from .solution import Solution, SolutionMetrics, SolveStatus
from .state import PuzzleState


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def solve(self, context: SolutionContext) -> Solution:
        """
        Search for a move sequence that covers every goal with a box.

        Must check context.is_cancelled() on every loop iteration and
        return a CANCELLED solution if it is set.

        Args:
            context: Solution context with puzzle, cancellation, progress

        Returns:
            Solution with status, moves and metrics

        Raises:
            InvalidConfigurationError: If the start configuration is unusable
        """
        pass

    def validate(self, context: SolutionContext) -> None:
        """
        Check the context before searching.

        Args:
            context: Solution context

        Raises:
            InvalidConfigurationError: Bad player/box configuration
            ValueError: Non-positive progress interval
        """
        validate_configuration(context.board, context.player, context.boxes)
        if context.progress_interval < 1:
            raise ValueError(f"progress_interval must be >= 1, got {context.progress_interval}")

    def find_push_successors(
        self,
        state: PuzzleState,
        index: int,
        board: Board,
        deadlocks: DeadlockMap,
    ) -> Tuple[List[PuzzleState], int]:
        """
        Generate every state reachable from `state` with one push.

        For each box and direction the box must land on a free,
        non-dead cell and the player must be able to walk to the cell
        behind the box without moving anything.

        Args:
            state: State to expand
            index: Arena handle of state (becomes the successors' parent)
            board: Static board
            deadlocks: Dead-square map for board

        Returns:
            Tuple of (successor states, pushes pruned as dead)
        """
        occupied = set(state.boxes)
        successors: List[PuzzleState] = []
        pruned = 0

        for box in state.boxes:
            for direction in DIRECTIONS:
                new_box = direction.step(box)
                if board.is_wall(new_box) or new_box in occupied:
                    continue
                if deadlocks.dead(new_box):
                    pruned += 1
                    continue

                walk = find_path(board, occupied, state.player, direction.back(box))
                if walk is None:
                    continue

                next_boxes = tuple(sorted(new_box if b == box else b for b in state.boxes))
                successors.append(PuzzleState(
                    player=box,
                    boxes=next_boxes,
                    parent=index,
                    move_segment=tuple(walk) + (direction,),
                    g=state.g + 1,
                    h=estimate(next_boxes, board.goals),
                ))

        return successors, pruned

    def _check_cancelled(self, context: SolutionContext) -> bool:
        """
        Convenience method to check cancellation.

        Args:
            context: Solution context

        Returns:
            True if strategy should stop
        """
        return context.is_cancelled()

    def _build_solution(
        self,
        status: SolveStatus,
        moves: Optional[List[Direction]],
        pushes: int,
        states_explored: int,
        states_generated: int,
        pruned_branches: int,
        start_time: float,
    ) -> Solution:
        """Build Solution object from computation results."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return Solution(
            status=status,
            moves=list(moves) if moves else [],
            pushes=pushes,
            metrics=SolutionMetrics(
                computation_time_ms=elapsed_ms,
                states_explored=states_explored,
                states_generated=states_generated,
                pruned_branches=pruned_branches,
                strategy_name=self.name
            )
        )

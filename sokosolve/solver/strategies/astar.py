"""
A* Strategy - Best-first search over box pushes ordered by g + h.

Each search node is a game position reached after a push. Expanding a
node tries every box in every direction, keeps pushes that do not land
on a wall, another box or a dead square, and checks with a BFS that the
player can walk to the pushing cell. Cost g counts pushes; h is the
greedy box-to-goal matching distance.

Open-set ties are broken by insertion order (first pushed, first popped),
so a given board and start configuration always yields the same answer.
"""

import heapq
import itertools
import logging
import time
from typing import List, Tuple

from ..base import SolverStrategy
from ..context import SolutionContext
from ..heuristic import estimate
from ..solution import Solution, SolveStatus
from ..state import PuzzleState, StateArena
from ..factory import register_strategy

logger = logging.getLogger(__name__)


@register_strategy
class AStarStrategy(SolverStrategy):
    """
    A* search over push actions.

    Algorithm:
        1. Push the start state on a heap keyed by priority()
        2. Pop the best state; skip it if its position is already closed
        3. Close it; return the reconstructed path if it is a win
        4. Push every push-successor whose position is not closed
        5. Report NO_SOLUTION when the heap runs dry
    """
    name = "astar"
    description = "A* (default) - Push search ordered by pushes so far plus estimate"
    log_tag = "AStar"

    def priority(self, state: PuzzleState) -> int:
        """Heap key for a state. Lower is expanded first."""
        return state.f

    def solve(self, context: SolutionContext) -> Solution:
        """
        Run the search.

        Args:
            context: Solution context with puzzle, cancellation, progress

        Returns:
            Solution with status, moves and metrics

        Raises:
            InvalidConfigurationError: If the start configuration is unusable
        """
        start_time = time.perf_counter()
        self.validate(context)

        board = context.board
        goals = board.goals
        arena = StateArena()
        closed = set()
        counter = itertools.count()
        open_heap: List[Tuple[int, int, int]] = []
        states_generated = 0
        pruned = 0

        root_boxes = tuple(sorted(tuple(box) for box in context.boxes))
        root = PuzzleState(
            player=tuple(context.player),
            boxes=root_boxes,
            h=estimate(root_boxes, goals),
        )
        heapq.heappush(open_heap, (self.priority(root), next(counter), arena.add(root)))

        logger.info(
            f"[{self.log_tag}] Solving {board.rows}x{board.cols} board, "
            f"{len(root_boxes)} boxes, initial estimate {root.h}"
        )

        while open_heap:
            if self._check_cancelled(context):
                logger.warning(f"[{self.log_tag}] Cancelled after {len(closed)} states")
                return self._build_solution(
                    SolveStatus.CANCELLED, None, 0, len(closed),
                    states_generated, pruned, start_time
                )

            _, _, index = heapq.heappop(open_heap)
            state = arena.get(index)
            if state.key in closed:
                continue
            closed.add(state.key)

            if len(closed) % context.progress_interval == 0:
                logger.debug(f"[{self.log_tag}] {len(closed)} states closed, "
                             f"{len(open_heap)} open, best f={state.f}")
                context.report_progress(len(closed))

            if state.is_win(goals):
                moves = arena.path_to(index)
                logger.info(
                    f"[{self.log_tag}] Solution found: {state.g} pushes, "
                    f"{len(moves)} moves, {len(closed)} states explored"
                )
                return self._build_solution(
                    SolveStatus.SOLVED, moves, state.g, len(closed),
                    states_generated, pruned, start_time
                )

            successors, dead_pushes = self.find_push_successors(
                state, index, board, context.deadlocks
            )
            pruned += dead_pushes
            for successor in successors:
                if successor.key in closed:
                    continue
                heapq.heappush(
                    open_heap,
                    (self.priority(successor), next(counter), arena.add(successor))
                )
                states_generated += 1

        logger.info(f"[{self.log_tag}] No solution: state space exhausted after "
                    f"{len(closed)} states")
        return self._build_solution(
            SolveStatus.NO_SOLUTION, None, 0, len(closed),
            states_generated, pruned, start_time
        )

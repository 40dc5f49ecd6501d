"""
Solver API Module - One-call setup and solve.

    board, deadlocks = prepare(layout)
    moves = solve(board, deadlocks, player, boxes)

solve() raises instead of returning a status so callers can handle
the three failure kinds separately.
"""

import logging
import threading
from typing import Callable, Iterable, List, Optional, Tuple

from .board import Board
from .context import DEFAULT_PROGRESS_INTERVAL, SolutionContext
from .deadlock import DeadlockMap
from .factory import create_strategy
from .level import LevelLayout, load_level
from .move import Cell, Direction

logger = logging.getLogger(__name__)


def prepare(board_layout: LevelLayout) -> Tuple[Board, DeadlockMap]:
    """
    Build the static structures for a layout.

    Args:
        board_layout: XSB string, tile grid, or Level

    Returns:
        Tuple of (board, deadlock map)

    Raises:
        InvalidConfigurationError: If the layout is malformed or has no goals
    """
    board = load_level(board_layout).board
    return board, DeadlockMap.from_board(board)


def solve(
    board: Board,
    deadlock_map: DeadlockMap,
    player: Optional[Cell],
    boxes: Iterable[Cell],
    progress_callback: Optional[Callable[[int], None]] = None,
    cancel_signal: Optional[threading.Event] = None,
    strategy: Optional[str] = None,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
) -> List[Direction]:
    """
    Find a move sequence that covers every goal with a box.

    Runs on the calling thread. Use SolverWorker to run it in the
    background.

    Args:
        board: Static board
        deadlock_map: Dead-square map built for board
        player: Player start cell
        boxes: Box start cells
        progress_callback: Called with the closed-state count every
            progress_interval states, on the solving thread
        cancel_signal: Event; setting it stops the search
        strategy: Registered strategy name (default strategy if None)
        progress_interval: Closed states between progress callbacks

    Returns:
        Elementary moves from the start to a winning configuration

    Raises:
        InvalidConfigurationError: Bad start configuration (before search)
        NoSolutionError: State space exhausted
        SolveCancelledError: cancel_signal was set
    """
    context = SolutionContext(
        board=board,
        deadlocks=deadlock_map,
        player=player,
        boxes=tuple(boxes),
        cancel_flag=cancel_signal if cancel_signal is not None else threading.Event(),
        progress_callback=progress_callback,
        progress_interval=progress_interval,
    )
    solver = create_strategy(strategy)
    solution = solver.solve(context)
    logger.debug(f"Solve finished: {solution.status.name}, "
                 f"{solution.metrics.computation_time_ms:.1f}ms")
    return solution.unwrap()

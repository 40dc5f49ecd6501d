"""
Solution Context Module - Shared context for strategy execution.
"""

import threading
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from .board import Board
from .deadlock import DeadlockMap
from .level import Level
from .move import Cell

# Default number of closed states between progress callbacks
DEFAULT_PROGRESS_INTERVAL = 1000


@dataclass
class SolutionContext:
    """
    Shared context passed to strategies containing the puzzle,
    cancellation, and progress reporting.

    The search has no built-in time limit; callers that want one set
    cancel_flag themselves (SolverWorker does this with a timer).

    Attributes:
        board: Static board to solve
        deadlocks: Dead-square map precomputed for board
        player: Player start cell
        boxes: Box start cells
        cancel_flag: Threading event for cancellation
        progress_callback: Optional callback receiving the closed-state count
        progress_interval: Closed states between progress callbacks
    """
    board: Board
    deadlocks: DeadlockMap
    player: Optional[Cell]
    boxes: Tuple[Cell, ...]
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    progress_callback: Optional[Callable[[int], None]] = None
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL

    @classmethod
    def from_level(cls, level: Level, **kwargs) -> "SolutionContext":
        """
        Create a context for a parsed level.

        Args:
            level: Parsed level
            **kwargs: Extra context fields (cancel_flag, progress_callback, ...)

        Returns:
            SolutionContext instance
        """
        return cls(
            board=level.board,
            deadlocks=DeadlockMap.from_board(level.board),
            player=level.player,
            boxes=level.boxes,
            **kwargs
        )

    def is_cancelled(self) -> bool:
        """
        Check if cancellation was requested.

        Returns:
            True if strategy should stop execution
        """
        return self.cancel_flag.is_set()

    def report_progress(self, states_closed: int) -> None:
        """
        Report progress to the caller.

        Called on the solver's own thread; the callback is responsible
        for handing the value over to wherever it is displayed.

        Args:
            states_closed: Number of states finalized so far
        """
        if self.progress_callback:
            self.progress_callback(states_closed)

"""
Solver Worker Module for Sokoban Solver

Runs one search at a time on a background thread so the caller stays
responsive. Results come back through a concurrent.futures.Future;
progress comes back through a plain callback invoked on the worker
thread, so callers living on an event loop must hand it over themselves.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterable, Optional

from sokosolve.solver import (
    Board,
    DeadlockMap,
    Level,
    Solution,
    SolutionContext,
    create_strategy,
    validate_configuration,
)
from sokosolve.solver.context import DEFAULT_PROGRESS_INTERVAL
from sokosolve.solver.move import Cell


# Configure module logger
logger = logging.getLogger(__name__)


class SolverWorker:
    """
    Background worker for a single solve.

    The worker owns a single-thread executor, so the open and closed
    sets of a search are only ever touched by that one thread. Stopping
    is cooperative: request_stop() sets the cancel flag and the search
    returns a CANCELLED solution at its next loop iteration. An optional
    timeout sets the same flag from a timer.

    Example:
        worker = SolverWorker(progress_callback=print, timeout_sec=30)
        future = worker.start_level(level)
        # ...
        worker.request_stop()
        solution = worker.wait()
        worker.shutdown()
    """

    def __init__(
        self,
        strategy_name: Optional[str] = None,
        progress_callback: Optional[Callable[[int], None]] = None,
        timeout_sec: Optional[float] = None,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    ):
        """
        Initialize the solver worker.

        Args:
            strategy_name: Strategy to use (default strategy if None)
            progress_callback: Receives closed-state counts during search
            timeout_sec: Cancel a search after this many seconds (None = never)
            progress_interval: Closed states between progress callbacks

        Raises:
            ValueError: Unknown strategy name or progress_interval < 1
        """
        if progress_interval < 1:
            raise ValueError(f"progress_interval must be >= 1, got {progress_interval}")
        self._strategy = create_strategy(strategy_name)
        self.progress_callback = progress_callback
        self.timeout_sec = timeout_sec
        self.progress_interval = progress_interval

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sokosolve")
        self._cancel_flag = threading.Event()
        self._future: Optional[Future] = None
        self._timer: Optional[threading.Timer] = None

    @property
    def strategy_name(self) -> str:
        """Name of the strategy used for the next solve."""
        return self._strategy.name

    def set_strategy(self, strategy_name: str) -> None:
        """
        Change the solving strategy for the next start().

        Args:
            strategy_name: Registered strategy name
        """
        logger.info(f"Strategy change requested: {strategy_name}")
        self._strategy = create_strategy(strategy_name)

    def start(
        self,
        board: Board,
        deadlocks: DeadlockMap,
        player: Optional[Cell],
        boxes: Iterable[Cell],
    ) -> "Future[Solution]":
        """
        Start solving in the background.

        The configuration is checked here, on the caller's thread, so a
        malformed puzzle fails immediately instead of through the future.

        Args:
            board: Static board
            deadlocks: Dead-square map for board
            player: Player start cell
            boxes: Box start cells

        Returns:
            Future resolving to the Solution

        Raises:
            InvalidConfigurationError: Bad start configuration
            RuntimeError: A solve is already running
        """
        if self.is_running():
            raise RuntimeError("Solver is already running")

        boxes = tuple(boxes)
        validate_configuration(board, player, boxes)

        self._cancel_flag = threading.Event()
        context = SolutionContext(
            board=board,
            deadlocks=deadlocks,
            player=player,
            boxes=boxes,
            cancel_flag=self._cancel_flag,
            progress_callback=self.progress_callback,
            progress_interval=self.progress_interval,
        )

        if self.timeout_sec is not None:
            self._timer = threading.Timer(self.timeout_sec, self._on_timeout)
            self._timer.daemon = True
            self._timer.start()

        logger.info(f"Solver worker started ({self._strategy.name})")
        self._future = self._executor.submit(self._run, self._strategy, context)
        return self._future

    def start_level(self, level: Level) -> "Future[Solution]":
        """
        Start solving a parsed level.

        Args:
            level: Parsed level

        Returns:
            Future resolving to the Solution
        """
        return self.start(level.board, DeadlockMap.from_board(level.board),
                          level.player, level.boxes)

    def _run(self, strategy, context: SolutionContext) -> Solution:
        """Worker-thread body: run the strategy and log the outcome."""
        try:
            solution = strategy.solve(context)
        except Exception:
            logger.exception("Error in solver worker")
            raise
        finally:
            self._cancel_timer()

        logger.info(
            f"Solver worker finished: {solution.status.name}, "
            f"{solution.metrics.states_explored} states, "
            f"{solution.metrics.computation_time_ms:.1f}ms"
        )
        return solution

    def _on_timeout(self) -> None:
        logger.warning(f"Solve exceeded {self.timeout_sec}s, cancelling")
        self._cancel_flag.set()

    def _cancel_timer(self) -> None:
        # Called from both the worker thread and shutdown()
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def request_stop(self) -> None:
        """
        Request the running search to stop.

        The search finishes its current iteration and resolves the
        future with a CANCELLED solution. Use wait() to block until then.
        """
        logger.info("Stop requested")
        self._cancel_flag.set()

    def is_running(self) -> bool:
        """
        Check if a search is in progress.

        Returns:
            True if a submitted search has not finished yet
        """
        return self._future is not None and not self._future.done()

    def wait(self, timeout: Optional[float] = None) -> Solution:
        """
        Block until the current search finishes.

        Args:
            timeout: Seconds to wait (None = forever)

        Returns:
            The Solution

        Raises:
            RuntimeError: If start() was never called
            concurrent.futures.TimeoutError: If timeout elapses first
        """
        if self._future is None:
            raise RuntimeError("Solver was not started")
        return self._future.result(timeout=timeout)

    def shutdown(self) -> None:
        """Stop any running search and release the worker thread."""
        self.request_stop()
        self._cancel_timer()
        self._executor.shutdown(wait=True)
        logger.info("Solver worker stopped")

    def __enter__(self) -> "SolverWorker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

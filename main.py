"""
Sokoban Solver - Entry Point

Solves one level file in the background and prints the move string.

Example:
    python main.py levels/level1.xsb
    python main.py levels/level1.xsb --strategy greedy --timeout 30
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import Optional

from sokosolve.solver import (
    InvalidConfigurationError,
    SolveStatus,
    get_strategy_info,
    load_level_file,
)
from sokosolve.solver.context import DEFAULT_PROGRESS_INTERVAL
from sokosolve.solver_worker import SolverWorker
from sokosolve.settings import load_settings


logger = logging.getLogger(__name__)

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_INVALID = 2
EXIT_CANCELLED = 3


def configure_logging(debug: bool) -> None:
    """Log to both console and solver.log."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("solver.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def parse_args(argv: Optional[list] = None):
    """Parse command line arguments."""
    strategies = get_strategy_info()
    strategy_help = "; ".join(f"{info['name']}: {info['description']}" for info in strategies)
    parser = argparse.ArgumentParser(
        description="Sokoban Solver - find a push sequence that solves a level"
    )
    parser.add_argument(
        "level",
        type=Path,
        help="XSB level file to solve"
    )
    parser.add_argument(
        "--strategy", "-s",
        choices=[info["name"] for info in strategies],
        default=None,
        help=f"Search strategy, default from config.json ({strategy_help})"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Give up after this many seconds (default: from config.json, else never)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def run(args, settings) -> int:
    """
    Solve the level named in args.

    Returns:
        Process exit code
    """
    try:
        level = load_level_file(args.level)
    except (OSError, InvalidConfigurationError) as e:
        logger.error(f"Cannot load level {args.level}: {e}")
        return EXIT_INVALID

    strategy_name = args.strategy or settings.get("strategy_name")
    timeout_sec = args.timeout if args.timeout is not None else settings.get("timeout_sec")

    def on_progress(states_closed: int) -> None:
        logger.info(f"Searching... {states_closed} states explored")

    try:
        worker = SolverWorker(
            strategy_name=strategy_name,
            progress_callback=on_progress,
            timeout_sec=timeout_sec,
            progress_interval=int(settings.get("progress_interval", DEFAULT_PROGRESS_INTERVAL)),
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid solver settings: {e}")
        return EXIT_INVALID

    with worker:
        try:
            worker.start_level(level)
        except InvalidConfigurationError as e:
            logger.error(f"Invalid level {args.level}: {e}")
            return EXIT_INVALID

        try:
            solution = worker.wait()
        except KeyboardInterrupt:
            logger.warning("Interrupted, stopping solver")
            worker.request_stop()
            solution = worker.wait()

    if solution.status is SolveStatus.SOLVED:
        logger.info(
            f"Solved in {solution.metrics.computation_time_ms:.1f}ms: "
            f"{solution.pushes} pushes, {solution.move_count} moves"
        )
        print(solution.as_text())
        return EXIT_SOLVED
    if solution.status is SolveStatus.CANCELLED:
        logger.warning("Search cancelled before a solution was found")
        return EXIT_CANCELLED

    logger.info("Level has no solution")
    return EXIT_NO_SOLUTION


def main():
    """Parse arguments, configure logging and solve one level."""
    args = parse_args()
    settings = load_settings()
    configure_logging(args.debug or settings.get("debug_enabled", False))

    sys.exit(run(args, settings))


if __name__ == "__main__":
    main()

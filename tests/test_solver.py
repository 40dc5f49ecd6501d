"""
Test script for solver validation

Covers:
1. Board and DeadlockMap construction
2. Player pathfinding
3. PuzzleState identity and the state arena
4. Heuristic estimate
5. Search strategies on small hand-checked levels

Usage:
    python tests/test_solver.py
    pytest tests/
"""

import sys
import threading
from dataclasses import fields
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from sokosolve.solver import (
    Board,
    DEFAULT_STRATEGY,
    DeadlockMap,
    Direction,
    InvalidConfigurationError,
    NoSolutionError,
    PuzzleState,
    SolutionContext,
    SolverStrategy,
    SolveCancelledError,
    SolveStatus,
    StateArena,
    create_strategy,
    estimate,
    find_path,
    get_strategy_info,
    get_strategy_names,
    parse_xsb,
    prepare,
    register_strategy,
    replay,
    is_solved,
    solve,
)
from sokosolve.solver.strategies import AStarStrategy, GreedyStrategy

# Push left onto the goal, no walk needed
ONE_PUSH = """\
#####
#.$@#
#####
"""

# Walk one cell, then push right
WALK_THEN_PUSH = """\
######
#@ $.#
######
"""

# Box stuck in a corner, goal elsewhere
CORNER_BOX = """\
######
#$ @.#
######
"""

# Only legal push drives the box into the left corner
PUSH_INTO_CORNER = """\
######
# $@.#
######
"""

# Two boxes, each one push above its goal
TWO_BOXES = """\
#######
#     #
# $ $ #
# . . #
#  @  #
#######
"""


def _solve_level(text, strategy="astar", **kwargs):
    level = parse_xsb(text)
    context = SolutionContext.from_level(level, **kwargs)
    return level, create_strategy(strategy).solve(context)


def test_board_state():
    """Test Board creation and methods."""
    print("\n" + "="*60)
    print("TEST: Board")
    print("="*60)

    board, _ = prepare(TWO_BOXES)
    print(f"  Created board: {board.rows}x{board.cols}")

    assert (board.rows, board.cols) == (6, 7)
    assert board.goals == frozenset({(3, 2), (3, 4)})
    assert board.is_wall((0, 0))
    assert not board.is_wall((1, 1))
    assert board.is_wall((-1, 3)), "off-grid cells count as walls"
    assert board.is_wall((2, 7))
    assert not board.walls.flags.writeable

    # Same layout twice gives identical structures
    board2, deadlocks2 = prepare(TWO_BOXES)
    _, deadlocks = prepare(TWO_BOXES)
    assert board == board2
    assert hash(board) == hash(board2)
    assert board.walls.tobytes() == board2.walls.tobytes()
    assert deadlocks.mask.tobytes() == deadlocks2.mask.tobytes()
    assert deadlocks == deadlocks2

    print("  [PASS] Board tests")


def test_board_rejects_zero_goals():
    """A board without goals is a configuration error."""
    walls = np.ones((3, 3), dtype=bool)
    walls[1, 1] = False
    try:
        Board(walls=walls, goals=frozenset())
    except InvalidConfigurationError:
        pass
    else:
        raise AssertionError("expected InvalidConfigurationError")


def test_deadlock_map():
    """Corners are dead, goals and open cells are not."""
    print("\n" + "="*60)
    print("TEST: DeadlockMap")
    print("="*60)

    level = parse_xsb(TWO_BOXES)
    deadlocks = DeadlockMap.from_board(level.board)
    print(f"  Dead cells: {sorted(deadlocks.dead_cells)}")

    assert deadlocks.dead_cells == frozenset({(1, 1), (1, 5), (4, 1), (4, 5)})
    assert deadlocks.dead((1, 1))
    assert not deadlocks.dead((2, 2))
    assert not deadlocks.dead((0, 0)), "walls are never dead"
    assert not deadlocks.dead((99, 99))

    # Goal in a corner is never dead
    _, corner_goal = prepare("#####\n#.$@#\n#####\n")
    assert not corner_goal.dead((1, 1))
    assert corner_goal.dead((1, 3))

    # Wall-side cells that are open along the wall are not dead
    _, corridor = prepare(WALK_THEN_PUSH)
    assert not corridor.dead((1, 2))
    assert corridor.dead((1, 1))

    print("  [PASS] DeadlockMap tests")


def test_find_path():
    """BFS returns shortest walks around boxes."""
    print("\n" + "="*60)
    print("TEST: Pathfinder")
    print("="*60)

    level = parse_xsb(TWO_BOXES)
    board = level.board
    boxes = set(level.boxes)

    assert find_path(board, boxes, (4, 3), (4, 3)) == []
    assert find_path(board, boxes, (4, 3), (0, 0)) is None, "wall target"
    assert find_path(board, boxes, (4, 3), (2, 2)) is None, "box target"

    path = find_path(board, boxes, (4, 3), (1, 2))
    print(f"  Path (4,3)->(1,2): {[d.letter for d in path]}")
    assert len(path) == 4

    # Follow the path and make sure it stays on free cells
    cell = (4, 3)
    for direction in path:
        cell = direction.step(cell)
        assert not board.is_wall(cell)
        assert cell not in boxes
    assert cell == (1, 2)

    # Sealed off by a box in a corridor
    corridor = parse_xsb(WALK_THEN_PUSH)
    assert find_path(corridor.board, set(corridor.boxes), (1, 1), (1, 4)) is None

    print("  [PASS] Pathfinder tests")


def test_puzzle_state_identity():
    """Equality ignores bookkeeping and box order."""
    a = PuzzleState.create((1, 1), [(2, 3), (2, 1)], g=0, h=5)
    b = PuzzleState.create((1, 1), [(2, 1), (2, 3)], parent=7,
                           move_segment=[Direction.UP], g=4, h=1)
    c = PuzzleState.create((1, 2), [(2, 1), (2, 3)])

    assert a.boxes == ((2, 1), (2, 3))
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2
    assert b.f == 5


def test_state_arena_path():
    """Path reconstruction concatenates segments root first."""
    arena = StateArena()
    root = arena.add(PuzzleState.create((1, 1), [(1, 2)]))
    mid = arena.add(PuzzleState.create((1, 2), [(1, 3)], parent=root,
                                       move_segment=[Direction.RIGHT], g=1))
    leaf = arena.add(PuzzleState.create((2, 3), [(3, 3)], parent=mid,
                                        move_segment=[Direction.DOWN, Direction.RIGHT,
                                                      Direction.UP, Direction.DOWN], g=2))

    assert len(arena) == 3
    assert [s.g for s in arena.chain(leaf)] == [0, 1, 2]
    assert arena.path_to(leaf) == [Direction.RIGHT, Direction.DOWN, Direction.RIGHT,
                                   Direction.UP, Direction.DOWN]
    assert arena.path_to(root) == []


def test_heuristic():
    """Greedy matching sums nearest unclaimed goal distances."""
    assert estimate([(0, 0)], [(0, 3)]) == 3
    assert estimate([(2, 2), (2, 4)], [(3, 2), (3, 4)]) == 2
    assert estimate([(3, 2), (3, 4)], [(3, 2), (3, 4)]) == 0

    # Greedy can overestimate: the first box takes the goal the second needs.
    # Optimal assignment costs 3 + 1 = 4.
    assert estimate([(0, 3), (0, 6)], [(0, 0), (0, 5)]) == 8


def test_one_push_example():
    """Box next to goal, player already behind it."""
    print("\n" + "="*60)
    print("TEST: One push")
    print("="*60)

    level = parse_xsb(ONE_PUSH)
    board, deadlocks = prepare(ONE_PUSH)
    moves = solve(board, deadlocks, level.player, level.boxes)

    print(f"  Moves: {[m.letter for m in moves]}")
    assert moves == [Direction.LEFT]

    print("  [PASS] One push test")


def test_walk_then_push():
    level, solution = _solve_level(WALK_THEN_PUSH)
    assert solution.status is SolveStatus.SOLVED
    assert solution.moves == [Direction.RIGHT, Direction.RIGHT]
    assert solution.pushes == 1


def test_corner_box_has_no_solution():
    """A box pushed into a corner can never leave it."""
    level, solution = _solve_level(CORNER_BOX)
    assert solution.status is SolveStatus.NO_SOLUTION
    assert solution.moves == []

    board, deadlocks = prepare(CORNER_BOX)
    assert deadlocks.dead((1, 1))
    try:
        solve(board, deadlocks, level.player, level.boxes)
    except NoSolutionError:
        pass
    else:
        raise AssertionError("expected NoSolutionError")


def test_box_goal_mismatch():
    """Box count != goal count fails before searching."""
    level = parse_xsb("#######\n#@$..##\n#######\n")
    board, deadlocks = prepare(level)
    for bad_player, bad_boxes in [
        (level.player, level.boxes),        # 1 box, 2 goals
        (None, [(1, 2), (1, 3)]),           # no player
        ((1, 1), [(1, 2), (1, 2)]),         # duplicate box
        ((0, 0), [(1, 2), (1, 3)]),         # player in a wall
        ((1, 2), [(1, 2), (1, 3)]),         # player on a box
    ]:
        try:
            solve(board, deadlocks, bad_player, bad_boxes)
        except InvalidConfigurationError:
            continue
        raise AssertionError(f"expected InvalidConfigurationError for {bad_player}, {bad_boxes}")


def test_cancel_before_start():
    """A pre-set cancel flag stops the search before any state closes."""
    cancel = threading.Event()
    cancel.set()
    level, solution = _solve_level(TWO_BOXES, cancel_flag=cancel)

    assert solution.status is SolveStatus.CANCELLED
    assert solution.was_cancelled
    assert solution.metrics.states_explored == 0

    board, deadlocks = prepare(TWO_BOXES)
    try:
        solve(board, deadlocks, level.player, level.boxes, cancel_signal=cancel)
    except SolveCancelledError:
        pass
    else:
        raise AssertionError("expected SolveCancelledError")


def test_solver_strategies():
    """Every strategy solves the two-box level with a valid sequence."""
    print("\n" + "="*60)
    print("TEST: Solver Strategies")
    print("="*60)

    level = parse_xsb(TWO_BOXES)
    deadlocks = DeadlockMap.from_board(level.board)

    for name in get_strategy_names():
        _, solution = _solve_level(TWO_BOXES, strategy=name)
        print(f"  {name}: {solution.pushes} pushes, {solution.move_count} moves, "
              f"{solution.metrics.states_explored} states")
        assert solution.is_solved
        assert solution.metrics.strategy_name == name

        snapshots = replay(level.board, level.player, level.boxes, solution.moves)
        final_player, final_boxes = snapshots[-1]
        assert is_solved(level.board, final_boxes)

        pushes = sum(1 for before, after in zip(snapshots, snapshots[1:])
                     if before[1] != after[1])
        assert pushes == solution.pushes

        # No box ever stands on a dead square
        for _, boxes in snapshots:
            assert not any(deadlocks.dead(box) for box in boxes)

    _, astar = _solve_level(TWO_BOXES, strategy="astar")
    assert astar.pushes == 2

    print("  [PASS] Solver strategy tests")


def test_deterministic_push_count():
    _, first = _solve_level(TWO_BOXES)
    _, second = _solve_level(TWO_BOXES)
    assert first.pushes == second.pushes
    assert first.moves == second.moves


def test_progress_callback():
    """Progress reports the running closed-set size."""
    calls = []
    _, solution = _solve_level(TWO_BOXES, progress_callback=calls.append,
                               progress_interval=1)
    assert solution.is_solved
    assert calls, "callback never called"
    assert calls == list(range(1, len(calls) + 1))
    assert calls[-1] == solution.metrics.states_explored

    # Interval larger than the search: never called
    quiet = []
    _solve_level(TWO_BOXES, progress_callback=quiet.append, progress_interval=10_000)
    assert quiet == []


def test_already_solved():
    """A start with every box on a goal needs no moves."""
    _, trivial = _solve_level("####\n#@*#\n####\n")
    assert trivial.is_solved
    assert trivial.moves == []
    assert trivial.pushes == 0


def test_unknown_strategy():
    try:
        create_strategy("does-not-exist")
    except ValueError as e:
        assert "astar" in str(e)
    else:
        raise AssertionError("expected ValueError")


def test_push_into_dead_square_is_pruned():
    """A push that would put the box in a corner is never generated."""
    print("\n" + "="*60)
    print("TEST: Dead-square pruning")
    print("="*60)

    board, deadlocks = prepare(PUSH_INTO_CORNER)
    assert deadlocks.dead((1, 1))
    assert not deadlocks.dead((1, 2))

    for name in get_strategy_names():
        _, solution = _solve_level(PUSH_INTO_CORNER, strategy=name)
        print(f"  {name}: {solution.status.name}, "
              f"{solution.metrics.pruned_branches} pruned")
        assert solution.status is SolveStatus.NO_SOLUTION
        assert solution.metrics.pruned_branches == 1
        assert solution.metrics.states_explored == 1
        assert solution.metrics.states_generated == 0

    level = parse_xsb(PUSH_INTO_CORNER)
    try:
        solve(board, deadlocks, level.player, level.boxes)
    except NoSolutionError:
        pass
    else:
        raise AssertionError("expected NoSolutionError")

    print("  [PASS] Dead-square pruning tests")


def test_solution_metrics():
    """Strategies time themselves; the context only carries inputs."""
    _, solution = _solve_level(TWO_BOXES)
    metrics = solution.metrics
    assert metrics.computation_time_ms >= 0.0
    assert metrics.strategy_name == "astar"
    assert metrics.states_explored >= 3
    assert metrics.states_generated >= metrics.states_explored - 1

    assert [f.name for f in fields(SolutionContext)] == [
        "board", "deadlocks", "player", "boxes",
        "cancel_flag", "progress_callback", "progress_interval",
    ]


def test_strategy_registry():
    """Names are sorted, None picks the default, names cannot be reused."""
    assert get_strategy_names() == ["astar", "greedy"]
    assert [info["name"] for info in get_strategy_info()] == ["astar", "greedy"]
    assert all(info["description"] for info in get_strategy_info())

    default = create_strategy()
    assert isinstance(default, AStarStrategy)
    assert create_strategy(None).name == DEFAULT_STRATEGY == "astar"
    assert isinstance(create_strategy("greedy"), GreedyStrategy)

    # Registering the same class again is harmless
    assert register_strategy(AStarStrategy) is AStarStrategy

    class ShadowStrategy(SolverStrategy):
        name = "astar"

        def solve(self, context):
            raise NotImplementedError

    try:
        register_strategy(ShadowStrategy)
    except ValueError as e:
        assert "AStarStrategy" in str(e)
    else:
        raise AssertionError("expected ValueError")
    assert isinstance(create_strategy("astar"), AStarStrategy)


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# SOLVER VALIDATION TESTS")
    print("#"*60)

    tests = [
        ("Board", test_board_state),
        ("Zero Goals", test_board_rejects_zero_goals),
        ("DeadlockMap", test_deadlock_map),
        ("Pathfinder", test_find_path),
        ("State Identity", test_puzzle_state_identity),
        ("State Arena", test_state_arena_path),
        ("Heuristic", test_heuristic),
        ("One Push", test_one_push_example),
        ("Walk Then Push", test_walk_then_push),
        ("Corner Box", test_corner_box_has_no_solution),
        ("Invalid Configuration", test_box_goal_mismatch),
        ("Cancel", test_cancel_before_start),
        ("Solver Strategies", test_solver_strategies),
        ("Determinism", test_deterministic_push_count),
        ("Progress", test_progress_callback),
        ("Already Solved", test_already_solved),
        ("Unknown Strategy", test_unknown_strategy),
        ("Dead-Square Pruning", test_push_into_dead_square_is_pruned),
        ("Metrics", test_solution_metrics),
        ("Registry", test_strategy_registry),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {name}: {e}")
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)

    all_passed = True
    for name, passed in results:
        status = "PASS" if passed else "FAIL"
        print(f"  {name}: [{status}]")
        if not passed:
            all_passed = False

    print()
    if all_passed:
        print("All tests PASSED!")
        return 0
    else:
        print("Some tests FAILED!")
        return 1


if __name__ == "__main__":
    sys.exit(main())

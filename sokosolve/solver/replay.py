"""
Replay Module - Apply elementary moves to a configuration.

Used to play back a solution step by step and to check that a move
sequence really ends in a win.
"""

from typing import Iterable, List, Tuple

from .board import Board
from .errors import IllegalMoveError
from .move import Cell, Direction

Snapshot = Tuple[Cell, Tuple[Cell, ...]]


def apply_move(
    board: Board,
    player: Cell,
    boxes: Tuple[Cell, ...],
    direction: Direction,
) -> Snapshot:
    """
    Apply one elementary move.

    The player walks into a free cell, or pushes the box in front of
    them one cell further if that cell is free and not a wall.

    Args:
        board: Static board
        player: Player cell
        boxes: Box cells (sorted)
        direction: Move to apply

    Returns:
        New (player, boxes) snapshot with boxes sorted

    Raises:
        IllegalMoveError: Walking into a wall or off the grid, or
            pushing a box into a wall or another box
    """
    target = direction.step(player)
    if board.is_wall(target):
        raise IllegalMoveError(f"Move {direction.name} from {player} hits a wall")

    if target not in boxes:
        return target, boxes

    beyond = direction.step(target)
    if board.is_wall(beyond):
        raise IllegalMoveError(f"Cannot push box at {target} into a wall")
    if beyond in boxes:
        raise IllegalMoveError(f"Cannot push box at {target} into another box")

    moved = tuple(sorted(beyond if box == target else box for box in boxes))
    return target, moved


def replay(
    board: Board,
    player: Cell,
    boxes: Iterable[Cell],
    moves: Iterable[Direction],
) -> List[Snapshot]:
    """
    Play a move sequence from a start configuration.

    Args:
        board: Static board
        player: Player start cell
        boxes: Box start cells
        moves: Elementary moves

    Returns:
        Snapshots before the first move and after every move

    Raises:
        IllegalMoveError: On the first move breaking the rules
    """
    current: Snapshot = (tuple(player), tuple(sorted(tuple(box) for box in boxes)))
    snapshots = [current]
    for direction in moves:
        current = apply_move(board, current[0], current[1], direction)
        snapshots.append(current)
    return snapshots


def is_solved(board: Board, boxes: Iterable[Cell]) -> bool:
    """True if the boxes cover exactly the goal cells."""
    boxes = set(boxes)
    return len(boxes) == len(board.goals) and all(board.is_goal(box) for box in boxes)

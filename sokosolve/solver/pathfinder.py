"""
Pathfinder Module - Player reachability between two cells.
"""

from collections import deque
from typing import Collection, Dict, List, Optional

from .board import Board
from .move import Cell, DIRECTIONS, Direction, direction_between


def find_path(
    board: Board,
    boxes: Collection[Cell],
    start: Cell,
    end: Cell,
) -> Optional[List[Direction]]:
    """
    Find a shortest walk for the player without moving any box.

    Breadth-first search over in-grid, non-wall, box-free cells.
    Neighbours are expanded in UP, DOWN, LEFT, RIGHT order.

    Args:
        board: Static board geometry
        boxes: Cells currently occupied by boxes (should support fast `in`)
        start: Player cell
        end: Cell the player must reach

    Returns:
        List of moves from start to end ([] if already there),
        or None if end is a wall, holds a box, or is not connected
    """
    if board.is_wall(end) or end in boxes:
        return None
    if start == end:
        return []

    came_from: Dict[Cell, Optional[Cell]] = {start: None}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for direction in DIRECTIONS:
            nxt = direction.step(current)
            if nxt in came_from or board.is_wall(nxt) or nxt in boxes:
                continue
            came_from[nxt] = current
            if nxt == end:
                return _walk_back(came_from, end)
            queue.append(nxt)

    return None


def _walk_back(came_from: Dict[Cell, Optional[Cell]], end: Cell) -> List[Direction]:
    """Rebuild the move list by following predecessor links from end."""
    moves: List[Direction] = []
    cell = end
    prev = came_from[cell]
    while prev is not None:
        moves.append(direction_between(prev, cell))
        cell = prev
        prev = came_from[cell]
    moves.reverse()
    return moves

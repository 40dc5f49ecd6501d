"""
Heuristic Module - Remaining-cost estimate for a box configuration.
"""

from typing import Iterable

from .move import Cell


def manhattan(a: Cell, b: Cell) -> int:
    """Manhattan distance between two cells."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def estimate(boxes: Iterable[Cell], goals: Iterable[Cell]) -> int:
    """
    Estimate pushes remaining by greedy box-to-goal matching.

    Boxes are taken in order; each one claims the nearest goal still
    unclaimed (Manhattan distance, first goal wins on ties). This is
    O(boxes * goals) and can overestimate the optimal assignment, so it
    is not a strict lower bound.

    Args:
        boxes: Box cells, in canonical order
        goals: Goal cells

    Returns:
        Sum of matched distances
    """
    pool = sorted(goals)
    total = 0
    for box in boxes:
        if not pool:
            break
        best_index = 0
        best_distance = manhattan(box, pool[0])
        for index in range(1, len(pool)):
            distance = manhattan(box, pool[index])
            if distance < best_distance:
                best_index = index
                best_distance = distance
        total += best_distance
        pool.pop(best_index)
    return total

"""
Deadlock Module - Static dead-square detection.

A dead square is a non-goal floor cell with a wall (or the grid edge)
on one vertical side and one horizontal side. A box pushed into such a
corner can never move again, so it can never reach a goal.

Only board geometry is considered. Deadlocks created by several boxes
blocking each other are not detected.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet

import numpy as np

from .board import Board
from .move import Cell

logger = logging.getLogger(__name__)


def compute_dead_mask(board: Board) -> np.ndarray:
    """
    Compute the dead-square mask for a board.

    Args:
        board: Board to analyse

    Returns:
        Read-only bool array shaped like board.walls
    """
    # Pad with walls so the grid edge blocks like a wall
    padded = np.pad(board.walls, 1, mode="constant", constant_values=True)

    up = padded[:-2, 1:-1]
    down = padded[2:, 1:-1]
    left = padded[1:-1, :-2]
    right = padded[1:-1, 2:]

    dead = (up | down) & (left | right) & ~board.walls & ~board.goal_mask
    dead.setflags(write=False)
    return dead


@dataclass(frozen=True, eq=False)
class DeadlockMap:
    """
    Precomputed dead-square mask for one board.

    Attributes:
        mask: Read-only bool array, True on dead squares
    """
    mask: np.ndarray

    def __post_init__(self):
        cells = frozenset((int(r), int(c)) for r, c in np.argwhere(self.mask))
        object.__setattr__(self, "_dead", cells)

    @classmethod
    def from_board(cls, board: Board) -> "DeadlockMap":
        """
        Build the deadlock map for a board.

        Args:
            board: Board to analyse

        Returns:
            DeadlockMap instance
        """
        mask = compute_dead_mask(board)
        logger.debug(f"Dead squares: {int(mask.sum())} of {mask.size} cells")
        return cls(mask=mask)

    def dead(self, cell: Cell) -> bool:
        """
        Check if a box on this cell can never reach a goal.

        Args:
            cell: (row, col) position

        Returns:
            True on dead squares, False elsewhere (including off-grid)
        """
        return cell in self._dead

    @property
    def dead_cells(self) -> FrozenSet[Cell]:
        """All dead squares as a set of cells."""
        return self._dead

    def __hash__(self):
        return hash((self.mask.shape, self.mask.tobytes()))

    def __eq__(self, other):
        if not isinstance(other, DeadlockMap):
            return False
        return np.array_equal(self.mask, other.mask)

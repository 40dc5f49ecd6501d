"""
Board Module - Immutable static geometry of a Sokoban puzzle.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Sequence

import numpy as np

from .errors import InvalidConfigurationError
from .move import Cell


@dataclass(frozen=True, eq=False)
class Board:
    """
    Immutable board: grid extents, wall mask and goal cells.

    The wall mask is a read-only numpy bool array indexed [row, col].
    Cells outside the grid are treated as walls everywhere.

    Attributes:
        walls: 2D bool array, True where a wall stands
        goals: Cells that must end up covered by a box
    """
    walls: np.ndarray
    goals: FrozenSet[Cell]

    def __post_init__(self):
        walls = np.array(self.walls, dtype=bool)
        if walls.ndim != 2 or walls.size == 0:
            raise InvalidConfigurationError(
                f"Wall mask must be a non-empty 2D grid, got shape {walls.shape}"
            )
        walls.setflags(write=False)
        object.__setattr__(self, "walls", walls)

        goals = frozenset((int(r), int(c)) for r, c in self.goals)
        object.__setattr__(self, "goals", goals)

        # Passable cells as a set for fast membership tests in hot loops
        rows, cols = walls.shape
        floor = frozenset(
            (r, c) for r in range(rows) for c in range(cols) if not walls[r, c]
        )
        object.__setattr__(self, "_floor", floor)

        if not goals:
            raise InvalidConfigurationError("Board has no goals")
        for goal in sorted(goals):
            if self.is_wall(goal):
                raise InvalidConfigurationError(f"Goal {goal} is on a wall or off the grid")

    @classmethod
    def from_grid(cls, walls: Sequence[Sequence[bool]], goals: Iterable[Cell]) -> "Board":
        """
        Create Board from a 2D wall grid and goal cells.

        Args:
            walls: Rows of booleans (True = wall)
            goals: Goal cells

        Returns:
            Board instance
        """
        return cls(walls=np.asarray(walls, dtype=bool), goals=frozenset(goals))

    @property
    def rows(self) -> int:
        """Number of rows in the grid."""
        return self.walls.shape[0]

    @property
    def cols(self) -> int:
        """Number of columns in the grid."""
        return self.walls.shape[1]

    @property
    def goal_mask(self) -> np.ndarray:
        """Bool array, True on goal cells."""
        mask = np.zeros(self.walls.shape, dtype=bool)
        for row, col in self.goals:
            mask[row, col] = True
        return mask

    def in_bounds(self, cell: Cell) -> bool:
        """Check if cell lies inside the grid."""
        row, col = cell
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_wall(self, cell: Cell) -> bool:
        """
        Check if a cell is blocked by a wall.

        Args:
            cell: (row, col) position

        Returns:
            True for walls and for cells outside the grid
        """
        return cell not in self._floor

    def is_goal(self, cell: Cell) -> bool:
        """Check if cell is a goal."""
        return cell in self.goals

    def __hash__(self):
        """Enable using Board as dict key or in sets."""
        return hash((self.walls.shape, self.walls.tobytes(), self.goals))

    def __eq__(self, other):
        """Boards are equal when walls and goals match exactly."""
        if not isinstance(other, Board):
            return False
        return np.array_equal(self.walls, other.walls) and self.goals == other.goals

"""
Move Module - Cells, directions and move-string helpers.
"""

from enum import Enum
from typing import Iterable, List, Tuple

# (row, col) pair. Tuples compare row first, then col.
Cell = Tuple[int, int]

# Letters per group and groups per line in formatted move strings
GROUP_SIZE = 10
GROUPS_PER_LINE = 10


class Direction(Enum):
    """
    Elementary player move.

    Each member carries its (row, col) delta and its single-letter
    code used in move strings.
    """
    UP = (-1, 0, "U")
    DOWN = (1, 0, "D")
    LEFT = (0, -1, "L")
    RIGHT = (0, 1, "R")

    @property
    def dr(self) -> int:
        """Row delta."""
        return self.value[0]

    @property
    def dc(self) -> int:
        """Column delta."""
        return self.value[1]

    @property
    def letter(self) -> str:
        """Single-letter code (U, D, L or R)."""
        return self.value[2]

    def step(self, cell: Cell) -> Cell:
        """Cell one step from `cell` in this direction."""
        return (cell[0] + self.dr, cell[1] + self.dc)

    def back(self, cell: Cell) -> Cell:
        """Cell one step from `cell` against this direction."""
        return (cell[0] - self.dr, cell[1] - self.dc)

    @classmethod
    def from_letter(cls, letter: str) -> "Direction":
        """
        Look up a direction by its letter code.

        Args:
            letter: One of U, D, L, R (case-insensitive)

        Returns:
            Matching Direction

        Raises:
            ValueError: If letter is not a direction code
        """
        code = letter.upper()
        for direction in cls:
            if direction.letter == code:
                return direction
        raise ValueError(f"Unknown direction letter: {letter!r}")


# Expansion order used by the search and the pathfinder
DIRECTIONS: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


def direction_between(src: Cell, dst: Cell) -> Direction:
    """
    Direction of a single step between two adjacent cells.

    Args:
        src: Starting cell
        dst: Adjacent destination cell

    Returns:
        Direction taking src to dst

    Raises:
        ValueError: If the cells are not orthogonally adjacent
    """
    delta = (dst[0] - src[0], dst[1] - src[1])
    for direction in DIRECTIONS:
        if (direction.dr, direction.dc) == delta:
            return direction
    raise ValueError(f"Cells {src} and {dst} are not adjacent")


def parse_moves(text: str) -> List[Direction]:
    """
    Parse a move string such as "DULLRU UDRR".

    Only U, D, L and R letters are kept (in either case); spaces,
    newlines and any other characters are ignored.

    Args:
        text: Move string

    Returns:
        List of directions in order
    """
    return [Direction.from_letter(ch) for ch in text if ch.upper() in "UDLR"]


def format_moves(moves: Iterable[Direction]) -> str:
    """
    Format moves as letters in groups of 10, 10 groups per line.

    Args:
        moves: Directions to format

    Returns:
        Formatted move string (empty for no moves)
    """
    letters = "".join(move.letter for move in moves)
    line_size = GROUP_SIZE * GROUPS_PER_LINE

    lines = []
    for start in range(0, len(letters), line_size):
        chunk = letters[start:start + line_size]
        groups = [chunk[i:i + GROUP_SIZE] for i in range(0, len(chunk), GROUP_SIZE)]
        lines.append(" ".join(groups))
    return "\n".join(lines)

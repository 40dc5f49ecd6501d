"""
Level Module - Layout parsing and start-configuration checks.

Two layout formats are understood:

Tile grid (rows of ints, ragged rows padded with floor):
    0 floor, 1 wall, 2 goal, 3 box, 4 player, 5 box on goal

XSB text:
    '#' wall, ' ' '-' '_' floor, '.' goal, '$' box, '*' box on goal,
    '@' player, '+' player on goal; lines starting with ';' are comments
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .board import Board
from .errors import InvalidConfigurationError
from .move import Cell

logger = logging.getLogger(__name__)

TILE_FLOOR = 0
TILE_WALL = 1
TILE_GOAL = 2
TILE_BOX = 3
TILE_PLAYER = 4
TILE_BOX_ON_GOAL = 5

_FLOOR_CHARS = {" ", "-", "_"}
_VALID_XSB_CHARS = {"#", ".", "$", "*", "@", "+"} | _FLOOR_CHARS


@dataclass(frozen=True)
class Level:
    """
    Static board plus the dynamic start configuration of one puzzle.

    Attributes:
        board: Walls and goals
        player: Player start cell, or None if the layout has no player
        boxes: Box start cells, sorted row-major
        title: Optional title taken from a leading comment
    """
    board: Board
    player: Optional[Cell]
    boxes: Tuple[Cell, ...]
    title: Optional[str] = None


LevelLayout = Union[str, Level, Sequence[Sequence[int]]]


def parse_tiles(grid: Sequence[Sequence[int]]) -> Level:
    """
    Parse an integer tile grid.

    Args:
        grid: Rows of tile codes

    Returns:
        Level split into static board and start configuration

    Raises:
        InvalidConfigurationError: Unknown tile code, several players,
            or no goals
    """
    rows = len(grid)
    cols = max((len(row) for row in grid), default=0)

    walls = [[False] * cols for _ in range(rows)]
    goals: List[Cell] = []
    boxes: List[Cell] = []
    player: Optional[Cell] = None

    for r, row in enumerate(grid):
        for c, tile in enumerate(row):
            if tile == TILE_WALL:
                walls[r][c] = True
            elif tile == TILE_GOAL:
                goals.append((r, c))
            elif tile == TILE_BOX:
                boxes.append((r, c))
            elif tile == TILE_BOX_ON_GOAL:
                goals.append((r, c))
                boxes.append((r, c))
            elif tile == TILE_PLAYER:
                player = _set_player(player, (r, c))
            elif tile != TILE_FLOOR:
                raise InvalidConfigurationError(f"Unknown tile code {tile!r} at ({r}, {c})")

    board = Board.from_grid(walls, goals)
    return Level(board=board, player=player, boxes=tuple(sorted(boxes)))


def parse_xsb(text: str) -> Level:
    """
    Parse a single level in XSB text format.

    Comment lines are skipped; the first comment becomes the title.
    If the text holds several blank-line separated levels, only the
    first one is used.

    Args:
        text: XSB level text

    Returns:
        Level split into static board and start configuration

    Raises:
        InvalidConfigurationError: Empty level, invalid character,
            several players, or no goals
    """
    lines: List[str] = []
    title: Optional[str] = None

    for raw in text.splitlines():
        stripped = raw.strip()
        if stripped.startswith(";"):
            if title is None and stripped[1:].strip():
                title = stripped[1:].strip()
            continue
        if not stripped:
            if lines:
                break
            continue
        lines.append(raw.rstrip("\r\n"))

    if not lines:
        raise InvalidConfigurationError("No level found in XSB text")

    cols = max(len(line) for line in lines)
    walls = [[False] * cols for _ in lines]
    goals: List[Cell] = []
    boxes: List[Cell] = []
    player: Optional[Cell] = None

    for r, line in enumerate(lines):
        for c, ch in enumerate(line):
            if ch not in _VALID_XSB_CHARS:
                raise InvalidConfigurationError(f"Invalid character {ch!r} at ({r}, {c})")
            if ch == "#":
                walls[r][c] = True
            if ch in {".", "*", "+"}:
                goals.append((r, c))
            if ch in {"$", "*"}:
                boxes.append((r, c))
            if ch in {"@", "+"}:
                player = _set_player(player, (r, c))

    board = Board.from_grid(walls, goals)
    return Level(board=board, player=player, boxes=tuple(sorted(boxes)), title=title)


def load_level(layout: LevelLayout) -> Level:
    """
    Build a Level from any supported layout.

    Args:
        layout: XSB string, tile grid, or an existing Level

    Returns:
        Level instance
    """
    if isinstance(layout, Level):
        return layout
    if isinstance(layout, str):
        return parse_xsb(layout)
    return parse_tiles(layout)


def load_level_file(path: Union[str, Path]) -> Level:
    """
    Read and parse an XSB level file.

    Args:
        path: File location

    Returns:
        Parsed Level
    """
    path = Path(path)
    level = parse_xsb(path.read_text(encoding="utf-8"))
    logger.debug(f"Loaded level {path.name}: {level.board.rows}x{level.board.cols}, "
                 f"{len(level.boxes)} boxes")
    return level


def validate_configuration(board: Board, player: Optional[Cell], boxes: Iterable[Cell]) -> None:
    """
    Check that a start configuration can be searched on a board.

    Args:
        board: Static board
        player: Player cell (None means the layout had no player)
        boxes: Box cells

    Raises:
        InvalidConfigurationError: On the first problem found
    """
    if player is None:
        raise InvalidConfigurationError("No player position")

    box_list = [tuple(box) for box in boxes]
    box_set = set(box_list)
    if len(box_set) != len(box_list):
        raise InvalidConfigurationError("Two boxes share a cell")
    if len(box_set) != len(board.goals):
        raise InvalidConfigurationError(
            f"Box count ({len(box_set)}) != goal count ({len(board.goals)})"
        )
    for box in sorted(box_set):
        _check_placement(board, "Box", box)
    player = tuple(player)
    _check_placement(board, "Player", player)
    if player in box_set:
        raise InvalidConfigurationError(f"Player {player} stands on a box")


def _check_placement(board: Board, what: str, cell: Cell) -> None:
    if not board.in_bounds(cell):
        raise InvalidConfigurationError(f"{what} {cell} is off the grid")
    if board.is_wall(cell):
        raise InvalidConfigurationError(f"{what} {cell} is on a wall")


def _set_player(current: Optional[Cell], cell: Cell) -> Cell:
    if current is not None:
        raise InvalidConfigurationError(f"Several player positions: {current} and {cell}")
    return cell

"""
State Module - Canonical puzzle snapshots and the arena that owns them.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .move import Cell, Direction


@dataclass(frozen=True, eq=False)
class PuzzleState:
    """
    Immutable snapshot of the dynamic configuration plus search bookkeeping.

    Identity (equality and hashing) is the (player, boxes) pair only.
    Two states reached by different paths compare equal, which is what
    lets the closed set deduplicate game positions.

    Attributes:
        player: Player cell
        boxes: Box cells, sorted row-major
        parent: Arena index of the predecessor (None for the root)
        move_segment: Walk to the push-origin cell followed by one push
        g: Pushes performed so far
        h: Heuristic estimate of pushes remaining
    """
    player: Cell
    boxes: Tuple[Cell, ...]
    parent: Optional[int] = None
    move_segment: Tuple[Direction, ...] = ()
    g: int = 0
    h: int = 0

    @classmethod
    def create(
        cls,
        player: Cell,
        boxes: Iterable[Cell],
        parent: Optional[int] = None,
        move_segment: Iterable[Direction] = (),
        g: int = 0,
        h: int = 0,
    ) -> "PuzzleState":
        """
        Create a state with the box set put in canonical order.

        Args:
            player: Player cell
            boxes: Box cells in any order
            parent: Arena index of predecessor
            move_segment: Moves from predecessor to this state
            g: Path cost so far
            h: Heuristic estimate

        Returns:
            PuzzleState instance
        """
        return cls(
            player=tuple(player),
            boxes=tuple(sorted(tuple(box) for box in boxes)),
            parent=parent,
            move_segment=tuple(move_segment),
            g=g,
            h=h,
        )

    @property
    def key(self) -> Tuple[Cell, Tuple[Cell, ...]]:
        """Game-state identity used for dedup."""
        return (self.player, self.boxes)

    @property
    def f(self) -> int:
        """Estimated total cost g + h."""
        return self.g + self.h

    def is_win(self, goals: Iterable[Cell]) -> bool:
        """True if the boxes cover exactly the goal cells."""
        return set(self.boxes) == set(goals)

    def __hash__(self):
        return hash(self.key)

    def __eq__(self, other):
        if not isinstance(other, PuzzleState):
            return NotImplemented
        return self.key == other.key


class StateArena:
    """
    Append-only store of states addressed by integer handles.

    Parent links are handles into the same arena, so path
    reconstruction is an index walk back to the root.
    """

    def __init__(self):
        self._states: List[PuzzleState] = []

    def add(self, state: PuzzleState) -> int:
        """
        Store a state.

        Args:
            state: State to store

        Returns:
            Handle of the stored state
        """
        assert state.parent is None or 0 <= state.parent < len(self._states), \
            f"parent handle {state.parent} not in arena"
        self._states.append(state)
        return len(self._states) - 1

    def get(self, index: int) -> PuzzleState:
        """Get state by handle."""
        return self._states[index]

    def chain(self, index: int) -> List[PuzzleState]:
        """
        States from the root to the given state, inclusive.

        Args:
            index: Handle of the last state

        Returns:
            List of states in root-to-state order
        """
        chain: List[PuzzleState] = []
        current: Optional[int] = index
        while current is not None:
            state = self._states[current]
            chain.append(state)
            current = state.parent
        chain.reverse()
        return chain

    def path_to(self, index: int) -> List[Direction]:
        """
        Full elementary move sequence from the root to a state.

        Args:
            index: Handle of the last state

        Returns:
            Concatenated move segments in root-to-state order
        """
        moves: List[Direction] = []
        for state in self.chain(index):
            moves.extend(state.move_segment)
        return moves

    def __len__(self) -> int:
        return len(self._states)

"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterator, List, Tuple


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (row, col) from head at index 0 to tail at the end
    """

    def __init__(self, positions: List[Tuple[int, int]]):
        if not positions:
            raise ValueError("A snake needs at least one position.")
        self.positions = deque(positions)

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    def push_head(self, position: Tuple[int, int]):
        self.positions.appendleft(position)

    def pop_tail(self) -> Tuple[int, int]:
        return self.positions.pop()

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(self.positions)

    def __contains__(self, position) -> bool:
        return position in self.positions

    def __repr__(self):
        return f"<Snake length={len(self)}, head={self.head}>"

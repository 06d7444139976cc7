"""
Enums and defaults shared by the engine, the players and the terminal.

Coordinates are (row, col) with row 0 at the top of the board.
"""

import enum
from typing import Tuple

# Defaults taken from the classic terminal game
DEFAULT_ROWS = 20
DEFAULT_COLS = 20
DEFAULT_INITIAL_LENGTH = 2
DEFAULT_TICK_DELAY = 0.1  # seconds
DEFAULT_TERM_WIDTH = 140


class CellKind(enum.IntEnum):
    """Integer tags stored in the board array."""

    EMPTY = 0
    SNAKE_BODY = 1
    FOOD = 2

    @property
    def glyph(self) -> str:
        return CELL_GLYPHS[self]


CELL_GLYPHS = {
    CellKind.EMPTY: "*",
    CellKind.SNAKE_BODY: "S",
    CellKind.FOOD: "F",
}


class Direction(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Tuple[int, int]:
        """Unit step as (d_row, d_col)."""
        return DIRECTION_VECTORS[self]

    @property
    def opposite(self) -> "Direction":
        return OPPOSITES[self]

    @classmethod
    def parse(cls, value: str) -> "Direction":
        """Look up a direction by name, case-insensitively."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown direction '{value}'. Expected one of: {valid}")


DIRECTION_VECTORS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class GameStatus(enum.Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class GameOverReason(enum.Enum):
    WALL = "wall"
    SELF_COLLISION = "self_collision"
    BOARD_FULL = "board_full"  # every cell is snake, nothing left to eat


class TickOutcome(enum.Enum):
    IDLE = "idle"  # no direction set yet
    MOVED = "moved"
    GREW = "grew"
    GAME_OVER = "game_over"

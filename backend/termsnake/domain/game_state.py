"""
Read-only snapshot of a game, handed to renderers and players.
"""

from typing import Optional, Tuple

import numpy as np

from .constants import CellKind, Direction, GameOverReason, GameStatus


class GameState:
    """
    A snapshot of the game at a specific point in time:
      - grid: non-writeable (rows, cols) array of CellKind values
      - body: tuple of (row, col), head first
      - length: observed length counter
      - status: RUNNING or GAME_OVER
      - game_over_reason: set once status is GAME_OVER
      - food: (row, col) of the food, None when the board is full
      - direction: direction the snake last moved in (None before the first move)
      - tick_count: ticks that ran while the game was running
    """
    def __init__(self,
                 grid: np.ndarray,
                 body: Tuple[Tuple[int, int], ...],
                 length: int,
                 status: GameStatus,
                 game_over_reason: Optional[GameOverReason],
                 food: Optional[Tuple[int, int]],
                 direction: Optional[Direction],
                 tick_count: int):
        self.grid = grid
        self.body = body
        self.length = length
        self.status = status
        self.game_over_reason = game_over_reason
        self.food = food
        self.direction = direction
        self.tick_count = tick_count

    @property
    def rows(self) -> int:
        return self.grid.shape[0]

    @property
    def cols(self) -> int:
        return self.grid.shape[1]

    @property
    def head(self) -> Tuple[int, int]:
        return self.body[0]

    @property
    def is_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def cell(self, row: int, col: int) -> CellKind:
        return CellKind(int(self.grid[row, col]))

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        * = empty cell
        S = snake body
        F = food
        Cells are followed by a single space, rows run top to bottom.
        """
        return "\n".join(
            "".join(f"{CellKind(int(value)).glyph} " for value in row)
            for row in self.grid
        )

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_count}, status={self.status.value}, "
            f"length={self.length}, food={self.food}>"
        )

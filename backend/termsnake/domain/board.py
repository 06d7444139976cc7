"""
Board for the game engine.

A fixed-size grid of CellKind tags backed by a NumPy array. The board
only stores tags; which cells belong to the snake is decided by the
engine, which is the only caller that mutates it.
"""

import random
from typing import Optional, Set, Tuple

import numpy as np

from .constants import CellKind
from .errors import BoardFullError, InvalidConfigError, OutOfBoundsError


class Board:
    """
    Grid of cells addressed by (row, col).

    Attributes:
        rows: number of rows, row 0 is the top of the board
        cols: number of columns, col 0 is the left edge
        cells: int8 array of shape (rows, cols) holding CellKind values
    """

    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise InvalidConfigError(
                f"Board dimensions must be positive, got {rows}x{cols}."
            )
        self.rows = rows
        self.cols = cols
        self.cells = np.full((rows, cols), CellKind.EMPTY, dtype=np.int8)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check(self, row: int, col: int):
        # NumPy would silently wrap negative indices
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self.rows, self.cols)

    def get(self, row: int, col: int) -> CellKind:
        """Return the tag of a cell. Raises OutOfBoundsError off-grid."""
        self._check(row, col)
        return CellKind(int(self.cells[row, col]))

    def set(self, row: int, col: int, kind: CellKind):
        """Overwrite the tag of a cell. Raises OutOfBoundsError off-grid."""
        self._check(row, col)
        self.cells[row, col] = CellKind(kind)

    def count(self, kind: CellKind) -> int:
        return int(np.count_nonzero(self.cells == kind))

    def cells_of(self, kind: CellKind) -> Set[Tuple[int, int]]:
        """Return every (row, col) currently tagged with `kind`."""
        rows, cols = np.nonzero(self.cells == kind)
        return set(zip(rows.tolist(), cols.tolist()))

    def random_empty_cell(self, rng: Optional[random.Random] = None) -> Tuple[int, int]:
        """
        Pick an Empty cell uniformly at random.

        Args:
            rng: random source, defaults to the `random` module

        Returns:
            (row, col) of an Empty cell

        Raises:
            BoardFullError: if no Empty cell is left
        """
        empty = np.flatnonzero(self.cells == CellKind.EMPTY)
        if empty.size == 0:
            raise BoardFullError(
                f"No empty cell left on the {self.rows}x{self.cols} board."
            )
        rng = rng or random
        index = int(empty[rng.randrange(empty.size)])
        return divmod(index, self.cols)

    def snapshot(self) -> np.ndarray:
        """Return a read-only copy of the tags."""
        view = self.cells.copy()
        view.setflags(write=False)
        return view

    def __repr__(self):
        return (
            f"<Board {self.rows}x{self.cols}, "
            f"snake={self.count(CellKind.SNAKE_BODY)}, food={self.count(CellKind.FOOD)}>"
        )

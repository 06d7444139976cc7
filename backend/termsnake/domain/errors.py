"""
Exceptions raised by the game engine.

Game over is not an error: it is reported through TickResult and the
engine status. These exceptions cover programmer mistakes and bad
construction parameters.
"""


class SnakeError(Exception):
    """Base class for all termsnake errors."""


class OutOfBoundsError(SnakeError, IndexError):
    """A cell outside the grid was read or written."""

    def __init__(self, row: int, col: int, rows: int, cols: int):
        self.row = row
        self.col = col
        super().__init__(
            f"Cell ({row}, {col}) is outside the {rows}x{cols} board."
        )


class InvalidConfigError(SnakeError, ValueError):
    """Game construction parameters are not usable."""


class BoardFullError(SnakeError):
    """No Empty cell is left to place food on."""

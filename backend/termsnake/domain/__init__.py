"""
Core simulation for termsnake: board, snake, engine and snapshots.

Nothing in this package performs I/O.
"""

from .board import Board
from .constants import CellKind, Direction, GameOverReason, GameStatus, TickOutcome
from .engine import SnakeEngine, TickResult, new_game
from .errors import BoardFullError, InvalidConfigError, OutOfBoundsError, SnakeError
from .game_state import GameState
from .snake import Snake

__all__ = [
    'Board',
    'BoardFullError',
    'CellKind',
    'Direction',
    'GameOverReason',
    'GameState',
    'GameStatus',
    'InvalidConfigError',
    'OutOfBoundsError',
    'Snake',
    'SnakeEngine',
    'SnakeError',
    'TickOutcome',
    'TickResult',
    'new_game',
]

"""
Player implementations for termsnake.

Autopilots that choose the snake's next direction from a GameState, used
instead of the keyboard by the --autopilot flag.
"""

from .base import Player
from .greedy_player import GreedyPlayer
from .random_player import RandomPlayer
from .registry import AVAILABLE_PLAYERS, get_player_class

__all__ = [
    'Player',
    'RandomPlayer',
    'GreedyPlayer',
    'get_player_class',
    'AVAILABLE_PLAYERS',
]

"""
Registry for autopilot players.

Maps the names accepted by the --autopilot flag to player classes.
"""

from typing import Dict, Optional, Type

from .base import Player
from .greedy_player import GreedyPlayer
from .random_player import RandomPlayer

PLAYER_CLASSES: Dict[str, Type[Player]] = {
    RandomPlayer.name: RandomPlayer,
    GreedyPlayer.name: GreedyPlayer,
}

AVAILABLE_PLAYERS = list(PLAYER_CLASSES.keys())


def get_player_class(key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given key.

    Args:
        key: One of AVAILABLE_PLAYERS. If None or empty, returns the greedy player.

    Raises:
        ValueError: If key is not recognized.
    """
    if not key or key.strip() == "":
        key = GreedyPlayer.name

    key = key.strip().lower()

    if key not in PLAYER_CLASSES:
        available = ", ".join(AVAILABLE_PLAYERS)
        raise ValueError(f"Unknown autopilot '{key}'. Available players: {available}")

    return PLAYER_CLASSES[key]

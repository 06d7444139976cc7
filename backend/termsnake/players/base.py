"""
Base player interface for the game engine.
"""

import random
from typing import Dict, List, Optional, Tuple

from termsnake.domain.constants import Direction
from termsnake.domain.game_state import GameState


class Player:
    """
    Base class/interface for player logic.

    Each player is responsible for returning the direction the snake
    should take on the next tick given the current game state.
    """

    name = "player"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Direction:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            A Direction; reversals are ignored by the engine
        """
        raise NotImplementedError


def candidate_moves(game_state: GameState) -> Dict[Direction, Tuple[int, int]]:
    """Next head cell for every direction the engine would accept."""
    head_row, head_col = game_state.head
    blocked = game_state.direction.opposite if game_state.direction else None
    if blocked is None and len(game_state.body) > 1:
        neck = game_state.body[1]
        blocked = next(
            (d for d in Direction
             if (head_row + d.vector[0], head_col + d.vector[1]) == neck),
            None,
        )
    return {
        d: (head_row + d.vector[0], head_col + d.vector[1])
        for d in Direction
        if d is not blocked
    }


def safe_moves(game_state: GameState) -> List[Tuple[Direction, Tuple[int, int]]]:
    """
    Moves that keep the snake alive for at least one more tick.

    The tail still occupies its cell while the head is resolved, so every
    body cell counts as an obstacle.
    """
    body = set(game_state.body)
    safe = []
    for move, (row, col) in candidate_moves(game_state).items():
        if not (0 <= row < game_state.rows and 0 <= col < game_state.cols):
            continue
        if (row, col) in body:
            continue
        safe.append((move, (row, col)))
    return safe

"""
Random player implementation - picks random safe moves.
"""

from termsnake.domain.constants import Direction
from termsnake.domain.game_state import GameState
from .base import Player, candidate_moves, safe_moves


class RandomPlayer(Player):
    """
    A random AI that picks a direction that avoids walls and self-collisions.
    """

    name = "random"

    def get_move(self, game_state: GameState) -> Direction:
        valid_moves = [move for move, _ in safe_moves(game_state)]

        # If no valid moves, just return any accepted move (we'll die anyway)
        if not valid_moves:
            return self.rng.choice(sorted(candidate_moves(game_state), key=lambda d: d.value))

        return self.rng.choice(valid_moves)

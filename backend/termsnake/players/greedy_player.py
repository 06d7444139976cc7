"""
Greedy player implementation - heads for the food by the shortest
Manhattan step, falling back to any safe move.
"""

from termsnake.domain.constants import Direction
from termsnake.domain.game_state import GameState
from .base import Player, safe_moves
from .random_player import RandomPlayer


class GreedyPlayer(Player):
    """
    Moves toward the food while avoiding walls and its own body.

    The player does no look-ahead, so it can still trap itself in a loop of
    its own body on long games.
    """

    name = "greedy"

    def __init__(self, rng=None):
        super().__init__(rng)
        self._fallback = RandomPlayer(self.rng)

    def get_move(self, game_state: GameState) -> Direction:
        safe = safe_moves(game_state)
        if not safe or game_state.food is None:
            return self._fallback.get_move(game_state)

        food_row, food_col = game_state.food

        def dist_to_food(cell):
            return abs(cell[0] - food_row) + abs(cell[1] - food_col)

        current_dist = dist_to_food(game_state.head)
        better = [move for move, cell in safe if dist_to_food(cell) < current_dist]
        if better:
            # Prefer keeping the current heading to avoid zig-zagging
            if game_state.direction in better:
                return game_state.direction
            return self.rng.choice(better)

        return self.rng.choice([move for move, _ in safe])

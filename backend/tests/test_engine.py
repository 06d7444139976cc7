"""
Tests for the snake engine.

Covers the tick algorithm (move, grow, wall, self collision), direction
handling, food placement and the board/body invariants over whole games.
"""

import os
import random
import sys

import numpy as np
import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from termsnake.domain import (
    CellKind,
    Direction,
    GameOverReason,
    GameState,
    GameStatus,
    InvalidConfigError,
    OutOfBoundsError,
    Snake,
    SnakeEngine,
    TickOutcome,
    TickResult,
    new_game,
)
from termsnake.players import RandomPlayer


def assert_invariants(engine: SnakeEngine):
    """Board and body agree and the body is a connected simple path."""
    body = engine.body
    assert len(body) == engine.length
    assert len(set(body)) == len(body)
    for (r1, c1), (r2, c2) in zip(body, body[1:]):
        assert abs(r1 - r2) + abs(c1 - c2) == 1
    assert engine.board.cells_of(CellKind.SNAKE_BODY) == set(body)
    if engine.status is GameStatus.RUNNING:
        assert engine.board.count(CellKind.FOOD) == 1
        assert engine.board.get(*engine.food) is CellKind.FOOD


class TestSnake:
    """The head-first body deque."""

    def test_push_head_and_pop_tail(self):
        snake = Snake([(2, 2), (2, 1)])
        snake.push_head((2, 3))
        assert snake.head == (2, 3)
        assert snake.pop_tail() == (2, 1)
        assert list(snake) == [(2, 3), (2, 2)]
        assert (2, 1) not in snake

    def test_needs_a_position(self):
        with pytest.raises(ValueError):
            Snake([])


class TestNewGame:
    """Construction through new_game()."""

    def test_centred_layout(self):
        """The snake lies on the middle row, head on the right."""
        engine = new_game(6, 6, 2)
        assert engine.body == ((3, 3), (3, 2))
        assert engine.length == 2
        assert engine.status is GameStatus.RUNNING
        assert engine.direction is None

    def test_default_board_layout(self):
        """On a 20x20 board the head sits in the centre cell."""
        engine = new_game(20, 20, 2)
        assert engine.head == (10, 10)
        assert engine.body == ((10, 10), (10, 9))

    def test_length_equal_to_cols_fills_the_row(self):
        engine = new_game(3, 5, 5)
        assert engine.body == ((1, 4), (1, 3), (1, 2), (1, 1), (1, 0))

    def test_single_cell_snake(self):
        engine = new_game(5, 5, 1)
        assert engine.body == ((2, 2),)

    def test_food_is_placed(self):
        """A fresh game has exactly one food cell, off the snake."""
        engine = new_game(8, 8, 3, seed=11)
        assert engine.food is not None
        assert engine.food not in engine.body
        assert_invariants(engine)

    def test_seed_is_deterministic(self):
        assert new_game(10, 10, 2, seed=3).food == new_game(10, 10, 2, seed=3).food

    def test_initial_direction(self):
        engine = new_game(6, 6, 2, initial_direction=Direction.UP)
        assert engine.direction is Direction.UP

    @pytest.mark.parametrize("rows,cols,length", [
        (0, 5, 1),
        (5, 0, 1),
        (5, 5, 0),
        (5, 5, -2),
        (5, 5, 6),
    ])
    def test_invalid_config(self, rows, cols, length):
        """Bad parameters are rejected, never clamped."""
        with pytest.raises(InvalidConfigError):
            new_game(rows, cols, length)

    @pytest.mark.parametrize("rows,cols,length", [(1, 1, 1), (1, 3, 3)])
    def test_snake_filling_the_board_is_already_won(self, rows, cols, length):
        """No room for food at the start ends the game as a full board."""
        engine = new_game(rows, cols, length)
        assert engine.is_over
        assert engine.game_over_reason is GameOverReason.BOARD_FULL
        assert engine.food is None
        assert engine.length == length
        assert engine.tick() == TickResult(TickOutcome.GAME_OVER, GameOverReason.BOARD_FULL)

    def test_one_free_cell_gets_the_food(self):
        engine = new_game(1, 3, 2, seed=1)
        assert engine.status is GameStatus.RUNNING
        assert engine.food == (0, 2)

    def test_invalid_config_is_a_value_error(self):
        with pytest.raises(ValueError):
            new_game(5, 5, 0)

    def test_initial_direction_into_body_rejected(self):
        with pytest.raises(InvalidConfigError):
            new_game(6, 6, 2, initial_direction=Direction.LEFT)


class TestFromBody:
    """Construction from an explicit layout."""

    def test_marks_body_and_food(self):
        engine = SnakeEngine.from_body(5, 5, [(2, 2), (2, 1)], food=(0, 0))
        assert engine.board.cells_of(CellKind.SNAKE_BODY) == {(2, 2), (2, 1)}
        assert engine.food == (0, 0)
        assert engine.board.get(0, 0) is CellKind.FOOD

    @pytest.mark.parametrize("body", [
        [],
        [(2, 2), (2, 2)],
        [(2, 2), (2, 4)],
        [(2, 2), (3, 3)],
        [(0, 0), (-1, 0)],
    ])
    def test_invalid_bodies(self, body):
        with pytest.raises(InvalidConfigError):
            SnakeEngine.from_body(5, 5, body)

    def test_food_on_body_rejected(self):
        with pytest.raises(InvalidConfigError):
            SnakeEngine.from_body(5, 5, [(2, 2), (2, 1)], food=(2, 1))


class TestTick:
    """The per-tick transition."""

    def test_growth_scenario(self):
        """Eating food keeps the tail and grows by one."""
        engine = SnakeEngine.from_body(
            6, 6, [(3, 3), (3, 2)], direction=Direction.RIGHT, food=(3, 4),
            rng=random.Random(0),
        )
        before = engine.board.snapshot()

        result = engine.tick()

        assert result == TickResult(TickOutcome.GREW)
        assert engine.body == ((3, 4), (3, 3), (3, 2))
        assert engine.length == 3
        assert engine.food is not None
        assert engine.food != (3, 4)
        assert engine.food not in engine.body

        after = engine.board.snapshot()
        changed = set(zip(*np.nonzero(before != after)))
        changed = {(int(r), int(c)) for r, c in changed}
        assert changed == {(3, 4), engine.food}
        assert before[engine.food] == CellKind.EMPTY
        assert_invariants(engine)

    def test_wall_scenario(self):
        """Moving up from the top row ends the game."""
        engine = SnakeEngine.from_body(6, 6, [(0, 2), (1, 2)], direction=Direction.UP, food=(5, 5))
        before = engine.board.snapshot()

        result = engine.tick()

        assert result == TickResult(TickOutcome.GAME_OVER, GameOverReason.WALL)
        assert result.game_over is True
        assert engine.status is GameStatus.GAME_OVER
        assert engine.game_over_reason is GameOverReason.WALL
        assert np.array_equal(before, engine.board.snapshot())
        assert engine.body == ((0, 2), (1, 2))

    @pytest.mark.parametrize("body,direction", [
        ([(2, 0), (2, 1)], Direction.LEFT),
        ([(2, 4), (2, 3)], Direction.RIGHT),
        ([(4, 2), (3, 2)], Direction.DOWN),
    ])
    def test_every_edge_is_a_wall(self, body, direction):
        engine = SnakeEngine.from_body(5, 5, body, direction=direction, food=(0, 0))
        assert engine.tick().reason is GameOverReason.WALL

    def test_move_scenario(self):
        """A plain move drops the tail and keeps the length."""
        engine = SnakeEngine.from_body(
            6, 6, [(2, 2), (2, 3), (2, 4), (2, 5)], direction=Direction.LEFT, food=(5, 5)
        )

        result = engine.tick()

        assert result == TickResult(TickOutcome.MOVED)
        assert engine.body == ((2, 1), (2, 2), (2, 3), (2, 4))
        assert engine.board.get(2, 5) is CellKind.EMPTY
        assert engine.board.get(2, 1) is CellKind.SNAKE_BODY
        assert engine.length == 4
        assert engine.food == (5, 5)
        assert_invariants(engine)

    def test_self_collision(self):
        """Turning into the body ends the game without touching the board."""
        body = [(2, 2), (2, 3), (3, 3), (3, 2), (3, 1)]
        engine = SnakeEngine.from_body(6, 6, body, direction=Direction.DOWN, food=(0, 0))
        before = engine.board.snapshot()

        result = engine.tick()

        assert result == TickResult(TickOutcome.GAME_OVER, GameOverReason.SELF_COLLISION)
        assert engine.body == tuple(body)
        assert np.array_equal(before, engine.board.snapshot())

    def test_moving_onto_the_tail_collides(self):
        """The tail still occupies its cell when the head is resolved."""
        body = [(2, 2), (2, 3), (3, 3), (3, 2)]
        engine = SnakeEngine.from_body(6, 6, body, direction=Direction.DOWN, food=(0, 0))
        assert engine.tick().reason is GameOverReason.SELF_COLLISION

    def test_no_direction_means_no_movement(self):
        """Before any direction is set, ticks leave the snake in place."""
        engine = new_game(6, 6, 2, seed=1)
        before = engine.board.snapshot()

        result = engine.tick()

        assert result == TickResult(TickOutcome.IDLE)
        assert engine.body == ((3, 3), (3, 2))
        assert np.array_equal(before, engine.board.snapshot())
        assert engine.tick_count == 1

    def test_ticks_after_game_over_change_nothing(self):
        """GAME_OVER is terminal and repeated ticks report the same result."""
        engine = SnakeEngine.from_body(4, 4, [(0, 0)], direction=Direction.UP, food=(3, 3))
        engine.tick()
        before = engine.board.snapshot()
        count = engine.tick_count

        for _ in range(3):
            assert engine.tick() == TickResult(TickOutcome.GAME_OVER, GameOverReason.WALL)

        assert np.array_equal(before, engine.board.snapshot())
        assert engine.tick_count == count

    def test_filling_the_board_ends_the_game(self):
        """Eating the last food with nowhere left for more is a win."""
        engine = SnakeEngine.from_body(1, 3, [(0, 1), (0, 0)], direction=Direction.RIGHT, food=(0, 2))

        result = engine.tick()

        assert result == TickResult(TickOutcome.GREW, GameOverReason.BOARD_FULL)
        assert engine.status is GameStatus.GAME_OVER
        assert engine.game_over_reason is GameOverReason.BOARD_FULL
        assert engine.food is None
        assert engine.length == 3
        assert engine.board.count(CellKind.FOOD) == 0
        assert engine.tick() == TickResult(TickOutcome.GAME_OVER, GameOverReason.BOARD_FULL)

    def test_length_grows_once_per_food(self):
        engine = SnakeEngine.from_body(3, 6, [(1, 1), (1, 0)], direction=Direction.RIGHT, food=(1, 2))
        engine.tick()
        assert engine.length == 3
        engine.place_food(1, 4)
        assert engine.tick().outcome is TickOutcome.MOVED
        assert engine.tick().outcome is TickOutcome.GREW
        assert engine.length == 4
        assert engine.body == ((1, 4), (1, 3), (1, 2), (1, 1))


class TestDirection:
    """set_direction() and the reversal rule."""

    def test_reversal_is_ignored(self):
        """Requesting the opposite direction has no effect on the next tick."""
        steered = new_game(10, 10, 3, initial_direction=Direction.RIGHT, seed=4)
        plain = new_game(10, 10, 3, initial_direction=Direction.RIGHT, seed=4)

        assert steered.set_direction(Direction.LEFT) is False

        assert steered.tick() == plain.tick()
        assert steered.body == plain.body
        assert steered.direction is Direction.RIGHT

    def test_turn_is_applied_on_next_tick(self):
        engine = new_game(10, 10, 3, initial_direction=Direction.RIGHT, seed=4)
        assert engine.set_direction(Direction.UP) is True
        assert engine.direction is Direction.RIGHT
        assert engine.pending_direction is Direction.UP

        engine.tick()

        assert engine.direction is Direction.UP
        assert engine.pending_direction is None
        assert engine.head == (4, 5)

    def test_reversal_checked_against_current_not_pending(self):
        """A queued turn survives a later reversal request."""
        engine = new_game(10, 10, 3, initial_direction=Direction.RIGHT, seed=4)
        engine.set_direction(Direction.UP)
        assert engine.set_direction(Direction.LEFT) is False
        assert engine.pending_direction is Direction.UP

    def test_latest_request_wins(self):
        engine = new_game(10, 10, 3, initial_direction=Direction.RIGHT, seed=4)
        engine.set_direction(Direction.UP)
        engine.set_direction(Direction.DOWN)
        engine.tick()
        assert engine.direction is Direction.DOWN

    def test_reversal_into_neck_ignored_before_first_move(self):
        engine = new_game(6, 6, 2, seed=2)
        assert engine.set_direction(Direction.LEFT) is False
        assert engine.set_direction(Direction.UP) is True

    def test_single_cell_snake_can_pick_any_first_direction(self):
        engine = SnakeEngine.from_body(5, 5, [(2, 2)], food=(0, 0))
        for direction in Direction:
            assert engine.set_direction(direction) is True

    def test_single_cell_snake_still_cannot_reverse(self):
        engine = SnakeEngine.from_body(5, 5, [(2, 2)], direction=Direction.RIGHT, food=(0, 0))
        assert engine.set_direction(Direction.LEFT) is False

    def test_ignored_after_game_over(self):
        engine = SnakeEngine.from_body(4, 4, [(0, 0)], direction=Direction.UP, food=(3, 3))
        engine.tick()
        assert engine.set_direction(Direction.DOWN) is False

    def test_rejects_non_directions(self):
        engine = new_game(6, 6, 2)
        with pytest.raises(ValueError):
            engine.set_direction("up")


class TestPlaceFood:
    """Explicit food placement."""

    def test_moves_the_marker(self):
        engine = SnakeEngine.from_body(5, 5, [(2, 2)], food=(0, 0))
        engine.place_food(4, 4)
        assert engine.food == (4, 4)
        assert engine.board.get(0, 0) is CellKind.EMPTY
        assert engine.board.cells_of(CellKind.FOOD) == {(4, 4)}

    def test_on_the_snake_rejected(self):
        engine = SnakeEngine.from_body(5, 5, [(2, 2)], food=(0, 0))
        with pytest.raises(ValueError):
            engine.place_food(2, 2)
        assert engine.food == (0, 0)

    def test_off_grid_rejected(self):
        engine = SnakeEngine.from_body(5, 5, [(2, 2)], food=(0, 0))
        with pytest.raises(OutOfBoundsError):
            engine.place_food(5, 0)


class TestSnapshot:
    """Read-only views for renderers."""

    def test_snapshot_contents(self):
        engine = SnakeEngine.from_body(4, 4, [(1, 1), (1, 0)], direction=Direction.RIGHT, food=(3, 3))
        state = engine.snapshot()

        assert isinstance(state, GameState)
        assert state.body == ((1, 1), (1, 0))
        assert state.length == 2
        assert state.status is GameStatus.RUNNING
        assert state.food == (3, 3)
        assert state.direction is Direction.RIGHT
        assert state.rows == 4
        assert state.cols == 4
        assert state.cell(1, 1) is CellKind.SNAKE_BODY

    def test_snapshot_is_detached(self):
        """A snapshot does not follow later ticks and cannot be written."""
        engine = SnakeEngine.from_body(4, 4, [(1, 1), (1, 0)], direction=Direction.RIGHT, food=(3, 3))
        state = engine.snapshot()
        engine.tick()

        assert state.body == ((1, 1), (1, 0))
        assert state.cell(1, 0) is CellKind.SNAKE_BODY
        assert engine.board.get(1, 0) is CellKind.EMPTY
        with pytest.raises(ValueError):
            state.grid[0, 0] = CellKind.FOOD

    def test_snapshot_after_game_over(self):
        engine = SnakeEngine.from_body(4, 4, [(0, 0)], direction=Direction.UP, food=(3, 3))
        engine.tick()
        state = engine.snapshot()
        assert state.is_over is True
        assert state.game_over_reason is GameOverReason.WALL


class TestInvariantsOverGames:
    """Run whole games with a random autopilot and check every state."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_random_games_keep_invariants(self, seed):
        engine = new_game(7, 7, 3, initial_direction=Direction.RIGHT, seed=seed)
        player = RandomPlayer(random.Random(seed))
        assert_invariants(engine)

        for _ in range(400):
            length_before = engine.length
            tail_before = engine.body[-1]
            engine.set_direction(player.get_move(engine.snapshot()))
            result = engine.tick()

            if result.outcome is TickOutcome.MOVED:
                assert engine.length == length_before
                if tail_before not in engine.body:
                    assert engine.board.get(*tail_before) is CellKind.EMPTY
            elif result.outcome is TickOutcome.GREW:
                assert engine.length == length_before + 1
                assert engine.body[-1] == tail_before

            assert_invariants(engine)
            if engine.is_over:
                break

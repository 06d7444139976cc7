"""
Snake engine: owns the board, the snake and the per-tick transition.

The engine is the single mutation path for game state. Callers steer it
with set_direction(), advance it with tick() and read it through
snapshot(). It never performs I/O and never blocks.
"""

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .board import Board
from .constants import CellKind, Direction, GameOverReason, GameStatus, TickOutcome
from .errors import BoardFullError, InvalidConfigError
from .game_state import GameState
from .snake import Snake

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(frozen=True)
class TickResult:
    """
    What happened on one tick.

    reason is set when the game ended on this tick (or had already ended).
    A growth move that fills the board reports GREW with reason BOARD_FULL.
    """
    outcome: TickOutcome
    reason: Optional[GameOverReason] = None

    @property
    def game_over(self) -> bool:
        return self.reason is not None


def _direction_between(src: Position, dst: Position) -> Optional[Direction]:
    step = (dst[0] - src[0], dst[1] - src[1])
    for direction in Direction:
        if direction.vector == step:
            return direction
    return None


class SnakeEngine:
    """
    Runs one single-player game.

    Use new_game() for the standard centred start, or from_body() to start
    from an explicit layout.
    """

    def __init__(
        self,
        board: Board,
        snake: Snake,
        direction: Optional[Direction] = None,
        rng: Optional[random.Random] = None,
    ):
        self.board = board
        self.snake = snake
        self.rng = rng or random.Random()
        self._direction = direction
        self._pending: Optional[Direction] = None
        self._length = len(snake)
        self._status = GameStatus.RUNNING
        self._reason: Optional[GameOverReason] = None
        self._food: Optional[Position] = None
        self._tick_count = 0

    @classmethod
    def from_body(
        cls,
        rows: int,
        cols: int,
        body: Iterable[Position],
        direction: Optional[Direction] = None,
        food: Optional[Position] = None,
        rng: Optional[random.Random] = None,
    ) -> "SnakeEngine":
        """
        Build an engine with the snake at `body` (head first).

        Food goes to `food` when given, otherwise to a random Empty cell. A
        snake that already fills the board starts finished with BOARD_FULL.

        Raises:
            InvalidConfigError: if the body is empty, off-grid, overlapping or
                not connected, or if `direction` points back into the body
        """
        board = Board(rows, cols)
        body = [tuple(position) for position in body]
        if not body:
            raise InvalidConfigError("The snake body needs at least one position.")
        if len(set(body)) != len(body):
            raise InvalidConfigError(f"Snake body overlaps itself: {body}")
        for row, col in body:
            if not board.in_bounds(row, col):
                raise InvalidConfigError(f"Snake body cell {(row, col)} is outside the board.")
        for front, back in zip(body, body[1:]):
            if _direction_between(back, front) is None:
                raise InvalidConfigError(f"Snake body is not connected between {front} and {back}.")

        snake = Snake(body)
        for row, col in snake:
            board.set(row, col, CellKind.SNAKE_BODY)

        engine = cls(board, snake, rng=rng)
        if direction is not None:
            if direction is engine.facing_opposite:
                raise InvalidConfigError(
                    f"Initial direction {direction.value} points back into the snake."
                )
            engine._direction = direction

        if food is None:
            engine._relocate_food()
        else:
            food = tuple(food)
            if not board.in_bounds(*food) or food in snake:
                raise InvalidConfigError(f"Food cell {food} is off the board or on the snake.")
            engine.place_food(*food)
        return engine

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status is GameStatus.GAME_OVER

    @property
    def game_over_reason(self) -> Optional[GameOverReason]:
        return self._reason

    @property
    def length(self) -> int:
        return self._length

    @property
    def body(self) -> Tuple[Position, ...]:
        return tuple(self.snake)

    @property
    def head(self) -> Position:
        return self.snake.head

    @property
    def food(self) -> Optional[Position]:
        return self._food

    @property
    def direction(self) -> Optional[Direction]:
        return self._direction

    @property
    def pending_direction(self) -> Optional[Direction]:
        return self._pending

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def facing_opposite(self) -> Optional[Direction]:
        """Direction from the head back into the neck, None for a one-cell snake."""
        if len(self.snake) < 2:
            return None
        return _direction_between(self.snake.head, self.snake.positions[1])

    def snapshot(self) -> GameState:
        """Return a read-only view of the current game."""
        return GameState(
            grid=self.board.snapshot(),
            body=self.body,
            length=self._length,
            status=self._status,
            game_over_reason=self._reason,
            food=self._food,
            direction=self._direction,
            tick_count=self._tick_count,
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_direction(self, requested: Direction) -> bool:
        """
        Queue a direction for the next tick.

        A request that reverses the current direction is ignored. Before the
        first move there is no current direction, and a request pointing back
        into the neck is ignored as well so the first tick cannot bite it.

        Returns:
            True if the request was accepted, False if it was ignored
        """
        if not isinstance(requested, Direction):
            raise ValueError(f"Expected a Direction, got {requested!r}")
        if self.is_over:
            return False

        current = self._direction
        if current is not None:
            blocked = current.opposite
        else:
            blocked = self.facing_opposite
        if requested is blocked:
            logger.debug("Ignoring reversal to %s", requested.value)
            return False

        self._pending = requested
        return True

    def place_food(self, row: int, col: int):
        """Move the food marker to an Empty cell."""
        kind = self.board.get(row, col)
        if (row, col) == self._food:
            return
        if kind is not CellKind.EMPTY:
            raise ValueError(f"Cannot place food on {kind.name} cell {(row, col)}.")
        if self._food is not None:
            self.board.set(*self._food, CellKind.EMPTY)
        self.board.set(row, col, CellKind.FOOD)
        self._food = (row, col)

    def tick(self) -> TickResult:
        """
        Advance the game by one step.

          1) Once the game is over, report the final result and do nothing
          2) Apply the pending direction; without any direction, stay put
          3) Off-grid next cell => game over (wall)
          4) Empty => move, Food => grow and relocate food,
             Snake body => game over (self collision)
        """
        if self.is_over:
            return TickResult(TickOutcome.GAME_OVER, self._reason)

        self._tick_count += 1
        if self._pending is not None:
            self._direction = self._pending
            self._pending = None
        if self._direction is None:
            return TickResult(TickOutcome.IDLE)

        d_row, d_col = self._direction.vector
        head_row, head_col = self.snake.head
        next_cell = (head_row + d_row, head_col + d_col)

        if not self.board.in_bounds(*next_cell):
            return self._end(GameOverReason.WALL)

        kind = self.board.get(*next_cell)

        if kind is CellKind.EMPTY:
            self._advance_head(next_cell)
            tail = self.snake.pop_tail()
            self.board.set(*tail, CellKind.EMPTY)
            return TickResult(TickOutcome.MOVED)

        if kind is CellKind.FOOD:
            self._advance_head(next_cell)
            self._length += 1
            self._food = None
            self._relocate_food()
            return TickResult(TickOutcome.GREW, self._reason)

        # The tail has not moved yet, so stepping onto it is a collision too
        return self._end(GameOverReason.SELF_COLLISION)

    def _advance_head(self, cell: Position):
        self.board.set(*cell, CellKind.SNAKE_BODY)
        self.snake.push_head(cell)

    def _relocate_food(self):
        try:
            cell = self.board.random_empty_cell(self.rng)
        except BoardFullError:
            logger.info("Board filled at length %d", self._length)
            self._finish(GameOverReason.BOARD_FULL)
            return
        self.board.set(*cell, CellKind.FOOD)
        self._food = cell
        logger.debug("Placed food at %s", cell)

    def _end(self, reason: GameOverReason) -> TickResult:
        self._finish(reason)
        return TickResult(TickOutcome.GAME_OVER, reason)

    def _finish(self, reason: GameOverReason):
        self._status = GameStatus.GAME_OVER
        self._reason = reason
        logger.info(
            "Game over after %d ticks: %s (length %d)",
            self._tick_count, reason.value, self._length
        )

    def __repr__(self):
        return (
            f"<SnakeEngine {self.rows}x{self.cols}, status={self._status.value}, "
            f"length={self._length}, head={self.snake.head}>"
        )


def new_game(
    rows: int,
    cols: int,
    initial_length: int,
    initial_direction: Optional[Direction] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> SnakeEngine:
    """
    Start a game with a straight snake centred on the board.

    The body lies on row rows // 2 with the head on the right, and food is
    dropped on a random Empty cell.

    Args:
        rows, cols: board dimensions
        initial_length: starting body length, must fit in one row
        initial_direction: direction to move in before any input; None keeps
            the snake still until set_direction() is called
        seed: seed for food placement, ignored when `rng` is given
        rng: random source for food placement

    Raises:
        InvalidConfigError: on non-positive dimensions, a length outside
            [1, cols], or an initial direction pointing back into the body
    """
    if rows <= 0 or cols <= 0:
        raise InvalidConfigError(f"Board dimensions must be positive, got {rows}x{cols}.")
    if initial_length < 1:
        raise InvalidConfigError(f"Initial length must be at least 1, got {initial_length}.")
    if initial_length > cols:
        raise InvalidConfigError(
            f"Initial length {initial_length} does not fit in {cols} columns."
        )

    row = rows // 2
    tail_col = (cols - initial_length) // 2
    head_col = tail_col + initial_length - 1
    body = [(row, head_col - i) for i in range(initial_length)]

    if rng is None:
        rng = random.Random(seed)
    engine = SnakeEngine.from_body(rows, cols, body, direction=initial_direction, rng=rng)
    logger.debug("New %dx%d game, snake %s, food %s", rows, cols, body, engine.food)
    return engine

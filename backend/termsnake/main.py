#!/usr/bin/env python3
"""
Terminal snake game.

Usage:
    termsnake                       # steer with w/a/s/d or the arrow keys
    termsnake --autopilot greedy    # watch a bot play
    termsnake --rows 10 --cols 30 --length 5 --delay 0.05

Settings default to the SNAKE_* environment variables (see config.py).
"""

import argparse
import logging
import random
import sys
import time
from typing import Callable, Optional, TextIO

from termsnake.config import GameConfig, load_config
from termsnake.domain.engine import SnakeEngine, new_game
from termsnake.domain.errors import InvalidConfigError
from termsnake.domain.game_state import GameState
from termsnake.players import AVAILABLE_PLAYERS, Player, get_player_class
from termsnake.terminal import KeyboardInput, clear_screen, render_frame

logger = logging.getLogger(__name__)


def engine_from_config(config: GameConfig) -> SnakeEngine:
    return new_game(
        config.rows,
        config.cols,
        config.initial_length,
        initial_direction=config.initial_direction,
        seed=config.seed,
    )


def run_game(
    config: GameConfig,
    player: Optional[Player] = None,
    keyboard: Optional[KeyboardInput] = None,
    out: Optional[TextIO] = None,
    sleep: Callable[[float], None] = time.sleep,
    max_ticks: Optional[int] = None,
    engine: Optional[SnakeEngine] = None,
) -> GameState:
    """
    Play one game to the end and return the final state.

    Each loop: draw the frame, read the next direction (from the player
    if given, else the keyboard), wait the tick delay, advance the engine,
    clear the screen. Ctrl+C stops the game early.

    Args:
        config: board size, starting length, delay and seed
        player: autopilot choosing directions, takes precedence over keyboard
        keyboard: non-blocking key reader
        out: where frames are written
        sleep: pause between ticks
        max_ticks: stop after this many ticks even if the game is still running
        engine: game to play, built from `config` when not given
    """
    if out is None:
        out = sys.stdout
    if engine is None:
        engine = engine_from_config(config)
    logger.info(
        "Starting %dx%d game, length %d, delay %.3fs",
        config.rows, config.cols, config.initial_length, config.tick_delay
    )

    interrupted = False
    try:
        while not engine.is_over:
            if max_ticks is not None and engine.tick_count >= max_ticks:
                logger.info("Stopping after %d ticks", max_ticks)
                break

            out.write(render_frame(engine.snapshot(), config.term_width))
            out.flush()

            if player is not None:
                engine.set_direction(player.get_move(engine.snapshot()))
            elif keyboard is not None:
                for direction in keyboard.read_directions():
                    engine.set_direction(direction)

            sleep(config.tick_delay)
            engine.tick()
            clear_screen(out)
    except KeyboardInterrupt:
        logger.info("Interrupted at tick %d", engine.tick_count)
        out.write("\nGame interrupted by user (Ctrl + C). Exiting...\n")
        interrupted = True

    final_state = engine.snapshot()
    out.write(render_frame(final_state, config.term_width, stopped=interrupted))
    out.flush()
    return final_state


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play snake in the terminal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--rows", type=int, default=None,
                        help="Number of board rows (env SNAKE_ROWS, default 20)")
    parser.add_argument("--cols", type=int, default=None,
                        help="Number of board columns (env SNAKE_COLS, default 20)")
    parser.add_argument("--length", dest="initial_length", type=int, default=None,
                        help="Initial snake length (env SNAKE_INITIAL_LENGTH, default 2)")
    parser.add_argument("--delay", dest="tick_delay", type=float, default=None,
                        help="Seconds between ticks (env SNAKE_TICK_DELAY, default 0.1)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for food placement (env SNAKE_SEED)")
    parser.add_argument("--direction", dest="initial_direction", default=None,
                        choices=["up", "down", "left", "right", "none"],
                        help="Initial direction (env SNAKE_DIRECTION, default right)")
    parser.add_argument("--autopilot", choices=AVAILABLE_PLAYERS, default=None,
                        help="Let a bot play instead of reading the keyboard")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="Stop after this many ticks")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default WARNING)")
    parser.add_argument("--log-file", default=None,
                        help="Write logs to this file instead of stderr")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        filename=args.log_file
    )

    try:
        config = load_config(
            rows=args.rows,
            cols=args.cols,
            initial_length=args.initial_length,
            tick_delay=args.tick_delay,
            seed=args.seed,
            initial_direction=args.initial_direction,
        )
        # Build the game before touching the terminal so bad settings fail early
        engine = engine_from_config(config)
    except InvalidConfigError as e:
        parser.error(str(e))

    if args.autopilot:
        player = get_player_class(args.autopilot)(random.Random(config.seed))
        state = run_game(config, player=player, max_ticks=args.max_ticks, engine=engine)
    else:
        with KeyboardInput() as keyboard:
            state = run_game(config, keyboard=keyboard, max_ticks=args.max_ticks, engine=engine)

    logger.info("Final length %d after %d ticks", state.length, state.tick_count)
    return 0


if __name__ == "__main__":
    sys.exit(main())

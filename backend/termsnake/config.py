"""
Game configuration.

Values come from environment variables (a .env file is honoured through
python-dotenv) and can be overridden by command-line flags.

    SNAKE_ROWS            grid rows (default 20)
    SNAKE_COLS            grid columns (default 20)
    SNAKE_INITIAL_LENGTH  starting length (default 2)
    SNAKE_TICK_DELAY      seconds between ticks (default 0.1)
    SNAKE_SEED            seed for food placement (default: random)
    SNAKE_DIRECTION       initial direction, or "none" (default right)
    SNAKE_TERM_WIDTH      terminal width used to centre the board (default 140)
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from dotenv import load_dotenv

from termsnake.domain.constants import (
    DEFAULT_COLS,
    DEFAULT_INITIAL_LENGTH,
    DEFAULT_ROWS,
    DEFAULT_TERM_WIDTH,
    DEFAULT_TICK_DELAY,
    Direction,
)
from termsnake.domain.errors import InvalidConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    initial_length: int = DEFAULT_INITIAL_LENGTH
    tick_delay: float = DEFAULT_TICK_DELAY
    seed: Optional[int] = None
    initial_direction: Optional[Direction] = Direction.RIGHT
    term_width: int = DEFAULT_TERM_WIDTH

    def __post_init__(self):
        if self.tick_delay < 0:
            raise InvalidConfigError(f"Tick delay cannot be negative, got {self.tick_delay}.")
        if self.term_width <= 0:
            raise InvalidConfigError(f"Terminal width must be positive, got {self.term_width}.")


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfigError(f"{name} must be an integer, got '{raw}'.")


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise InvalidConfigError(f"{name} must be a number, got '{raw}'.")


def parse_direction(value: Optional[str]) -> Optional[Direction]:
    """Parse a direction name; "none" means the snake waits for input."""
    if value is None or value.strip().lower() in ("", "none"):
        return None
    try:
        return Direction.parse(value)
    except ValueError as e:
        raise InvalidConfigError(str(e))


def config_from_env() -> GameConfig:
    """Build a GameConfig from SNAKE_* environment variables."""
    values = _present({
        "rows": _env_int("SNAKE_ROWS"),
        "cols": _env_int("SNAKE_COLS"),
        "initial_length": _env_int("SNAKE_INITIAL_LENGTH"),
        "tick_delay": _env_float("SNAKE_TICK_DELAY"),
        "seed": _env_int("SNAKE_SEED"),
        "term_width": _env_int("SNAKE_TERM_WIDTH"),
    })
    # "none" is meaningful here, so it bypasses the None filter
    if "SNAKE_DIRECTION" in os.environ:
        values["initial_direction"] = parse_direction(os.environ["SNAKE_DIRECTION"])
    return GameConfig(**values)


def _present(values: dict) -> dict:
    return {key: value for key, value in values.items() if value is not None}


def load_config(**overrides) -> GameConfig:
    """
    Load configuration from the environment (and .env), then apply overrides.

    Overrides set to None are ignored so argparse defaults can be passed
    straight through. Pass initial_direction="none" to start without a
    direction.

    Raises:
        InvalidConfigError: on malformed values
    """
    load_dotenv()
    config = config_from_env()

    known = {f.name for f in fields(GameConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"Unknown config fields: {', '.join(sorted(unknown))}")

    applied = _present(overrides)
    if isinstance(applied.get("initial_direction"), str):
        applied["initial_direction"] = parse_direction(applied["initial_direction"])
    config = replace(config, **applied)
    logger.debug("Loaded config: %s", config)
    return config

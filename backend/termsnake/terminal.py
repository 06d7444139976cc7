"""
Terminal front end: frame rendering and non-blocking keyboard input.

Frames follow the classic layout: a "Length" header, a "Game Over!"
banner once the game ends, then the board centred in a fixed terminal
width with one glyph per cell.
"""

import logging
import os
import select
import sys
from typing import List, Optional, TextIO

from termsnake.domain.constants import DEFAULT_TERM_WIDTH, Direction, GameOverReason
from termsnake.domain.game_state import GameState

try:
    import termios
    import tty
except ImportError:  # Windows: no raw mode, input falls back to line buffering
    termios = None
    tty = None

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[H\033[2J"

KEY_DIRECTIONS = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}

# ANSI arrow key sequences
ARROW_DIRECTIONS = {
    "\033[A": Direction.UP,
    "\033[B": Direction.DOWN,
    "\033[D": Direction.LEFT,
    "\033[C": Direction.RIGHT,
}


def board_padding(cols: int, width: int = DEFAULT_TERM_WIDTH) -> int:
    """Left padding that centres a board of `cols` two-character cells."""
    return max(0, (width - cols * 2) // 2)


def render_frame(state: GameState, width: int = DEFAULT_TERM_WIDTH, stopped: bool = False) -> str:
    """
    Render one frame of the game as text, ending with a blank line.

    `stopped` shows the "Game Over!" banner for a game that was cut short
    while still running.
    """
    pad = " " * board_padding(state.cols, width)
    text_pad = " " * (len(pad) + state.cols // 2 + 5)

    banner = ""
    if state.is_over or stopped:
        banner = "Game Over!"
        if state.game_over_reason is GameOverReason.BOARD_FULL:
            banner = "Game Over! Board full, you win!"

    lines = [f"{text_pad}Length: {state.length}", ""]
    lines.append(f"{text_pad}{banner}" if banner else "")
    lines.append("")
    lines.extend(pad + row for row in state.print_board().split("\n"))
    return "\n".join(lines) + "\n\n"


def clear_screen(out: Optional[TextIO] = None):
    if out is None:
        out = sys.stdout
    out.write(CLEAR_SCREEN)
    out.flush()


def parse_keys(data: str) -> List[Direction]:
    """
    Map a burst of key presses to directions, in the order they were typed.

    Unrecognised keys are dropped. The caller applies each one in turn, so
    up then left while moving right still turns up.
    """
    directions = []
    i = 0
    while i < len(data):
        chunk = data[i:i + 3]
        if chunk in ARROW_DIRECTIONS:
            directions.append(ARROW_DIRECTIONS[chunk])
            i += 3
            continue
        key = data[i].lower()
        if key in KEY_DIRECTIONS:
            directions.append(KEY_DIRECTIONS[key])
        i += 1
    return directions


class KeyboardInput:
    """
    Non-blocking keyboard reader.

    Used as a context manager: on entry a TTY is switched to cbreak mode
    (no line buffering, no echo), and on exit its settings are restored.
    Non-TTY streams such as pipes are read as-is.
    """

    def __init__(self, stream: TextIO = None):
        self.stream = stream or sys.stdin
        self._saved = None

    def fileno(self) -> int:
        return self.stream.fileno()

    def __enter__(self):
        if termios is not None and self.stream.isatty():
            fd = self.fileno()
            self._saved = termios.tcgetattr(fd)
            tty.setcbreak(fd)
            logger.debug("Switched fd %d to cbreak mode", fd)
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._saved is not None:
            termios.tcsetattr(self.fileno(), termios.TCSADRAIN, self._saved)
            self._saved = None
            logger.debug("Restored terminal settings")
        return False

    def read_pending(self) -> str:
        """Return whatever has been typed since the last call, without blocking."""
        fd = self.fileno()
        data = b""
        while True:
            ready, _, _ = select.select([fd], [], [], 0)
            if not ready:
                break
            chunk = os.read(fd, 64)
            if not chunk:
                break
            data += chunk
        return data.decode("utf-8", errors="ignore")

    def read_directions(self) -> List[Direction]:
        return parse_keys(self.read_pending())

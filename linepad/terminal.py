"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from contextlib import contextmanager
from typing import Optional
import logging
import sys
import select

from .constants import EditorConstants
from .location import Position, Size

logger = logging.getLogger(__name__)


def _clamp_coord(value: int) -> int:
    return min(max(int(value), 0), EditorConstants.MAX_TERMINAL_COORD)


class TerminalInterface:
    """Draw primitives and key input for the editor.

    Output is written without flushing; ``flush`` pushes everything queued
    since the last call to the terminal at once.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, stream=None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.stream = stream or sys.stdout
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and put the keyboard into raw mode."""
        self.print(self.term.enter_fullscreen + self.term.clear + self.term.home)
        self.flush()
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                self._curtsies_input = Input(keynames='curtsies')
                self._curtsies_input.__enter__()
            except (ImportError, OSError) as e:
                # No tty (CI, pipes): run without keyboard input
                logger.warning("Keyboard input unavailable: %s", e)
                self._curtsies_input = None

    def cleanup(self):
        """Leave raw mode and fullscreen, restoring the terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except OSError as e:
                logger.error("Could not leave raw mode: %s", e)
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            self.print(self.term.normal_cursor + self.term.exit_fullscreen)
            self.flush()
            self.is_fullscreen = False

    @contextmanager
    def session(self):
        """Hold the terminal for the duration of a ``with`` block.

        The terminal is restored on every way out of the block, including
        exceptions.
        """
        self.setup()
        try:
            yield self
        finally:
            self.cleanup()

    def size(self) -> Size:
        return Size(width=_clamp_coord(self.term.width), height=_clamp_coord(self.term.height))

    def print(self, text: str) -> None:
        print(text, end='', file=self.stream)

    def flush(self) -> None:
        self.stream.flush()

    def move_cursor_to(self, position: Position) -> None:
        self.print(self.term.move_xy(_clamp_coord(position.col), _clamp_coord(position.row)))

    def clear_line(self) -> None:
        self.print(self.term.clear_eol)

    def clear_screen(self) -> None:
        self.print(self.term.clear)

    def hide_cursor(self) -> None:
        self.print(self.term.hide_cursor)

    def show_cursor(self) -> None:
        self.print(self.term.normal_cursor)

    def set_title(self, title: str) -> None:
        # OSC 0 sets the window title in xterm-compatible terminals
        self.print(f"\x1b]0;{title}\x07")

    def print_row(self, row: int, text: str) -> None:
        """Replace the contents of screen row ``row`` with ``text``."""
        self.move_cursor_to(Position(col=0, row=row))
        self.clear_line()
        self.print(text)

    def print_inverted_row(self, row: int, text: str) -> None:
        width = self.size().width
        self.move_cursor_to(Position(col=0, row=row))
        self.clear_line()
        self.print(self.term.reverse(text.ljust(width)[:width]))

    def get_key(self, timeout=None):
        """Get a single key token from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key name such as ``'a'`` or ``'<LEFT>'``, or None.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            ready, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not ready:
                return None
        return str(next(self._curtsies_input))  # type: ignore

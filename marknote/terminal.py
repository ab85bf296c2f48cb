"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
import termios
from typing import Optional

import blessed
from curtsies import Input

from .constants import EditorConstants


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._input: Optional[Input] = None

    def setup(self):
        """Enter fullscreen mode and start reading keys."""
        print(self.term.enter_fullscreen)
        print(self.term.hide_cursor)
        print(self.term.clear)
        self.is_fullscreen = True
        if self._input is None:
            try:
                self._input = Input(keynames='curtsies')
                self._input.__enter__()
            except (termios.error, OSError):
                # No controlling tty: keep drawing, read no keys
                self._input = None

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen)
            print(self.term.normal_cursor)
            self.is_fullscreen = False
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)
            except (termios.error, OSError):
                # Teardown must not mask the reason we are exiting
                pass
            finally:
                self._input = None

    def clear_screen(self):
        """Clear the entire screen."""
        print(self.term.clear)

    def draw_lines(self, lines: list[str], cursor_y: int, cursor_x: int,
                   left_margin: int = 0, view_width: int = EditorConstants.DOCUMENT_WIDTH,
                   status_override: Optional[str] = None):
        """Draw text lines and position cursor with optional left margin.

        Args:
            lines: List of strings to display
            cursor_y: Cursor row position (0-based)
            cursor_x: Cursor column position (0-based)
            left_margin: Number of spaces to indent from left
            view_width: Width of the view area
            status_override: Custom status message to display instead of default
        """
        print(self.term.home + self.term.clear, end='')

        for y, line in enumerate(lines):
            print(self.term.move(y, left_margin) + line[:view_width].ljust(view_width), end='')

        print(self.term.move(self.term.height - 1, 0), end='')
        if status_override:
            print(status_override.ljust(self.term.width), end='')
        else:
            # At rest, show the help hint right-justified
            help_text = EditorConstants.HELP_HINT
            print(' ' * self.term.width, end='')
            print(self.term.move(self.term.height - 1, self.term.width - len(help_text) - 1), end='')
            print(help_text, end='')

        if status_override and (": " in status_override):
            # Cursor sits at the end of prompt input
            cursor_pos = len(status_override)
            print(self.term.move(self.term.height - 1, cursor_pos) + self.term.normal_cursor, end='', flush=True)
        else:
            print(self.term.move(cursor_y, cursor_x + left_margin) + self.term.normal_cursor, end='', flush=True)

    def draw_error_message(self, message1: str, message2: str = ""):
        """Draw an error message in the center of the screen."""
        print(self.term.home + self.term.clear, end='')

        center_y = self.term.height // 2
        box_width = max(len(message1), len(message2)) + 4
        left_margin = max(0, (self.term.width - box_width) // 2)

        print(self.term.move(center_y - 2, left_margin) + "╔" + "═" * (box_width - 2) + "╗", end='')
        print(self.term.move(center_y - 1, left_margin) + "║ " + message1.center(box_width - 4) + " ║", end='')
        if message2:
            print(self.term.move(center_y, left_margin) + "║ " + message2.center(box_width - 4) + " ║", end='')
            print(self.term.move(center_y + 1, left_margin) + "╚" + "═" * (box_width - 2) + "╝", end='')
        else:
            print(self.term.move(center_y, left_margin) + "╚" + "═" * (box_width - 2) + "╝", end='')

        help_text = "Ctrl-Q to quit | Resize terminal to continue"
        help_pos = max(0, (self.term.width - len(help_text)) // 2)
        print(self.term.move(self.term.height - 1, help_pos) + help_text, end='', flush=True)

    def get_key(self, timeout=None) -> Optional[str]:
        """Get a single key token from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key name such as '<UP>' or 'a', or None on timeout.
        """
        if self._input is None:
            return None
        if timeout is not None:
            ready, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not ready:
                return None
        return str(next(self._input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1  # Reserve one line for status

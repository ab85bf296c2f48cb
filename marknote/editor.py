"""Main editor controller for the note editor."""

import errno
import logging
import os
import select
import signal
import sys
import tempfile
import termios
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .model import NoteModel
from .settings_persistence import SettingsPersistence, get_persistence
from .terminal import TerminalInterface
from .undo import ModelSnapshot, UndoManager
from .view import NoteView

logger = logging.getLogger(__name__)

HELP_LINES = [
    "",
    "FILE                         LISTS AND TASKS",
    "  Ctrl-S    Save              Alt-Up     Move item up",
    "  Ctrl-Q    Quit              Alt-Down   Move item down",
    "  Ctrl-W    Word count        Ctrl-T     Toggle checkbox",
    "  F1        Help              Tab        Nest under sibling",
    "                              Shift-Tab  Outdent",
    "",
    "EDITING                      NAVIGATION",
    "  Ctrl-D    Delete char       Ctrl-A     Beginning of line",
    "  Ctrl-K    Kill line         Ctrl-E     End of line",
    "  Ctrl-Z    Undo              PgUp/PgDn  Page up/down",
    "  Ctrl-Y    Redo",
]


def write_atomically(filename: str, content: str):
    """Write content to filename via a temp file and rename.

    Raises:
        OSError: if the note could not be written. The temp file is removed.
    """
    dir_name = os.path.dirname(filename) or '.'
    # Temp file in the same directory so the rename stays on one filesystem
    with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', dir=dir_name,
                                     suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                     delete=False) as temp_file:
        temp_filename = temp_file.name
        try:
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        except OSError:
            temp_file.close()
            _remove_temp_file(temp_filename)
            raise
    try:
        os.replace(temp_filename, filename)
    except OSError:
        _remove_temp_file(temp_filename)
        raise


def _remove_temp_file(temp_filename: str):
    try:
        os.remove(temp_filename)
    except OSError as e:
        logger.warning(f"Could not remove temporary file {temp_filename}: {e}")


def save_error_message(filename: str, error: OSError) -> str:
    if isinstance(error, PermissionError):
        return f"Error: Permission denied saving {filename}"
    if error.errno == errno.ENOSPC:
        return "Error: No space left on device"
    return f"Error: Cannot save to {filename}"


class Editor:
    """Main note editor application controller."""

    def __init__(self, persistence: Optional[SettingsPersistence] = None):
        """Initialize the editor components."""
        self.terminal = TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.view = NoteView()
        self.VIEW_WIDTH = EditorConstants.DOCUMENT_WIDTH
        self.view.num_rows = self.terminal.height
        self.view.num_columns = self.VIEW_WIDTH
        self.model = NoteModel(self.view)
        self.command_registry = CommandRegistry()
        self.undo = UndoManager()
        self.persistence = persistence or get_persistence()
        self.running = False
        self.error_mode = False  # True when terminal is too narrow
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        self._needs_full_render = True
        # File handling
        self.filename: Optional[str] = None
        self.modified = False
        self.status_message: Optional[str] = None
        self.prompt_mode: Optional[str] = None  # None, 'save_filename', 'save_filename_quit' or 'quit_confirm'
        self.prompt_input = ""
        self.help_visible = False

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak():
                old_settings = self._disable_flow_control()
                need_draw = True
                while self.running:
                    if need_draw:
                        self._refresh()
                        need_draw = False

                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])
                    if self._resize_pipe_r in ready:
                        os.read(self._resize_pipe_r, 1024)
                        self._needs_full_render = True
                        need_draw = True
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self._handle_key_event(key_event)
                            need_draw = True

                if old_settings:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
        except KeyboardInterrupt:
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q reach the editor. Returns the old tty settings."""
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, OSError):
            return None

    def _refresh(self):
        """Re-render if needed and draw the current state."""
        self.view.num_rows = self.terminal.height
        if self.terminal.width < EditorConstants.MIN_TERMINAL_WIDTH:
            self.error_mode = True
            self._draw_error()
            return
        self.view.num_columns = min(self.VIEW_WIDTH, self.terminal.width)
        if self.error_mode or self._needs_full_render:
            self.view.render()
            self._needs_full_render = False
        self.error_mode = False
        self._draw()

    def _draw(self):
        """Draw the current editor state to terminal."""
        if self.help_visible:
            self._draw_help()
            return

        left_margin = max(0, (self.terminal.width - self.view.num_columns) // 2)

        status_override = None
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            status_override = f" File to save in: {self.prompt_input}"
        elif self.prompt_mode == 'quit_confirm':
            status_override = " Save file? (y, n) "
        elif self.status_message:
            status_override = f" {self.status_message}"

        self.terminal.draw_lines(
            self.view.lines,
            self.view.visual_cursor_y,
            self.view.visual_cursor_x,
            left_margin=left_margin,
            view_width=self.view.num_columns,
            status_override=status_override,
        )

    def _draw_error(self):
        """Draw error message when terminal is too narrow."""
        self.terminal.draw_error_message(
            EditorConstants.TERMINAL_TOO_NARROW_MESSAGE.format(EditorConstants.MIN_TERMINAL_WIDTH),
            EditorConstants.CURRENT_WIDTH_MESSAGE.format(self.terminal.width)
        )

    def _draw_help(self):
        """Draw the help screen."""
        term = self.terminal.term
        print(term.clear, end='')

        title = "MARKNOTE HELP"
        width = term.width
        print(f"{term.move(1, (width - len(title)) // 2)}{term.bold}{title}{term.normal}", end='')

        content_start_y = max(3, (term.height - len(HELP_LINES)) // 2)
        left_margin = max(0, (width - max(len(line) for line in HELP_LINES)) // 2)
        for i, line in enumerate(HELP_LINES):
            print(f"{term.move(content_start_y + i, left_margin)}{line}", end='')

        print(f"{term.move(term.height - 1, 0)} Press any key to continue", end='')
        print(term.hide_cursor, end='', flush=True)

    def show_help(self):
        """Show the help screen."""
        self.help_visible = True

    def hide_help(self):
        """Hide the help screen and return to editor."""
        self.help_visible = False
        self._needs_full_render = True

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        if self.help_visible:
            self.hide_help()
            return

        # Clear status message on any keypress (except in prompt mode)
        if self.status_message and not self.prompt_mode:
            self.status_message = None

        if self._handle_prompt_mode(key_event):
            return

        if self.error_mode:
            # Only Ctrl-Q works while the terminal is too narrow
            if key_event.key_type == KeyType.CTRL and key_event.value == 'q':
                self.command_registry.execute(self, key_event)
            return

        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            return

        if self.command_registry.execute(self, key_event):
            self.modified = True

    def _handle_prompt_mode(self, key_event: KeyEvent) -> bool:
        """Handle input in prompt mode.

        Returns:
            True if in prompt mode and event was handled
        """
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            self._handle_filename_prompt(key_event)
            return True
        elif self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(key_event)
            return True
        return False

    def _snapshot_state(self) -> ModelSnapshot:
        return ModelSnapshot.of(self.model)

    def _apply_snapshot(self, snapshot: ModelSnapshot):
        snapshot.restore(self.model)

    def load_file(self, filename: str):
        """Load a note into the editor.

        A missing file starts an empty note that will be created on save.
        The cursor returns to where it was when the note was last saved.

        Args:
            filename: Path to file to load
        """
        self.filename = filename
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            self.modified = False
            return
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error loading file: {e}")
            sys.exit(1)
        self.model = NoteModel.from_text(self.view, content)
        settings = self.persistence.load_settings(filename)
        offset = settings.get('cursor_offset')
        if self.persistence.validate_setting('cursor_offset', offset) and offset is not None:
            self.model.cursor_offset = min(offset, len(content))
        self.view.render()
        self.undo.clear()
        self.modified = False

    def save_file(self, filename: str) -> bool:
        """Save the current note to a file atomically.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise
        """
        try:
            write_atomically(filename, self.model.text)
        except OSError as e:
            self.status_message = save_error_message(filename, e)
            return False

        self.filename = filename
        self.modified = False
        self.persistence.save_settings(filename, {'cursor_offset': self.model.cursor_offset})
        return True

    def _handle_save(self):
        """Handle Ctrl-S save command."""
        if self.filename:
            if self.save_file(self.filename):
                self.status_message = f"Saved to {self.filename}"
        else:
            self.prompt_mode = 'save_filename'
            self.prompt_input = ""

    def _handle_filename_prompt(self, key_event):
        """Handle keypress during filename prompt."""
        if (key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):  # ESC or Ctrl-G
            self.prompt_mode = None
            self.prompt_input = ""
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if self.prompt_input:
                if self.save_file(self.prompt_input):
                    self.status_message = f"Saved to {self.prompt_input}"
                    if self.prompt_mode == 'save_filename_quit':
                        self.running = False
                self.prompt_mode = None
                self.prompt_input = ""
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            if ord(char) >= 32:
                self.prompt_input += char

    def _handle_quit_confirm(self, key_event):
        """Handle keypress during quit confirmation."""
        if key_event.key_type == KeyType.REGULAR:
            char = key_event.value.lower()
            if char == 'y':
                if self.filename:
                    # A failed save leaves the error on the status line
                    if self.save_file(self.filename):
                        self.running = False
                    self.prompt_mode = None
                else:
                    self.prompt_mode = 'save_filename_quit'
                    self.prompt_input = ""
            elif char == 'n':
                self.running = False
            else:
                self.prompt_mode = None
        else:
            self.prompt_mode = None

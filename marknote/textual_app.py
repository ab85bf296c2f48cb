"""Textual front end: the same list and task commands on a TextArea."""

import logging
from typing import Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, TextArea

from .editor import save_error_message, write_atomically
from .model import CursorPosition, offset_to_position, position_to_offset
from .reorder import UNHANDLED, MoveResult, move_block_down, move_block_up
from .tasks import delete_empty_task, indent_item, outdent_item, toggle_task

logger = logging.getLogger(__name__)


def run_operation(text_area, operation: Callable[[str, int], MoveResult]) -> MoveResult:
    """Run a note operation against a TextArea at its cursor.

    A successful result replaces the whole text in one edit, so the
    TextArea's own undo treats the move as a single step. With a
    selection active the operation is not attempted.
    """
    if not text_area.selection.is_empty:
        return UNHANDLED
    text = text_area.text
    row, column = text_area.cursor_location
    offset = position_to_offset(text.split('\n'), CursorPosition(row, column))
    result = operation(text, offset)
    if result.changed:
        text_area.replace(result.new_text, (0, 0), text_area.document.end)
        position = offset_to_position(result.new_text.split('\n'), result.new_cursor)
        text_area.cursor_location = (position.line_index, position.column)
    return result


class NoteTextArea(TextArea):
    """TextArea with block moves, checkbox toggling and list indenting."""

    BINDINGS = [
        Binding("alt+up", "move_block_up", "Move up"),
        Binding("alt+down", "move_block_down", "Move down"),
        Binding("ctrl+t", "toggle_task", "Toggle task"),
        Binding("tab", "indent_item", "Indent", show=False, priority=True),
        Binding("shift+tab", "outdent_item", "Outdent", show=False, priority=True),
        Binding("enter", "newline", show=False, priority=True),
        Binding("delete", "delete_forward", show=False, priority=True),
    ]

    def action_move_block_up(self) -> None:
        if not run_operation(self, move_block_up).handled:
            self.action_cursor_up()

    def action_move_block_down(self) -> None:
        if not run_operation(self, move_block_down).handled:
            self.action_cursor_down()

    def action_toggle_task(self) -> None:
        run_operation(self, toggle_task)

    def action_indent_item(self) -> None:
        if not run_operation(self, indent_item).handled:
            self.insert("\t")

    def action_outdent_item(self) -> None:
        run_operation(self, outdent_item)

    def action_newline(self) -> None:
        if not run_operation(self, delete_empty_task).handled:
            self.insert("\n")

    def action_delete_forward(self) -> None:
        if not run_operation(self, delete_empty_task).handled:
            self.action_delete_right()


class MarknoteApp(App):
    """Full-screen note editor built on Textual."""

    CSS = """
    TextArea {
        background: $surface;
        border: none;
        scrollbar-size: 1 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(self, filename=None):
        super().__init__()
        self.filename = filename
        self.text_area = NoteTextArea(show_line_numbers=False)
        self._saved_text = ""
        self._quit_requested = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield self.text_area
        yield Footer()

    def on_mount(self) -> None:
        if self.filename:
            try:
                with open(self.filename, 'r', encoding='utf-8') as f:
                    content = f.read()
            except FileNotFoundError:
                content = ""
            except (OSError, UnicodeDecodeError) as e:
                self.notify(f"Error loading file: {e}", severity="error")
                content = ""
            self.text_area.load_text(content)
            self._saved_text = content
            self.sub_title = f"Editing: {self.filename}"
        self.text_area.focus()

    @property
    def modified(self) -> bool:
        return self.text_area.text != self._saved_text

    def action_save(self) -> None:
        if not self.filename:
            self.notify("No filename set", severity="warning")
            return
        content = self.text_area.text
        try:
            write_atomically(self.filename, content)
        except OSError as e:
            logger.warning(f"Save failed: {e}")
            self.notify(save_error_message(self.filename, e), severity="error")
            return
        self._saved_text = content
        self._quit_requested = False
        self.notify(f"Saved to {self.filename}")

    async def action_quit(self) -> None:
        # A second Ctrl-Q discards unsaved changes
        if self.modified and not self._quit_requested:
            self._quit_requested = True
            self.notify("Unsaved changes. Ctrl-Q again to quit, Ctrl-S to save.", severity="warning")
            return
        self.exit()


def main(filename=None):
    MarknoteApp(filename=filename).run()

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .reorder import MoveResult


@dataclass
class CursorPosition:
    line_index: int = 0
    column: int = 0

    def __lt__(self, other):
        if self.line_index != other.line_index:
            return self.line_index < other.line_index
        return self.column < other.column

    def __ge__(self, other):
        return not self < other


def position_to_offset(lines: list[str], position: CursorPosition) -> int:
    """Flat character offset of a (line, column) position in '\\n'-joined text."""
    offset = sum(len(line) + 1 for line in lines[:position.line_index])
    return offset + position.column


def offset_to_position(lines: list[str], offset: int) -> CursorPosition:
    """Inverse of position_to_offset; offsets past the end clamp to the end."""
    for index, line in enumerate(lines):
        if offset <= len(line):
            return CursorPosition(index, max(0, offset))
        offset -= len(line) + 1
    return CursorPosition(len(lines) - 1, len(lines[-1]))


class TextView(ABC):
    _model: "Optional[NoteModel]" = None

    @property
    def model(self):
        assert self._model
        return self._model

    @abstractmethod
    def render(self):
        """Render the view so that the cursor line is visible."""


class NoteModel:
    """The note buffer: a list of lines and a single cursor."""

    lines: list[str]
    cursor_position: CursorPosition
    view: TextView

    def __init__(self, view: TextView, lines: Optional[list[str]] = None):
        self.view = view
        self.view._model = self
        self.lines = list(lines) if lines else [""]
        self.cursor_position = CursorPosition()
        # Column kept across vertical moves through shorter lines
        self.desired_column = 0

    @classmethod
    def from_text(cls, view: TextView, text: str) -> "NoteModel":
        return cls(view, lines=text.split('\n'))

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)

    @property
    def cursor_offset(self) -> int:
        return position_to_offset(self.lines, self.cursor_position)

    @cursor_offset.setter
    def cursor_offset(self, offset: int):
        self.cursor_position = offset_to_position(self.lines, offset)
        self.desired_column = self.cursor_position.column

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor_position.line_index]

    def replace_text(self, text: str, cursor_offset: int):
        """Install a whole new note text in one step and place the cursor."""
        self.lines = text.split('\n')
        self.cursor_offset = cursor_offset
        self.view.render()

    def apply_result(self, result: MoveResult) -> bool:
        """Install a successful engine result. True if the note changed."""
        if not result.changed:
            return False
        self.replace_text(result.new_text, result.new_cursor)
        return True

    def insert_text(self, text: str):
        pieces = text.split('\n')
        li = self.cursor_position.line_index
        col = self.cursor_position.column
        line = self.lines[li]
        before, after = line[:col], line[col:]
        pieces[0] = before + pieces[0]
        new_column = len(pieces[-1])
        pieces[-1] += after
        self.lines[li:li + 1] = pieces
        self.cursor_position = CursorPosition(li + len(pieces) - 1, new_column)
        self.desired_column = new_column
        self.view.render()

    def backspace(self):
        li = self.cursor_position.line_index
        col = self.cursor_position.column
        if col > 0:
            line = self.lines[li]
            self.lines[li] = line[:col - 1] + line[col:]
            self.cursor_position.column -= 1
        elif li > 0:
            self._join_with_previous_line()
        self.desired_column = self.cursor_position.column
        self.view.render()

    def delete_char(self):
        li = self.cursor_position.line_index
        col = self.cursor_position.column
        line = self.lines[li]
        if col < len(line):
            self.lines[li] = line[:col] + line[col + 1:]
        elif li + 1 < len(self.lines):
            self._join_with_next_line()
        self.view.render()

    def _join_with_previous_line(self):
        li = self.cursor_position.line_index
        previous = self.lines[li - 1]
        self.lines[li - 1] = previous + self.lines[li]
        del self.lines[li]
        self.cursor_position = CursorPosition(li - 1, len(previous))

    def _join_with_next_line(self):
        li = self.cursor_position.line_index
        self.lines[li] += self.lines[li + 1]
        del self.lines[li + 1]

    def kill_line(self):
        """Delete to end of line; at end of line, join with the next one."""
        li = self.cursor_position.line_index
        col = self.cursor_position.column
        line = self.lines[li]
        if col < len(line):
            self.lines[li] = line[:col]
        elif li + 1 < len(self.lines):
            self._join_with_next_line()
        self.view.render()

    def left_char(self):
        if self.cursor_position.column > 0:
            self.cursor_position.column -= 1
        elif self.cursor_position.line_index > 0:
            self.cursor_position.line_index -= 1
            self.cursor_position.column = len(self.current_line)
        self.desired_column = self.cursor_position.column
        self.view.render()

    def right_char(self):
        if self.cursor_position.column < len(self.current_line):
            self.cursor_position.column += 1
        elif self.cursor_position.line_index + 1 < len(self.lines):
            self.cursor_position.line_index += 1
            self.cursor_position.column = 0
        self.desired_column = self.cursor_position.column
        self.view.render()

    def up_line(self):
        if self.cursor_position.line_index > 0:
            self.cursor_position.line_index -= 1
            self.cursor_position.column = min(self.desired_column, len(self.current_line))
        self.view.render()

    def down_line(self):
        if self.cursor_position.line_index + 1 < len(self.lines):
            self.cursor_position.line_index += 1
            self.cursor_position.column = min(self.desired_column, len(self.current_line))
        self.view.render()

    def move_beginning_of_line(self):
        self.cursor_position.column = 0
        self.desired_column = 0
        self.view.render()

    def move_end_of_line(self):
        self.cursor_position.column = len(self.current_line)
        self.desired_column = self.cursor_position.column
        self.view.render()

    def count_words(self) -> int:
        return sum(len(line.split()) for line in self.lines)

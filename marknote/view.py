from .constants import EditorConstants
from .lines import content_column
from .model import TextView


def get_hanging_indent_width(line: str, num_columns: int) -> int:
    """Indent for continuation rows of a wrapped list line.

    Continuation rows line up under the item text, past the bullet and
    checkbox. Lines that are not list items, or whose marker is too wide
    for the view, wrap flush left.
    """
    width = content_column(line)
    if width > min(EditorConstants.MAX_HANGING_INDENT, num_columns // 2):
        return 0
    return width


def wrap_line(line: str, num_columns: int) -> tuple[list[str], list[int]]:
    """Wrap one note line into display rows.

    Returns (rows, starts) where starts[i] is the column in `line` at which
    row i begins. Rows break after a space when one is available and
    mid-word otherwise. Continuation rows carry the hanging indent as
    leading spaces, which are not counted in starts.
    """
    if len(line) <= num_columns:
        return ([line], [0])

    hanging = get_hanging_indent_width(line, num_columns)
    rows: list[str] = []
    starts: list[int] = []
    pos = 0
    while True:
        prefix = " " * hanging if rows else ""
        width = num_columns - len(prefix)
        remaining = line[pos:]
        if len(remaining) <= width:
            rows.append(prefix + remaining)
            starts.append(pos)
            return (rows, starts)
        cut = remaining.rfind(" ", 0, width)
        # A space at column 0 would make an empty row
        cut = cut + 1 if cut > 0 else width
        rows.append(prefix + remaining[:cut])
        starts.append(pos)
        pos += cut


class NoteView(TextView):
    num_rows: int = 24
    num_columns: int = EditorConstants.DOCUMENT_WIDTH
    top_line: int = 0  # Index of the first note line on screen
    visual_cursor_y: int = 0
    visual_cursor_x: int = 0

    def __init__(self):
        self.lines: list[str] = []

    def _cursor_row_in_line(self) -> tuple[int, int]:
        """(row within the cursor's line, x within that row)."""
        position = self.model.cursor_position
        line = self.model.lines[position.line_index]
        _, starts = wrap_line(line, self.num_columns)
        row = 0
        for i, start in enumerate(starts):
            if start <= position.column:
                row = i
        x = position.column - starts[row]
        if row > 0:
            x += get_hanging_indent_width(line, self.num_columns)
        return row, x

    def _rows_between(self, first: int, last: int) -> int:
        return sum(len(wrap_line(self.model.lines[i], self.num_columns)[0])
                   for i in range(first, last))

    def scroll_to_cursor(self):
        """Adjust top_line so the cursor row falls inside the view."""
        cursor_line = self.model.cursor_position.line_index
        if cursor_line < self.top_line:
            self.top_line = cursor_line
        row, _ = self._cursor_row_in_line()
        while (self.top_line < cursor_line
               and self._rows_between(self.top_line, cursor_line) + row >= self.num_rows):
            self.top_line += 1

    def render(self):
        self.top_line = min(self.top_line, len(self.model.lines) - 1)
        self.scroll_to_cursor()
        self.lines = []
        index = self.top_line
        while len(self.lines) < self.num_rows and index < len(self.model.lines):
            rows, _ = wrap_line(self.model.lines[index], self.num_columns)
            self.lines.extend(rows[:self.num_rows - len(self.lines)])
            index += 1
        row, x = self._cursor_row_in_line()
        cursor_line = self.model.cursor_position.line_index
        self.visual_cursor_y = min(self._rows_between(self.top_line, cursor_line) + row,
                                   max(0, self.num_rows - 1))
        self.visual_cursor_x = min(x, self.num_columns)

    def page_down(self):
        """Move the cursor one screen down."""
        model = self.model
        target = min(len(model.lines) - 1, model.cursor_position.line_index + max(1, self.num_rows - 2))
        model.cursor_position.line_index = target
        model.cursor_position.column = min(model.desired_column, len(model.lines[target]))
        self.render()

    def page_up(self):
        """Move the cursor one screen up."""
        model = self.model
        target = max(0, model.cursor_position.line_index - max(1, self.num_rows - 2))
        model.cursor_position.line_index = target
        model.cursor_position.column = min(model.desired_column, len(model.lines[target]))
        self.render()

"""Test wrapping of long list lines with a hanging indent."""

from marknote.model import CursorPosition, NoteModel
from marknote.view import NoteView, get_hanging_indent_width, wrap_line


def create_view(lines, num_columns=20, num_rows=10):
    view = NoteView()
    view.num_columns = num_columns
    view.num_rows = num_rows
    NoteModel(view, lines=lines)
    view.render()
    return view


def test_short_line_is_not_wrapped():
    assert wrap_line("- [ ] short", 20) == (["- [ ] short"], [0])


def test_task_continuation_lines_up_under_text():
    rows, starts = wrap_line("- [ ] one two three four five", 16)
    assert rows[0] == "- [ ] one two "
    assert all(row.startswith(" " * 6) for row in rows[1:])
    assert all(len(row) <= 16 for row in rows)
    assert starts[0] == 0
    assert "".join(row.lstrip() if i else row for i, row in enumerate(rows)).replace(" ", "") == \
        "- [ ] one two three four five".replace(" ", "")


def test_prose_wraps_flush_left():
    rows, _ = wrap_line("alpha beta gamma delta", 12)
    assert rows == ["alpha beta ", "gamma delta"]


def test_long_word_breaks_mid_word():
    rows, starts = wrap_line("abcdefghij", 4)
    assert rows == ["abcd", "efgh", "ij"]
    assert starts == [0, 4, 8]


def test_hanging_indent_width():
    assert get_hanging_indent_width("- [ ] task", 72) == 6
    assert get_hanging_indent_width("  - item", 72) == 4
    assert get_hanging_indent_width("prose", 72) == 0
    # Markers wider than half the view wrap flush left
    assert get_hanging_indent_width("          - [ ] deep", 20) == 0


def test_render_produces_wrapped_rows():
    view = create_view(["- [ ] one two three four five", "next"], num_columns=16)
    assert view.lines[0] == "- [ ] one two "
    assert view.lines[-1] == "next"


def test_cursor_on_continuation_row():
    text = "- [ ] one two three four five"
    view = create_view([text], num_columns=16)
    view.model.cursor_position = CursorPosition(0, text.index("three"))
    view.render()
    assert view.visual_cursor_y == 1
    assert view.visual_cursor_x == 6


def test_scrolls_to_keep_cursor_visible():
    view = create_view([f"line {i}" for i in range(30)], num_rows=5)
    view.model.cursor_position = CursorPosition(12, 0)
    view.render()
    assert view.top_line == 8
    assert view.visual_cursor_y == 4
    view.model.cursor_position = CursorPosition(2, 0)
    view.render()
    assert view.top_line == 2
    assert view.visual_cursor_y == 0


def test_page_down_and_up():
    view = create_view([f"line {i}" for i in range(30)], num_rows=5)
    view.page_down()
    assert view.model.cursor_position.line_index == 3
    view.page_up()
    assert view.model.cursor_position.line_index == 0

"""Checkbox toggling, list indentation and empty task removal.

Same contract as the reorder operations: each function takes the note text
and a cursor offset and returns a MoveResult.
"""

import re

from .constants import EditorConstants
from .document import Document
from .lines import Task, checkbox_span
from .reorder import BLOCKED, UNHANDLED, MoveResult, TextEdit, apply_edits

# A checkbox with nothing after it
EMPTY_TASK_RE = re.compile(r'^\s*[-*]\s+\[[ xX]\]\s*$')


def _edit_result(text: str, edit: TextEdit, cursor: int) -> MoveResult:
    return MoveResult(
        handled=True,
        new_text=apply_edits(text, [edit]),
        new_cursor=cursor,
        edits=(edit,),
    )


def toggle_task(text: str, cursor: int) -> MoveResult:
    """Flip the checkbox of the task under the cursor.

    An unchecked box becomes `[x]`; a checked or padded one (`[X]`,
    `[ x ]`) becomes `[ ]`.
    """
    cursor = max(0, min(cursor, len(text)))
    doc = Document(text)
    line = doc.line_at(cursor)
    if not isinstance(line.kind, Task):
        return UNHANDLED
    box_start, box_end = checkbox_span(line.text)
    box = '[ ]' if line.kind.checked else '[x]'
    start = line.start + box_start
    end = line.start + box_end
    if cursor >= end:
        cursor += len(box) - (end - start)
    elif cursor > start:
        cursor = min(cursor, start + len(box))
    return _edit_result(text, TextEdit(start, end, box), cursor)


def indent_item(text: str, cursor: int, unit: str = EditorConstants.INDENT_UNIT) -> MoveResult:
    """Nest the list item under the cursor one level deeper.

    Only an item whose previous line is a sibling at the same indentation
    can be nested. A top-level item without such a sibling is left to the
    caller's default; any other item is blocked.
    """
    cursor = max(0, min(cursor, len(text)))
    doc = Document(text)
    line = doc.line_at(cursor)
    if not line.is_list:
        return UNHANDLED
    if line.number > 1:
        above = doc.line(line.number - 1)
        if above.is_list:
            if above.indent == line.indent:
                edit = TextEdit(line.start, line.start, unit)
                return _edit_result(text, edit, cursor + len(unit))
            if line.indent > above.indent:
                return BLOCKED
    if line.indent == 0:
        return UNHANDLED
    return BLOCKED


def outdent_item(text: str, cursor: int, unit: str = EditorConstants.INDENT_UNIT) -> MoveResult:
    """Remove one indent unit from the start of the line under the cursor."""
    cursor = max(0, min(cursor, len(text)))
    doc = Document(text)
    line = doc.line_at(cursor)
    if not line.text.startswith(unit):
        return UNHANDLED
    edit = TextEdit(line.start, line.start + len(unit), '')
    return _edit_result(text, edit, max(line.start, cursor - len(unit)))


def delete_empty_task(text: str, cursor: int) -> MoveResult:
    """Remove a task line that has a checkbox and nothing else.

    Applies only with the cursor at the end of a line like `- [ ]` or
    `  * [x]  `. The line goes together with its line break, so the
    following line keeps its own indentation; the last line keeps the
    break before it. The cursor lands where the line started.
    """
    cursor = max(0, min(cursor, len(text)))
    doc = Document(text)
    line = doc.line_at(cursor)
    if cursor != line.end or not EMPTY_TASK_RE.match(line.text):
        return UNHANDLED
    end = line.end + 1 if line.number < len(doc.lines) else line.end
    return _edit_result(text, TextEdit(line.start, end, ''), line.start)

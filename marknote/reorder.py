"""Move a list or task item, with its nested children, up or down.

The two public operations, move_block_up() and move_block_down(), take the
full note text and a cursor offset and return a MoveResult. They never
raise for routine input:

- handled=False: the cursor is not on a list line; the caller should fall
  back to its default behavior (plain cursor movement).
- handled=True, new_text=None: the move is blocked (document boundary,
  blank line, heading, parent scope or section boundary); the caller
  should swallow the key and leave the note alone.
- handled=True with new_text: the block was swapped with its neighbor.

Rules:
1. Items never move across blank lines.
2. Items never move across headings.
3. A parent moves together with all of its children.
4. A child stays inside its parent's block and only swaps with siblings
   at exactly its own indentation.
5. A top-level item swaps with the nearest item at the same or a lower
   indentation, whatever that item's children look like.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .document import Block, Document

logger = logging.getLogger(__name__)


class Direction(Enum):
    UP = -1
    DOWN = 1


@dataclass(frozen=True)
class TextEdit:
    """Replace text[start:end] with insert."""
    start: int
    end: int
    insert: str


@dataclass(frozen=True)
class MoveResult:
    handled: bool
    new_text: Optional[str] = None
    new_cursor: Optional[int] = None
    edits: tuple[TextEdit, ...] = field(default=())

    @property
    def changed(self) -> bool:
        return self.new_text is not None


UNHANDLED = MoveResult(handled=False)
BLOCKED = MoveResult(handled=True)


def apply_edits(text: str, edits: list[TextEdit]) -> str:
    """Apply non-overlapping edits, all expressed against the original text."""
    out = []
    pos = 0
    for edit in sorted(edits, key=lambda e: e.start):
        if edit.start < pos:
            raise ValueError(f"Overlapping edit at {edit.start}")
        out.append(text[pos:edit.start])
        out.append(edit.insert)
        pos = edit.end
    out.append(text[pos:])
    return ''.join(out)


def find_target(doc: Document, from_line: int, indent: int, parent: Optional[int],
                direction: Direction, limit: int) -> Optional[int]:
    """Scan from `from_line` toward `limit` (inclusive) for a swap partner.

    Blank lines and headings end the scan without a target. Lines that are
    not list items are skipped. A nested item (one with a parent) only
    matches a sibling at exactly its indentation and gives up as soon as it
    meets a shallower line; a top-level item takes the first line at the
    same or a lower indentation.
    """
    step = direction.value
    number = from_line
    while (number - limit) * step <= 0:
        line = doc.line(number)
        if line.is_blank or line.is_heading:
            return None
        if line.is_list:
            if parent is not None:
                if line.indent == indent:
                    return number
                if line.indent < indent:
                    return None
            elif line.indent <= indent:
                return number
        number += step
    return None


def swap_blocks(doc: Document, current: Block, target: Block, cursor: int) -> MoveResult:
    """Exchange two blocks in one edit and carry the cursor along.

    The cursor keeps its offset relative to the start of its own block. When
    the target lies below, the moved block lands at the target's start
    shifted by the size difference of the two blocks.
    """
    current_text = doc.block_text(current)
    target_text = doc.block_text(target)
    edits = tuple(sorted(
        (TextEdit(current.start, current.end, target_text),
         TextEdit(target.start, target.end, current_text)),
        key=lambda e: e.start,
    ))
    if target.start < current.start:
        new_block_start = target.start
    else:
        new_block_start = target.start + (target.length - current.length)
    return MoveResult(
        handled=True,
        new_text=apply_edits(doc.text, list(edits)),
        new_cursor=new_block_start + (cursor - current.start),
        edits=edits,
    )


def _clamp(text: str, cursor: int) -> int:
    return max(0, min(cursor, len(text)))


def can_move_up(doc: Document, number: int) -> Optional[int]:
    """Target line for moving the item at `number` up, or None if blocked."""
    if number == 1:
        return None
    above = doc.line(number - 1)
    if above.is_blank or above.is_heading:
        return None
    line = doc.line(number)
    target = find_target(doc, number - 1, line.indent, doc.find_parent(number),
                         Direction.UP, 1)
    if target is None or target not in doc.section_of(number):
        return None
    return target


def can_move_down(doc: Document, block: Block) -> Optional[int]:
    """Target line for moving `block` down, or None if blocked."""
    if block.end_line >= doc.line_count:
        return None
    below = doc.line(block.end_line + 1)
    if below.is_blank or below.is_heading:
        return None
    line = doc.line(block.start_line)
    parent = doc.find_parent(block.start_line)
    limit = doc.line_count
    if parent is not None:
        limit = doc.extract_block(parent).end_line
    target = find_target(doc, block.end_line + 1, line.indent, parent,
                         Direction.DOWN, limit)
    if target is None or target not in doc.section_of(block.start_line):
        return None
    return target


def move_block_up(text: str, cursor: int) -> MoveResult:
    """Swap the item under the cursor, children included, with the one above."""
    cursor = _clamp(text, cursor)
    doc = Document(text)
    line = doc.line_at(cursor)
    if not line.is_list:
        return UNHANDLED
    target = can_move_up(doc, line.number)
    if target is None:
        logger.debug("move up blocked at line %d", line.number)
        return BLOCKED
    current = doc.extract_block(line.number)
    return swap_blocks(doc, current, doc.extract_block(target), cursor)


def move_block_down(text: str, cursor: int) -> MoveResult:
    """Swap the item under the cursor, children included, with the one below."""
    cursor = _clamp(text, cursor)
    doc = Document(text)
    line = doc.line_at(cursor)
    if not line.is_list:
        return UNHANDLED
    current = doc.extract_block(line.number)
    target = can_move_down(doc, current)
    if target is None:
        logger.debug("move down blocked at line %d", line.number)
        return BLOCKED
    return swap_blocks(doc, current, doc.extract_block(target), cursor)


def move_block(text: str, cursor: int, direction: Direction) -> MoveResult:
    if direction is Direction.UP:
        return move_block_up(text, cursor)
    return move_block_down(text, cursor)

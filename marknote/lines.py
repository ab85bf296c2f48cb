"""Line classification for markdown notes.

Every line of a note is one of a small set of kinds, decided by its prefix
alone: a task (`- [ ] ...`), a regular list item (`- ...`), an empty list
item (`- `), a heading (`## ...`), a blank line, or anything else.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union


# `- [ ]`, `* [x]`, `- [ X ]`; anything may follow the closing bracket
TASK_RE = re.compile(r'^([ \t]*)([-*]) (\[ *([xX ]) *\])')
EMPTY_LIST_RE = re.compile(r'^([ \t]*)([-*+])[ \t]+$')
LIST_RE = re.compile(r'^([ \t]*)([-*+]) +')
HEADING_RE = re.compile(r'^(#{1,6})[ \t]+\S')
INDENT_RE = re.compile(r'^[ \t]*')


@dataclass(frozen=True)
class Task:
    bullet: str
    checked: bool


@dataclass(frozen=True)
class RegularListItem:
    bullet: str


@dataclass(frozen=True)
class EmptyListItem:
    bullet: str


@dataclass(frozen=True)
class Heading:
    level: int


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Other:
    pass


LineKind = Union[Task, RegularListItem, EmptyListItem, Heading, Blank, Other]

LIST_KINDS = (Task, RegularListItem, EmptyListItem)


def is_blank(text: str) -> bool:
    """True if the line holds only whitespace.

    str.strip() also removes full-width spaces (U+3000), so a line that is
    visually empty but not byte-wise empty counts as blank.
    """
    return not text.strip()


def indent_width(text: str) -> int:
    """Number of leading space and tab characters."""
    return INDENT_RE.match(text).end()


def classify(text: str) -> LineKind:
    """Classify a single line of text.

    Total: every string maps to exactly one kind, and malformed markers
    degrade to a regular list item or Other instead of raising.
    """
    if is_blank(text):
        return Blank()
    m = HEADING_RE.match(text)
    if m:
        return Heading(level=len(m.group(1)))
    m = TASK_RE.match(text)
    if m:
        return Task(bullet=m.group(2), checked=m.group(4) in 'xX')
    m = EMPTY_LIST_RE.match(text)
    if m:
        return EmptyListItem(bullet=m.group(2))
    m = LIST_RE.match(text)
    if m:
        return RegularListItem(bullet=m.group(2))
    return Other()


def is_list_kind(kind: LineKind) -> bool:
    return isinstance(kind, LIST_KINDS)


def is_list_line(text: str) -> bool:
    return is_list_kind(classify(text))


def is_heading_line(text: str) -> bool:
    return isinstance(classify(text), Heading)


def checkbox_span(text: str) -> Optional[tuple[int, int]]:
    """Column range of the `[ ]` box of a task line, end exclusive."""
    m = TASK_RE.match(text)
    if not m:
        return None
    return m.start(3), m.end(3)


def content_column(text: str) -> int:
    """Column where the item text starts after indent, bullet and checkbox.

    Used for the hanging indent of wrapped list lines; 0 for lines that
    are not list items.
    """
    m = TASK_RE.match(text)
    if m:
        end = m.end()
        # One separating space after the box belongs to the marker
        if end < len(text) and text[end] == ' ':
            end += 1
        return end
    m = LIST_RE.match(text)
    if m:
        return m.end()
    return 0

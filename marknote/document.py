"""Line-indexed snapshot of a note with its implicit list hierarchy.

A Document is built once per request from the full note text. Lines are
1-indexed. Parent/child relations, sections and blocks are derived from
indentation and line prefixes only; nothing is kept between requests.
"""

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Optional

from .lines import Blank, Heading, LineKind, classify, indent_width, is_list_kind


@dataclass(frozen=True)
class Line:
    number: int
    text: str
    start: int  # offset of the first character
    end: int    # offset just past the last character, newline excluded
    kind: LineKind
    indent: int

    @property
    def is_list(self) -> bool:
        return is_list_kind(self.kind)

    @property
    def is_blank(self) -> bool:
        return isinstance(self.kind, Blank)

    @property
    def is_heading(self) -> bool:
        return isinstance(self.kind, Heading)


@dataclass(frozen=True)
class Block:
    """A list line plus its contiguous, more deeply indented descendants."""
    start_line: int
    end_line: int
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Section:
    """Lines between two headings, or a heading and a document boundary."""
    start_line: int
    end_line: int

    def __contains__(self, number: int) -> bool:
        return self.start_line <= number <= self.end_line


class Document:
    """Immutable view of note text as numbered, classified lines."""

    def __init__(self, text: str):
        self.text = text
        self.lines: list[Line] = []
        offset = 0
        for number, line_text in enumerate(text.split('\n'), start=1):
            end = offset + len(line_text)
            self.lines.append(Line(
                number=number,
                text=line_text,
                start=offset,
                end=end,
                kind=classify(line_text),
                indent=indent_width(line_text),
            ))
            offset = end + 1
        self._starts = [line.start for line in self.lines]
        self._headings = [line.number for line in self.lines if line.is_heading]
        self._parents = self._build_parents()

    def _build_parents(self) -> list[Optional[int]]:
        """Parent line number for every line, indexed by line number.

        One pass with a stack of strictly increasing indents. Blank lines
        and headings reset the stack: nesting never spans either of them.
        Lines that are not list items are transparent.
        """
        parents: list[Optional[int]] = [None] * (len(self.lines) + 1)
        stack: list[tuple[int, int]] = []
        for line in self.lines:
            if line.is_blank or line.is_heading:
                stack.clear()
                continue
            if not line.is_list:
                continue
            while stack and stack[-1][0] >= line.indent:
                stack.pop()
            if line.indent > 0 and stack:
                parents[line.number] = stack[-1][1]
            stack.append((line.indent, line.number))
        return parents

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> Line:
        if not 1 <= number <= len(self.lines):
            raise ValueError(f"Line {number} out of range 1..{len(self.lines)}")
        return self.lines[number - 1]

    def line_at(self, offset: int) -> Line:
        """Line containing a character offset.

        An offset sitting on a newline belongs to the line the newline ends.
        """
        if not 0 <= offset <= len(self.text):
            raise ValueError(f"Offset {offset} out of range 0..{len(self.text)}")
        return self.lines[bisect_right(self._starts, offset) - 1]

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]

    def find_parent(self, number: int) -> Optional[int]:
        """Nearest enclosing list line above, or None for top-level items."""
        return self._parents[self.line(number).number]

    def section_of(self, number: int) -> Section:
        """Span between the nearest heading above and below `number`.

        Heading levels are ignored: any heading closes the current section.
        """
        self.line(number)
        above = bisect_left(self._headings, number)
        below = bisect_right(self._headings, number)
        start = self._headings[above - 1] + 1 if above > 0 else 1
        end = self._headings[below] - 1 if below < len(self._headings) else len(self.lines)
        return Section(start_line=start, end_line=end)

    def extract_block(self, number: int) -> Optional[Block]:
        root = self.line(number)
        if not root.is_list:
            return None
        end_line = number
        for line in self.lines[number:]:
            if not line.is_list or line.indent <= root.indent:
                break
            end_line = line.number
        return Block(
            start_line=number,
            end_line=end_line,
            start=root.start,
            end=self.line(end_line).end,
        )

    def block_text(self, block: Block) -> str:
        return self.text[block.start:block.end]

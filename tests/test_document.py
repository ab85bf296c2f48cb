"""Test the line-indexed document and its implicit hierarchy."""

import pytest
from marknote.document import Block, Document, Section


NESTED = (
    "# Tasks\n"             # 1
    "- [ ] Parent A\n"      # 2
    "  - [ ] Child A1\n"    # 3
    "    - [ ] Grand\n"     # 4
    "  - [ ] Child A2\n"    # 5
    "- [ ] Parent B\n"      # 6
    "\n"                    # 7
    "  - [ ] Orphan\n"      # 8
    "## More\n"             # 9
    "  - [ ] After heading" # 10
)


def test_lines_are_one_indexed_with_offsets():
    doc = Document("ab\ncd\n\nef")
    assert doc.line_count == 4
    first = doc.line(1)
    assert (first.number, first.text, first.start, first.end) == (1, "ab", 0, 2)
    third = doc.line(3)
    assert (third.start, third.end) == (6, 6)
    assert doc.line(4).start == 7


def test_text_round_trips():
    text = "- a\n\n  - b\n"
    doc = Document(text)
    assert '\n'.join(line.text for line in doc.lines) == text
    assert doc.line_count == 4


def test_line_out_of_range():
    doc = Document("one")
    with pytest.raises(ValueError):
        doc.line(0)
    with pytest.raises(ValueError):
        doc.line(2)


def test_line_at_offsets():
    doc = Document("ab\ncd")
    assert doc.line_at(0).number == 1
    # The newline belongs to the line it ends
    assert doc.line_at(2).number == 1
    assert doc.line_at(3).number == 2
    assert doc.line_at(5).number == 2
    with pytest.raises(ValueError):
        doc.line_at(6)


def test_line_at_empty_document():
    doc = Document("")
    assert doc.line_count == 1
    assert doc.line_at(0).is_blank


def test_find_parent():
    doc = Document(NESTED)
    assert doc.find_parent(2) is None
    assert doc.find_parent(3) == 2
    assert doc.find_parent(4) == 3
    assert doc.find_parent(5) == 2
    assert doc.find_parent(6) is None


def test_blank_line_and_heading_cut_parentage():
    doc = Document(NESTED)
    assert doc.find_parent(8) is None
    assert doc.find_parent(10) is None


def test_prose_is_transparent_to_parentage():
    doc = Document("- a\nprose\n  - b")
    assert doc.find_parent(3) == 1


def test_shallower_line_ends_parentage():
    doc = Document("- a\n    - b\n  - c")
    assert doc.find_parent(2) == 1
    assert doc.find_parent(3) == 1


def test_section_of():
    doc = Document(NESTED)
    assert doc.section_of(3) == Section(start_line=2, end_line=8)
    assert doc.section_of(10) == Section(start_line=10, end_line=10)
    assert 5 in doc.section_of(3)
    assert 9 not in doc.section_of(3)


def test_section_without_headings_is_whole_document():
    doc = Document("- a\n- b\n- c")
    assert doc.section_of(2) == Section(start_line=1, end_line=3)


def test_extract_block_includes_descendants():
    doc = Document(NESTED)
    block = doc.extract_block(2)
    assert block == Block(start_line=2, end_line=5, start=8, end=doc.line(5).end)
    assert doc.block_text(block) == "- [ ] Parent A\n  - [ ] Child A1\n    - [ ] Grand\n  - [ ] Child A2"


def test_extract_block_single_line():
    doc = Document(NESTED)
    block = doc.extract_block(5)
    assert (block.start_line, block.end_line) == (5, 5)
    assert block.length == len("  - [ ] Child A2")


def test_extract_block_stops_at_prose():
    doc = Document("- a\n  - b\nprose\n  - c")
    assert doc.extract_block(1).end_line == 2


def test_extract_block_on_non_list_line():
    doc = Document(NESTED)
    assert doc.extract_block(1) is None
    assert doc.extract_block(7) is None

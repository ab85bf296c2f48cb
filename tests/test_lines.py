"""Test line classification."""

import pytest
from marknote.lines import (
    Blank, EmptyListItem, Heading, Other, RegularListItem, Task,
    checkbox_span, classify, content_column, indent_width, is_blank,
    is_heading_line, is_list_line,
)


@pytest.mark.parametrize("text,expected", [
    ("- [ ] todo", Task(bullet='-', checked=False)),
    ("* [x] done", Task(bullet='*', checked=True)),
    ("- [X] done", Task(bullet='-', checked=True)),
    ("  - [ x ] padded", Task(bullet='-', checked=True)),
    ("\t- [ ]", Task(bullet='-', checked=False)),
    ("- [ ]no space after box", Task(bullet='-', checked=False)),
])
def test_task_lines(text, expected):
    assert classify(text) == expected


def test_plus_bullet_is_never_a_task():
    assert classify("+ [ ] not a task") == RegularListItem(bullet='+')


def test_task_needs_single_space_after_bullet():
    assert classify("-  [ ] two spaces") == RegularListItem(bullet='-')


def test_malformed_checkbox_degrades_to_list_item():
    assert classify("- [y] maybe") == RegularListItem(bullet='-')
    assert classify("- [] empty") == RegularListItem(bullet='-')


@pytest.mark.parametrize("text,bullet", [
    ("- item", '-'),
    ("* item", '*'),
    ("+ item", '+'),
    ("    -   deep", '-'),
])
def test_regular_list_items(text, bullet):
    assert classify(text) == RegularListItem(bullet=bullet)


@pytest.mark.parametrize("text", ["- ", "  * \t", "+   "])
def test_empty_list_items(text):
    assert isinstance(classify(text), EmptyListItem)


def test_bare_bullet_without_space_is_other():
    assert classify("-") == Other()
    assert classify("-item") == Other()


@pytest.mark.parametrize("text,level", [
    ("# Title", 1),
    ("## Sub", 2),
    ("###### Six", 6),
    ("#\tTabbed", 1),
])
def test_headings(text, level):
    assert classify(text) == Heading(level=level)


def test_heading_edge_cases():
    assert classify("####### seven") == Other()
    assert classify("#nospace") == Other()
    assert classify("#   ") == Other()
    # Indented hashes are not headings
    assert classify(" # indented") == Other()


@pytest.mark.parametrize("text", ["", "   ", "\t", "　　", " 　 "])
def test_blank_lines(text):
    assert classify(text) == Blank()
    assert is_blank(text)


def test_other_lines():
    assert classify("Just prose") == Other()
    assert classify("1. numbered") == Other()


def test_indent_width():
    assert indent_width("- a") == 0
    assert indent_width("  - a") == 2
    assert indent_width("\t\t- a") == 2
    assert indent_width(" \t x") == 3
    # Full-width space is not indentation
    assert indent_width("　- a") == 0


def test_predicates():
    assert is_list_line("- [ ] a")
    assert is_list_line("- ")
    assert is_list_line("+ a")
    assert not is_list_line("# a")
    assert not is_list_line("prose")
    assert is_heading_line("## a")
    assert not is_heading_line("- a")


def test_checkbox_span():
    assert checkbox_span("- [ ] a") == (2, 5)
    assert checkbox_span("  * [ x ] a") == (4, 9)
    assert checkbox_span("- a") is None


def test_content_column():
    assert content_column("- [ ] task text") == 6
    assert content_column("  - [x] task") == 8
    assert content_column("- [ ]") == 5
    assert content_column("- item") == 2
    assert content_column("*   spaced") == 4
    assert content_column("prose") == 0

"""Test keyboard input handling."""

import pytest
from marknote.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("token", ['<Esc+UP>', '<M-UP>', '<Meta-UP>', '\x1b[1;3A', '\x1b\x1b[A'])
def test_alt_up_variants(handler, token):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.ALT
    assert event.value == 'up'
    assert event.is_alt


@pytest.mark.parametrize("token", ['<Esc+DOWN>', '\x1b[1;3B', '\x1b\x1b[B'])
def test_alt_down_variants(handler, token):
    event = handler.parse_key(token)
    assert (event.key_type, event.value) == (KeyType.ALT, 'down')


def test_plain_arrows(handler):
    assert handler.parse_key('<UP>') == KeyEvent(KeyType.SPECIAL, 'up', '<UP>', is_sequence=True)
    assert handler.parse_key('<LEFT>').value == 'left'


def test_page_keys(handler):
    assert handler.parse_key('<PAGEUP>').value == 'page_up'
    assert handler.parse_key('<PAGEDOWN>').value == 'page_down'


def test_ctrl_letters(handler):
    event = handler.parse_key('<Ctrl-t>')
    assert (event.key_type, event.value, event.is_ctrl) == (KeyType.CTRL, 't', True)
    assert handler.parse_key('\x14').value == 't'
    assert handler.parse_key('\x13').value == 's'


def test_ctrl_j_and_m_are_enter(handler):
    assert handler.parse_key('<Ctrl-j>').value == 'enter'
    assert handler.parse_key('\r').value == 'enter'


def test_tab_and_shift_tab(handler):
    assert handler.parse_key('<TAB>') == KeyEvent(KeyType.REGULAR, '\t', '\t')
    assert handler.parse_key('\t').key_type == KeyType.REGULAR
    for token in ('<Shift-TAB>', '<BTAB>'):
        event = handler.parse_key(token)
        assert (event.key_type, event.value) == (KeyType.SHIFT_SPECIAL, 'tab')


def test_backspace_and_escape(handler):
    assert handler.parse_key('\x7f').value == 'backspace'
    assert handler.parse_key('<BACKSPACE>').value == 'backspace'
    assert handler.parse_key('\x1b').value == 'escape'
    assert handler.parse_key('<ESC>').value == 'escape'


def test_space_and_regular_characters(handler):
    assert handler.parse_key('<SPACE>').value == ' '
    event = handler.parse_key('x')
    assert (event.key_type, event.value) == (KeyType.REGULAR, 'x')
    assert handler.parse_key('é').value == 'é'


def test_f1(handler):
    assert handler.parse_key('<F1>') == KeyEvent(KeyType.SPECIAL, 'f1', '<F1>', is_sequence=True)


def test_get_key_event_reads_from_terminal():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    terminal.add_key('<Esc+UP>')
    event = handler.get_key_event()
    assert event.value == 'up'
    assert handler.get_key_event() is None

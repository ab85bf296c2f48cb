"""Test loading and atomic saving of notes."""

import errno
import os
import tempfile
from unittest.mock import Mock, patch

import pytest
from marknote.editor import Editor, save_error_message, write_atomically
from marknote.keyboard import KeyEvent, KeyType


@pytest.fixture
def note_dir():
    with tempfile.TemporaryDirectory() as d:
        yield d


def create_editor(settings=None):
    persistence = Mock()
    persistence.load_settings.return_value = settings or {}
    persistence.validate_setting.return_value = True
    return Editor(persistence=persistence)


def test_load_and_save_round_trip(note_dir):
    path = os.path.join(note_dir, "todo.md")
    text = "# Today\n- [ ] a\n  - [x] b\n"
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)

    editor = create_editor()
    editor.load_file(path)
    assert editor.model.text == text
    assert not editor.modified

    editor.model.cursor_offset = len("# Today\n")
    editor.model.insert_text("- [ ] new\n")
    assert editor.save_file(path)
    with open(path, encoding='utf-8') as f:
        assert f.read() == "# Today\n- [ ] new\n- [ ] a\n  - [x] b\n"
    assert not editor.modified


def test_load_restores_saved_cursor(note_dir):
    path = os.path.join(note_dir, "todo.md")
    with open(path, 'w', encoding='utf-8') as f:
        f.write("- a\n- b")
    editor = create_editor({'cursor_offset': 5})
    editor.load_file(path)
    assert editor.model.cursor_offset == 5
    editor.persistence.load_settings.assert_called_once_with(path)


def test_saved_cursor_past_end_is_clamped(note_dir):
    path = os.path.join(note_dir, "todo.md")
    with open(path, 'w', encoding='utf-8') as f:
        f.write("- a")
    editor = create_editor({'cursor_offset': 500})
    editor.load_file(path)
    assert editor.model.cursor_offset == 3


def test_invalid_saved_cursor_is_ignored(note_dir):
    path = os.path.join(note_dir, "todo.md")
    with open(path, 'w', encoding='utf-8') as f:
        f.write("- a")
    editor = create_editor({'cursor_offset': "oops"})
    editor.persistence.validate_setting.return_value = False
    editor.load_file(path)
    assert editor.model.cursor_offset == 0


def test_save_records_cursor(note_dir):
    path = os.path.join(note_dir, "todo.md")
    editor = create_editor()
    editor.model.replace_text("- a\n- b", 6)
    assert editor.save_file(path)
    editor.persistence.save_settings.assert_called_once_with(path, {'cursor_offset': 6})
    assert editor.filename == path


def test_load_missing_file_starts_empty_note(note_dir):
    path = os.path.join(note_dir, "new.md")
    editor = create_editor()
    editor.load_file(path)
    assert editor.filename == path
    assert editor.model.text == ""
    assert not os.path.exists(path)


def test_no_temp_files_left_behind(note_dir):
    path = os.path.join(note_dir, "todo.md")
    write_atomically(path, "- a\n")
    write_atomically(path, "- b\n")
    assert os.listdir(note_dir) == ["todo.md"]
    with open(path, encoding='utf-8') as f:
        assert f.read() == "- b\n"


def test_failed_save_keeps_original(note_dir):
    path = os.path.join(note_dir, "todo.md")
    with open(path, 'w', encoding='utf-8') as f:
        f.write("original")
    editor = create_editor()
    editor.model.replace_text("changed", 0)
    editor.modified = True
    with patch('marknote.editor.os.replace', side_effect=PermissionError(errno.EACCES, "denied")):
        assert not editor.save_file(path)
    assert "Permission denied" in editor.status_message
    assert editor.modified
    with open(path, encoding='utf-8') as f:
        assert f.read() == "original"
    assert os.listdir(note_dir) == ["todo.md"]
    editor.persistence.save_settings.assert_not_called()


def test_save_error_messages():
    assert save_error_message("n.md", OSError(errno.ENOSPC, "full")) == "Error: No space left on device"
    assert save_error_message("n.md", OSError(errno.EIO, "io")) == "Error: Cannot save to n.md"
    assert "Permission denied" in save_error_message("n.md", PermissionError(errno.EACCES, "no"))


def test_ctrl_s_without_filename_prompts(note_dir):
    path = os.path.join(note_dir, "typed.md")
    editor = create_editor()
    editor.model.replace_text("- a", 0)
    editor._handle_key_event(KeyEvent(KeyType.CTRL, 's', '<Ctrl-s>', is_ctrl=True))
    assert editor.prompt_mode == 'save_filename'
    for ch in path:
        editor._handle_key_event(KeyEvent(KeyType.REGULAR, ch, ch))
    editor._handle_key_event(KeyEvent(KeyType.SPECIAL, 'enter', '\r'))
    assert editor.prompt_mode is None
    assert editor.status_message == f"Saved to {path}"
    with open(path, encoding='utf-8') as f:
        assert f.read() == "- a"


def test_ctrl_s_with_filename_saves(note_dir):
    path = os.path.join(note_dir, "todo.md")
    editor = create_editor()
    editor.filename = path
    editor._handle_key_event(KeyEvent(KeyType.CTRL, 's', '<Ctrl-s>', is_ctrl=True))
    assert os.path.exists(path)
    assert editor.status_message == f"Saved to {path}"


def test_quit_confirm_yes_saves_and_exits(note_dir):
    path = os.path.join(note_dir, "todo.md")
    editor = create_editor()
    editor.filename = path
    editor.running = True
    editor.modified = True
    editor.prompt_mode = 'quit_confirm'
    editor._handle_key_event(KeyEvent(KeyType.REGULAR, 'y', 'y'))
    assert not editor.running
    assert os.path.exists(path)


def test_quit_confirm_yes_stays_open_when_save_fails(note_dir):
    # A regular file where a directory is expected cannot hold the note
    blocker = os.path.join(note_dir, "blocker")
    with open(blocker, 'w', encoding='utf-8') as f:
        f.write("not a directory")
    path = os.path.join(blocker, "todo.md")
    editor = create_editor()
    editor.filename = path
    editor.model.replace_text("- [ ] unsaved", 0)
    editor.running = True
    editor.modified = True
    editor.prompt_mode = 'quit_confirm'
    editor._handle_key_event(KeyEvent(KeyType.REGULAR, 'y', 'y'))
    assert editor.running
    assert editor.modified
    assert editor.prompt_mode is None
    assert editor.status_message == f"Error: Cannot save to {path}"
    assert editor.model.text == "- [ ] unsaved"

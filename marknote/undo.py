from dataclasses import dataclass

from .constants import EditorConstants


@dataclass(frozen=True)
class ModelSnapshot:
    """Note text and cursor, in the flat form the text operations use."""
    text: str
    cursor_offset: int = 0

    @classmethod
    def of(cls, model) -> 'ModelSnapshot':
        return cls(text=model.text, cursor_offset=model.cursor_offset)

    def restore(self, model):
        model.replace_text(self.text, self.cursor_offset)


@dataclass(frozen=True)
class UndoEntry:
    before: ModelSnapshot
    after: ModelSnapshot

    @property
    def changes_text(self) -> bool:
        return self.before.text != self.after.text


class UndoManager:
    def __init__(self, max_entries: int = EditorConstants.MAX_UNDO_ENTRIES):
        self._undo_stack: list[UndoEntry] = []
        self._redo_stack: list[UndoEntry] = []
        self._max_entries = max_entries

    def clear(self):
        self._undo_stack.clear()
        self._redo_stack.clear()

    def push(self, entry: UndoEntry):
        # Only text changes are history; cursor-only edits leave redo intact
        if not entry.changes_text:
            return
        self._undo_stack.append(entry)
        if len(self._undo_stack) > self._max_entries:
            self._undo_stack.pop(0)
        self._redo_stack.clear()

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def undo(self, editor) -> bool:
        if not self._undo_stack:
            return False
        entry = self._undo_stack.pop()
        editor._apply_snapshot(entry.before)
        self._redo_stack.append(entry)
        return True

    def redo(self, editor) -> bool:
        if not self._redo_stack:
            return False
        entry = self._redo_stack.pop()
        editor._apply_snapshot(entry.after)
        self._undo_stack.append(entry)
        return True

"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Tuple, Optional, TYPE_CHECKING

from .keyboard import KeyType
from .reorder import MoveResult, move_block_down, move_block_up
from .tasks import delete_empty_task, indent_item, outdent_item, toggle_task
from .undo import UndoEntry

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the document."""
        self._move(editor, key_event)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""


class LeftCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.left_char()


class RightCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.right_char()


class UpLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.up_line()


class DownLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.down_line()


class BeginningOfLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_beginning_of_line()


class EndOfLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_end_of_line()


class PageDownCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.view.page_down()


class PageUpCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.view.page_up()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Editing commands modify the document."""
        before = editor._snapshot_state()
        self._edit(editor, key_event)
        entry = UndoEntry(before=before, after=editor._snapshot_state())
        editor.undo.push(entry)
        return entry.changes_text

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.backspace()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.delete_char()


class KillLineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.kill_line()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.insert_text('\n')


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Filter out control characters
        if ord(char[0]) >= 32 or char == '\t':
            editor.model.insert_text(char)


class NoteCommand(EditorCommand):
    """Runs a text operation (move, toggle, indent) on the whole note.

    The operation returns a MoveResult. An unhandled result hands the key
    to the fallback command, a blocked one is swallowed silently, and a
    successful one replaces the note as a single undoable edit.
    """

    def __init__(self, operation: Callable[[str, int], MoveResult],
                 fallback: Optional[EditorCommand] = None):
        self.operation = operation
        self.fallback = fallback

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        model = editor.model
        result = self.operation(model.text, model.cursor_offset)
        if not result.handled:
            if self.fallback is None:
                return False
            return self.fallback.execute(editor, key_event)
        if not result.changed:
            return False
        before = editor._snapshot_state()
        model.apply_result(result)
        editor.undo.push(UndoEntry(before=before, after=editor._snapshot_state()))
        return True


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.modified:
            editor.prompt_mode = 'quit_confirm'
        else:
            editor.running = False


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor._handle_save()


class HelpCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.show_help()


class WordCountCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.status_message = f"{editor.model.count_words()} words"


class UndoCommand(EditorCommand):
    def execute(self, editor, key_event):
        if editor.undo.undo(editor):
            editor.status_message = "Undone"
            return True
        editor.status_message = "Nothing to undo"
        return False


class RedoCommand(EditorCommand):
    def execute(self, editor, key_event):
        if editor.undo.redo(editor):
            editor.status_message = "Redone"
            return True
        editor.status_message = "Nothing to redo"
        return False


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        up = UpLineCommand()
        down = DownLineCommand()

        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), up)
        self.register((KeyType.SPECIAL, 'down'), down)
        self.register((KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
        self.register((KeyType.SPECIAL, 'end'), EndOfLineCommand())
        self.register((KeyType.CTRL, 'a'), BeginningOfLineCommand())
        self.register((KeyType.CTRL, 'e'), EndOfLineCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())

        # Block moves fall back to plain cursor movement off list lines
        self.register((KeyType.ALT, 'up'), NoteCommand(move_block_up, fallback=up))
        self.register((KeyType.ALT, 'down'), NoteCommand(move_block_down, fallback=down))

        # Task editing
        self.register((KeyType.CTRL, 't'), NoteCommand(toggle_task))
        self.register((KeyType.REGULAR, '\t'), NoteCommand(indent_item, fallback=InsertTextCommand()))
        self.register((KeyType.SHIFT_SPECIAL, 'tab'), NoteCommand(outdent_item))

        # Editing commands; Enter and Delete first drop an empty task line
        delete_char = NoteCommand(delete_empty_task, fallback=DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), delete_char)
        self.register((KeyType.CTRL, 'd'), delete_char)
        self.register((KeyType.CTRL, 'k'), KillLineCommand())
        self.register((KeyType.SPECIAL, 'enter'),
                      NoteCommand(delete_empty_task, fallback=InsertNewlineCommand()))
        self.register((KeyType.CTRL, 'z'), UndoCommand())
        self.register((KeyType.CTRL, 'y'), RedoCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'w'), WordCountCommand())
        self.register((KeyType.SPECIAL, 'f1'), HelpCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        if key_event.is_alt:
            command = self.get_command(KeyType.ALT, key_event.value)
        else:
            command = self.get_command(key_event.key_type, key_event.value)

        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False

"""Constants and configuration for the marknote editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Document layout
    DOCUMENT_WIDTH = 72  # Column width of the note view
    INDENT_UNIT = "  "  # Inserted by Tab on a list line, removed by Shift-Tab
    MAX_HANGING_INDENT = 24  # Wider list markers wrap flush left

    # Terminal requirements
    MIN_TERMINAL_WIDTH = 40  # Minimum terminal width required for display

    # Undo
    MAX_UNDO_ENTRIES = 500

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Environment
    DEBUG_LOG_ENV = "MARKNOTE_DEBUG"  # Path of a debug log file, if set

    # Status messages
    TERMINAL_TOO_NARROW_MESSAGE = "Terminal too narrow! Need at least {} columns."
    CURRENT_WIDTH_MESSAGE = "Current width: {} columns."
    HELP_HINT = "F1 for help"

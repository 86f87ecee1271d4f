"""Constants and configuration for the linepad editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    NAME = "linepad"

    # Rendering
    FILLER_LINE = "~"  # Rows with no backing line
    TRUNCATION_MARKER = "~"  # Glyph cut by the left or right edge of the view
    TAB_REPLACEMENT = " "
    WHITESPACE_REPLACEMENT = "␣"  # Visible marker for non-space whitespace
    CONTROL_REPLACEMENT = "▯"
    ZERO_WIDTH_REPLACEMENT = "·"

    # Terminal coordinates are 16-bit on every platform we draw to
    MAX_TERMINAL_COORD = 65535

    # Layout: status bar and message bar below the text view
    STATUS_BAR_ROWS = 1
    MESSAGE_BAR_ROWS = 1

    # Session
    QUIT_TIMES = 3  # Ctrl-Q presses needed to discard unsaved changes
    NO_NAME = "[No Name]"

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files
    FILE_ENCODING = "utf-8"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
    SAVED_MESSAGE = "File saved successfully"
    SAVE_FAILED_MESSAGE = "Error writing file: {}"
    OPEN_FAILED_MESSAGE = "Cannot open file: {}"
    QUIT_WARNING_MESSAGE = "WARNING! File has unsaved changes. Press Ctrl-Q {} more times to quit."

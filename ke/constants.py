"""Constants and configuration defaults for the ke editor."""

class EditorConstants:
    """Central configuration constants for the editor."""
    
    # Buffer bounds
    MAX_LINES = 100_000  # Maximum rows per document
    MAX_LINE_LENGTH = 100_000  # Maximum characters per row
    
    # Line terminators
    CRLF = "\r\n"
    LF = "\n"
    DEFAULT_LINE_TERMINATOR = CRLF  # Used for new files
    
    # Viewport policies
    SCROLL_STEP = "step"  # Nudge the origin one cell per render
    SCROLL_REVEAL = "reveal"  # Snap the origin just far enough to show the cursor
    DEFAULT_SCROLL_MODE = SCROLL_STEP
    
    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files
    
    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    
    # Status messages
    SAVED_MESSAGE = "Saved to {}"
    QUIT_CONFIRM_MESSAGE = "Save file? (y, n)"
    USAGE_MESSAGE = "usage: ke file"

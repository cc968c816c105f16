#!/usr/bin/env python3
"""ke - A minimal screen-oriented text editor.

Usage:
    python main.py filename
    
Controls:
    Arrow keys: Navigate cursor
    Ctrl-S: Save file
    Esc / Ctrl-Q: Quit (prompts to save if modified)
    Type to insert text
    Backspace: Delete character (joins lines at column 0)
    Enter: Split line
"""

import sys
from ke.__main__ import main


if __name__ == "__main__":
    sys.exit(main())

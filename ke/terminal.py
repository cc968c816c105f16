"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional
import sys
import select


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        # Last painted frame, for minimal updates
        self._last_lines: list[str] | None = None
        self._last_status: str | None = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            # Enter raw mode immediately so reads work
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def invalidate_frame(self) -> None:
        """Forget the last frame so the next update repaints everything."""
        self._last_lines = None
        self._last_status = None

    def bell(self) -> None:
        """Signal a boundary hit."""
        print('\a', end='', flush=True)

    def update_frame(self, lines: list[str], cursor_y: int, cursor_x: int,
                     status: Optional[str] = None) -> None:
        """Diff against the last frame and write only the rows that changed.

        Args:
            lines: Visible text rows, already cut to the window width
            cursor_y: Cursor row on screen (0-based)
            cursor_x: Cursor column on screen (0-based)
            status: Message for the status line, or None for a blank one
        """
        rows = self.height
        width = self.width
        if self._last_lines is None or len(self._last_lines) != rows:
            print(self.term.home + self.term.clear, end='')
            self._last_lines = [None] * rows
            self._last_status = None

        for y in range(rows):
            text = lines[y] if y < len(lines) else ""
            display_line = text[:width].ljust(width)
            if display_line != self._last_lines[y]:
                print(self.term.move(y, 0) + display_line, end='')
                self._last_lines[y] = display_line

        status_text = (status or "")[:width].ljust(width)
        if status_text != self._last_status:
            if status:
                painted = self.term.reverse + status_text + self.term.normal
            else:
                painted = status_text
            print(self.term.move(self.term.height - 1, 0) + painted, end='')
            self._last_status = status_text

        print(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key token, or None if nothing arrived in time.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1  # Reserve one line for status

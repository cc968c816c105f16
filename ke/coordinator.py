"""Cursor and viewport coordination against a mutating document."""

from dataclasses import dataclass
from typing import Optional

from .buffer import LINE_BREAK, Document
from .constants import EditorConstants
from .errors import EditError


@dataclass
class CursorPosition:
    row: int = 0
    col: int = 0


class Coordinator:
    """Tracks a cursor (row, col) and a viewport origin (top, left).

    Every command either succeeds and returns True, or hits a boundary and
    returns False without touching any state. Failed edits leave the
    error that stopped them in `last_error`.
    """

    def __init__(self, document: Document, width: int = 80, height: int = 24,
                 scroll_mode: str = EditorConstants.DEFAULT_SCROLL_MODE):
        if scroll_mode not in (EditorConstants.SCROLL_STEP, EditorConstants.SCROLL_REVEAL):
            raise ValueError(f"unknown scroll mode: {scroll_mode!r}")
        self.document = document
        self.scroll_mode = scroll_mode
        self.row = 0
        self.col = 0
        self.top = 0
        self.left = 0
        self.width = 1
        self.height = 1
        self.last_error: Optional[EditError] = None
        self.resize(width, height)

    @property
    def position(self) -> CursorPosition:
        return CursorPosition(self.row, self.col)

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, width)
        self.height = max(1, height)

    def reset(self) -> None:
        """Put the cursor and viewport back at the origin."""
        self.row = self.col = self.top = self.left = 0
        self.last_error = None

    def _last_row(self) -> int:
        return self.document.row_count() - 1

    def _row_length(self, row: int) -> int:
        return len(self.document.row_at(row))

    def _boundary(self, error: Optional[EditError] = None) -> bool:
        self.last_error = error
        return False

    def _clamp_to_row(self):
        length = self._row_length(self.row)
        if length <= self.col:
            self.col = length
            if self.col < self.left:
                self.left = self.col

    # --- Navigation ---

    def move_down(self) -> bool:
        if self.row >= self._last_row():
            return self._boundary()
        self.row += 1
        self._clamp_to_row()
        self.last_error = None
        return True

    def move_up(self) -> bool:
        if self.row == 0:
            return self._boundary()
        self.row -= 1
        self._clamp_to_row()
        self.last_error = None
        return True

    def move_left(self) -> bool:
        if self.col > 0:
            self.col -= 1
        elif self.row > 0:
            self.row -= 1
            self.col = self._row_length(self.row)
            if self.col >= self.left + self.width:
                self.left = self.col - self.width + 1
        else:
            return self._boundary()
        self.last_error = None
        return True

    def move_right(self) -> bool:
        if self.col < self._row_length(self.row):
            self.col += 1
        elif self.row < self._last_row():
            self.row += 1
            self.col = 0
            self.left = 0
        else:
            return self._boundary()
        self.last_error = None
        return True

    # --- Mutation ---

    def insert_character(self, ch: str) -> bool:
        try:
            self.row, self.col = self.document.insert_character(ch, self.row, self.col)
        except EditError as e:
            return self._boundary(e)
        self.last_error = None
        return True

    def insert_line_break(self) -> bool:
        return self.insert_character(LINE_BREAK)

    def delete_character(self) -> bool:
        try:
            self.row, self.col = self.document.delete_character(self.row, self.col)
        except EditError as e:
            return self._boundary(e)
        self.last_error = None
        return True

    # --- Viewport ---

    def scroll(self) -> None:
        """Recompute the viewport origin before a render.

        The step policy moves each axis by at most one cell, so a cursor
        that jumped far converges over several renders. The reveal policy
        moves the origin just far enough to contain the cursor.
        """
        if self.scroll_mode == EditorConstants.SCROLL_REVEAL:
            if self.row >= self.top + self.height:
                self.top = self.row - self.height + 1
            elif self.row < self.top:
                self.top = self.row
            if self.col >= self.left + self.width:
                self.left = self.col - self.width + 1
            elif self.col < self.left:
                self.left = self.col
            return

        if self.row >= self.top + self.height:
            self.top += 1
        elif self.row < self.top:
            self.top -= 1

        if self.col >= self.left + self.width:
            self.left += 1
        elif self.col < self.left:
            self.left -= 1

    def screen_cursor(self) -> tuple[int, int]:
        """Return the cursor's (x, y) screen cell relative to the viewport."""
        return self.col - self.left, self.row - self.top

    def cursor_visible(self) -> bool:
        x, y = self.screen_cursor()
        return 0 <= x < self.width and 0 <= y < self.height

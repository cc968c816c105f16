"""Projection of the document and cursor onto a bounded screen window."""

from .coordinator import Coordinator


def visible_slice(text: str, left: int, width: int) -> str:
    """Return the part of `text` that falls inside columns [left, left+width)."""
    if left >= len(text):
        return ""
    return text[left:left + width]


class TerminalTextView:
    """Screen-sized view of a document.

    After `render()`, `lines` holds one string per visible document row
    (fewer than `num_rows` near the end of the document) and
    `visual_cursor_x` / `visual_cursor_y` hold the screen cell for the
    cursor.
    """

    def __init__(self, coordinator: Coordinator):
        self.coordinator = coordinator
        self.lines: list[str] = []
        self.visual_cursor_x = 0
        self.visual_cursor_y = 0

    @property
    def num_rows(self) -> int:
        return self.coordinator.height

    @property
    def num_columns(self) -> int:
        return self.coordinator.width

    def resize(self, num_columns: int, num_rows: int):
        self.coordinator.resize(num_columns, num_rows)

    def render(self):
        """Recompute the viewport, then rebuild the visible lines.

        Assume that `lines` is out of date. The cursor cell is clamped into
        the window so it can always be drawn, even while the step scroll
        policy has not caught up with the cursor yet.
        """
        c = self.coordinator
        c.scroll()

        document = c.document
        last = min(c.top + c.height, document.row_count())
        self.lines = [
            visible_slice(document.row_at(row).contents(), c.left, c.width)
            for row in range(max(c.top, 0), last)
        ]

        x, y = c.screen_cursor()
        self.visual_cursor_x = min(max(x, 0), c.width - 1)
        self.visual_cursor_y = min(max(y, 0), c.height - 1)

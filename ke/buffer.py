"""Line-oriented text storage: bounded lines and the document that owns them."""

from typing import Iterable, Union

from .errors import CapacityExceeded, InvalidPosition, RangeUnderflow

LINE_BREAK = "\n"


class Line:
    """A bounded sequence of characters.

    The contents are held as an immutable string; every insert or delete
    replaces it, so a value returned by `contents()` never changes under
    the caller.
    """

    __slots__ = ("_capacity", "_text")

    def __init__(self, capacity: int, contents: Iterable[str] = ""):
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        text = "".join(contents)
        if len(text) > capacity:
            raise CapacityExceeded()
        self._capacity = capacity
        self._text = text

    @property
    def capacity(self) -> int:
        return self._capacity

    def length(self) -> int:
        return len(self._text)

    def __len__(self) -> int:
        return len(self._text)

    def contents(self) -> str:
        return self._text

    def insert(self, chars: Iterable[str], at: int) -> None:
        """Insert a run of characters at offset `at`.

        Raises:
            InvalidPosition: `at` is outside [0, length].
            CapacityExceeded: the result would not fit in the line.
        """
        if at < 0 or at > len(self._text):
            raise InvalidPosition()
        run = "".join(chars)
        if len(run) + len(self._text) > self._capacity:
            raise CapacityExceeded()
        self._text = self._text[:at] + run + self._text[at:]

    def delete(self, count: int, at: int) -> None:
        """Remove `count` characters ending at offset `at`.

        The removed range is [at - count, at).

        Raises:
            InvalidPosition: `at` is outside [0, length].
            RangeUnderflow: the range starts before the line does.
        """
        if at < 0 or at > len(self._text):
            raise InvalidPosition()
        if count < 0 or at - count < 0:
            raise RangeUnderflow()
        self._text = self._text[:at - count] + self._text[at:]

    def __repr__(self):
        return f"Line({self._capacity}, {self._text!r})"


class Document:
    """An ordered sequence of Lines indexed by row.

    Line breaks are not stored as characters. Inserting one splits a row
    and deleting at column 0 joins a row into its predecessor.
    """

    def __init__(self, max_lines: int, max_line_length: int):
        if max_lines < 1:
            raise ValueError("a document needs room for at least one line")
        self._max_lines = max_lines
        self._max_line_length = max_line_length
        self._lines: list[Line] = [self.new_line()]

    @property
    def max_lines(self) -> int:
        return self._max_lines

    @property
    def max_line_length(self) -> int:
        return self._max_line_length

    def new_line(self, contents: Iterable[str] = "") -> Line:
        return Line(self._max_line_length, contents)

    def initialize(self, lines: Iterable[Union[Line, str]]) -> None:
        """Replace the document contents.

        An empty sequence yields a single empty line. Every row gets a new
        Line of this document's capacity, so Lines passed in stay the
        caller's own. Nothing changes if the input does not fit.
        """
        seeded = []
        for line in lines:
            text = line.contents() if isinstance(line, Line) else line
            seeded.append(self.new_line(text))
            if len(seeded) > self._max_lines:
                raise CapacityExceeded()
        if not seeded:
            seeded.append(self.new_line())
        self._lines = seeded

    def rows(self) -> tuple[Line, ...]:
        return tuple(self._lines)

    def row_at(self, i: int) -> Line:
        if i < 0 or i >= len(self._lines):
            raise InvalidPosition()
        return self._lines[i]

    def row_count(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def text_rows(self) -> list[str]:
        return [line.contents() for line in self._lines]

    def insert_character(self, ch: str, row: int, col: int) -> tuple[int, int]:
        """Insert `ch` at (row, col) and return the new cursor position.

        A line break splits the row; anything else goes into the row.
        """
        line = self.row_at(row)
        if ch != LINE_BREAK:
            line.insert(ch, col)
            return row, col + len(ch)

        if col < 0 or col > len(line):
            raise InvalidPosition()
        if len(self._lines) + 1 > self._max_lines:
            raise CapacityExceeded()
        text = line.contents()
        tail = self.new_line(text[col:])
        line.delete(len(text) - col, len(text))
        self._lines.insert(row + 1, tail)
        return row + 1, 0

    def delete_character(self, row: int, col: int) -> tuple[int, int]:
        """Delete the character before (row, col) and return the new position.

        At column 0 the row is joined onto the end of the previous row and
        the cursor lands on the join point.
        """
        line = self.row_at(row)
        if col != 0:
            line.delete(1, col)
            return row, col - 1

        if row == 0:
            raise InvalidPosition()
        above = self._lines[row - 1]
        join_point = len(above)
        if join_point + len(line) > self._max_line_length:
            raise CapacityExceeded()
        above.insert(line.contents(), join_point)
        del self._lines[row]
        return row - 1, join_point

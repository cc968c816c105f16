"""Error kinds raised by the buffer engine.

None of these are fatal to an editing session. The caller decides whether
to ring the bell or show a message.
"""


class EditError(Exception):
    """Base class for buffer-internal failures."""


class InvalidPosition(EditError):
    """A row or column is outside the current bounds."""

    def __init__(self, message: str = "invalid cursor position"):
        super().__init__(message)


class CapacityExceeded(EditError):
    """A row-count or character-count bound would be violated."""

    def __init__(self, message: str = "max size exceeded"):
        super().__init__(message)


class RangeUnderflow(EditError):
    """A delete range extends before the start of a line."""

    def __init__(self, message: str = "line already empty"):
        super().__init__(message)

"""ke - A minimal screen-oriented text editor."""

from .buffer import Line, Document
from .coordinator import Coordinator, CursorPosition
from .errors import EditError, InvalidPosition, CapacityExceeded, RangeUnderflow

__all__ = [
    'Line',
    'Document',
    'Coordinator',
    'CursorPosition',
    'EditError',
    'InvalidPosition',
    'CapacityExceeded',
    'RangeUnderflow',
]

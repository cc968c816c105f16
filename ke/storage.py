"""Reading files into documents and writing them back atomically."""

import errno
import logging
import os
import re
import stat
import tempfile
from dataclasses import dataclass
from typing import Optional

from .buffer import Document
from .constants import EditorConstants
from .errors import CapacityExceeded

logger = logging.getLogger(__name__)

_TERMINATOR_RE = re.compile(r"\r\n|\n")


class StorageError(Exception):
    """A file could not be read or written.

    The message is meant to be shown to the user as-is.
    """


@dataclass
class LoadedFile:
    document: Document
    exists: bool
    terminator: Optional[str]  # None when the file had no line breaks


def detect_terminator(content: str) -> Optional[str]:
    """Return the line terminator used by `content`, or None if it has none.

    A file that mixes terminators gets the one used most, CRLF on a tie.
    Saving it writes that terminator on every row.
    """
    crlf = content.count(EditorConstants.CRLF)
    lf = content.count(EditorConstants.LF) - crlf
    if crlf == 0 and lf == 0:
        return None
    return EditorConstants.CRLF if crlf >= lf else EditorConstants.LF


def _new_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def split_rows(content: str) -> list[str]:
    """Split file content into rows.

    A terminator at the very end produces a final empty row, so joining the
    rows with the same terminator reproduces the content exactly.
    """
    return _TERMINATOR_RE.split(content)


def join_rows(rows: list[str], terminator: str) -> str:
    return terminator.join(rows)


def read_document(path: str, max_lines: int, max_line_length: int) -> LoadedFile:
    """Load `path` into a new document.

    A missing file gives a document with one empty line.

    Raises:
        StorageError: the file cannot be read or decoded, or does not fit
            the document bounds.
    """
    document = Document(max_lines, max_line_length)
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
    except FileNotFoundError:
        logger.info("%s does not exist, starting a new file", path)
        return LoadedFile(document=document, exists=False, terminator=None)
    except UnicodeDecodeError as e:
        raise StorageError(f"Error: {path} is not valid UTF-8") from e
    except OSError as e:
        raise StorageError(f"Error: Cannot read {path}: {e.strerror or e}") from e

    rows = split_rows(content)
    try:
        document.initialize(rows)
    except CapacityExceeded as e:
        raise StorageError(
            f"Error: {path} exceeds {max_lines} lines or {max_line_length} characters per line"
        ) from e
    logger.debug("Loaded %d rows from %s", document.row_count(), path)
    return LoadedFile(document=document, exists=True, terminator=detect_terminator(content))


def write_document(path: str, document: Document, terminator: str) -> None:
    """Write the document rows joined by `terminator`, atomically.

    The text goes to a temporary file in the target directory, which then
    replaces the target. The target keeps its permission bits, and is
    untouched on failure.

    Raises:
        StorageError: the file could not be written.
    """
    content = join_rows(document.text_rows(), terminator)
    dir_name = os.path.dirname(path) or '.'
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                         dir=dir_name,
                                         prefix=EditorConstants.ATOMIC_SAVE_PREFIX,
                                         suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                         delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        try:
            mode = stat.S_IMODE(os.stat(path).st_mode)
        except FileNotFoundError:
            mode = _new_file_mode()
        os.chmod(temp_filename, mode)
        os.replace(temp_filename, path)
    except OSError as e:
        if temp_filename is not None:
            try:
                os.remove(temp_filename)
            except OSError:
                pass
        logger.warning("Saving %s failed: %s", path, e)
        if isinstance(e, PermissionError):
            raise StorageError(f"Error: Permission denied saving {path}") from e
        if e.errno == errno.ENOSPC:
            raise StorageError("Error: No space left on device") from e
        raise StorageError(f"Error: Cannot save to {path}") from e
    logger.debug("Saved %d rows to %s", document.row_count(), path)

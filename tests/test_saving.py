"""Test loading and atomically saving files."""

import os
import stat
import tempfile

import pytest
from ke.buffer import Document
from ke.storage import (
    StorageError, detect_terminator, join_rows, read_document, split_rows, write_document,
)


def create_document(rows):
    doc = Document(100, 100)
    doc.initialize(rows)
    return doc


def test_read_missing_file_gives_empty_document(tmp_path):
    loaded = read_document(str(tmp_path / "new.txt"), 10, 10)
    assert loaded.exists is False
    assert loaded.terminator is None
    assert loaded.document.text_rows() == [""]


def test_read_crlf_file(tmp_path):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"abc\r\ndef\r\n")
    loaded = read_document(str(path), 10, 10)
    assert loaded.exists is True
    assert loaded.terminator == "\r\n"
    assert loaded.document.text_rows() == ["abc", "def", ""]


def test_read_lf_file_without_trailing_newline(tmp_path):
    path = tmp_path / "lf.txt"
    path.write_bytes(b"abc\ndef")
    loaded = read_document(str(path), 10, 10)
    assert loaded.terminator == "\n"
    assert loaded.document.text_rows() == ["abc", "def"]


def test_read_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    loaded = read_document(str(path), 10, 10)
    assert loaded.exists is True
    assert loaded.document.text_rows() == [""]


def test_read_file_over_bounds(tmp_path):
    path = tmp_path / "long.txt"
    path.write_text("a\nb\nc\n", encoding="utf-8")
    with pytest.raises(StorageError):
        read_document(str(path), 3, 10)
    path.write_text("abcdef", encoding="utf-8")
    with pytest.raises(StorageError):
        read_document(str(path), 3, 5)


def test_read_invalid_utf8(tmp_path):
    path = tmp_path / "bin.txt"
    path.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(StorageError, match="UTF-8"):
        read_document(str(path), 10, 10)


def test_write_joins_rows_with_terminator(tmp_path):
    path = tmp_path / "out.txt"
    write_document(str(path), create_document(["First line", "Second line"]), "\r\n")
    assert path.read_bytes() == b"First line\r\nSecond line"


def test_round_trip_preserves_bytes(tmp_path):
    """Loading and saving must not grow a blank line at the end."""
    path = tmp_path / "round.txt"
    original = b"one\r\ntwo\r\n\r\nthree\r\n"
    path.write_bytes(original)
    for _ in range(3):
        loaded = read_document(str(path), 100, 100)
        write_document(str(path), loaded.document, loaded.terminator)
    assert path.read_bytes() == original


def test_atomic_save_no_data_loss_on_failure():
    """A failed save leaves no temp file and raises a user-facing message."""
    read_only_dir = tempfile.mkdtemp()
    os.chmod(read_only_dir, 0o555)
    try:
        if os.access(read_only_dir, os.W_OK):
            pytest.skip("running with privileges that ignore directory permissions")
        target = os.path.join(read_only_dir, "test.txt")
        with pytest.raises(StorageError, match="Permission denied"):
            write_document(target, create_document(["x"]), "\n")
        assert os.listdir(read_only_dir) == []
    finally:
        os.chmod(read_only_dir, 0o755)
        os.rmdir(read_only_dir)


def test_save_overwrites_existing(tmp_path):
    path = tmp_path / "existing.txt"
    path.write_text("Old content", encoding="utf-8")
    write_document(str(path), create_document(["New content", "Line 2"]), "\n")
    assert path.read_text(encoding="utf-8") == "New content\nLine 2"
    assert [p.name for p in tmp_path.iterdir()] == ["existing.txt"]


def test_save_keeps_existing_file_mode(tmp_path):
    path = tmp_path / "shared.txt"
    path.write_bytes(b"one\ntwo")
    os.chmod(path, 0o644)
    loaded = read_document(str(path), 10, 10)
    write_document(str(path), loaded.document, loaded.terminator)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o644

    os.chmod(path, 0o640)
    write_document(str(path), loaded.document, loaded.terminator)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o640


def test_new_file_mode_follows_umask(tmp_path):
    path = tmp_path / "fresh.txt"
    old_umask = os.umask(0o022)
    try:
        write_document(str(path), create_document(["x"]), "\n")
    finally:
        os.umask(old_umask)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o644


def test_mixed_terminators_use_the_most_common(tmp_path):
    path = tmp_path / "mixed.txt"
    path.write_bytes(b"a\nb\r\nc\nd")
    loaded = read_document(str(path), 10, 10)
    assert loaded.terminator == "\n"
    assert loaded.document.text_rows() == ["a", "b", "c", "d"]
    write_document(str(path), loaded.document, loaded.terminator)
    assert path.read_bytes() == b"a\nb\nc\nd"


def test_terminator_helpers():
    assert detect_terminator("a\r\nb\nc") == "\r\n"
    assert detect_terminator("a\r\nb\r\nc\n") == "\r\n"
    assert detect_terminator("a\nb\nc\r\n") == "\n"
    assert detect_terminator("a\nb") == "\n"
    assert detect_terminator("abc") is None
    assert split_rows("a\r\nb\nc") == ["a", "b", "c"]
    assert join_rows(["a", "b"], "\r\n") == "a\r\nb"

"""Test cursor navigation and boundary hits."""

import pytest
from ke.buffer import Document
from ke.coordinator import Coordinator, CursorPosition


def create_coordinator(rows, width=80, height=24, **kwargs):
    doc = Document(100, 100)
    doc.initialize(rows)
    return Coordinator(doc, width=width, height=height, **kwargs)


def test_right_moves_along_row_then_wraps():
    c = create_coordinator(["ab", "cd"])
    assert c.move_right()
    assert c.move_right()
    assert c.position == CursorPosition(0, 2)
    assert c.move_right()
    assert c.position == CursorPosition(1, 0)


def test_right_wrap_resets_left_edge():
    c = create_coordinator(["abcdefgh", "x"], width=4)
    c.col = 8
    c.left = 5
    assert c.move_right()
    assert (c.row, c.col, c.left) == (1, 0, 0)


def test_left_wraps_to_end_of_previous_row():
    c = create_coordinator(["abc", "de"])
    c.row, c.col = 1, 0
    assert c.move_left()
    assert c.position == CursorPosition(0, 3)


def test_left_wrap_reveals_long_row():
    """Wrapping onto a row longer than the window pulls the left edge forward."""
    c = create_coordinator(["x" * 30, "y"], width=10)
    c.row, c.col = 1, 0
    assert c.move_left()
    assert c.col == 30
    assert c.left == 21
    assert c.cursor_visible()


def test_down_clamps_column_to_shorter_row():
    c = create_coordinator(["abcdef", "ab"])
    c.col = 5
    assert c.move_down()
    assert c.position == CursorPosition(1, 2)


def test_down_keeps_column_on_longer_row():
    c = create_coordinator(["ab", "abcdef"])
    c.col = 2
    assert c.move_down()
    assert c.position == CursorPosition(1, 2)


def test_up_clamp_reveals_column_left_of_viewport():
    c = create_coordinator(["ab", "x" * 40], width=10)
    c.row, c.col, c.left = 1, 35, 30
    assert c.move_up()
    assert c.position == CursorPosition(0, 2)
    assert c.left == 2


def test_boundary_hits_are_no_ops():
    """Up at row 0, Down at last row, Left at origin and Right at the end change nothing."""
    c = create_coordinator(["abc", "de"])
    rows = c.document.text_rows()

    assert not c.move_up()
    assert not c.move_left()
    assert c.position == CursorPosition(0, 0)

    c.row, c.col = 1, 2
    assert not c.move_down()
    assert not c.move_right()
    assert c.position == CursorPosition(1, 2)
    assert (c.top, c.left) == (0, 0)
    assert c.document.text_rows() == rows
    assert c.last_error is None


def test_insert_and_delete_adopt_document_positions():
    c = create_coordinator(["ac"])
    c.col = 1
    assert c.insert_character('b')
    assert c.position == CursorPosition(0, 2)
    assert c.insert_line_break()
    assert c.position == CursorPosition(1, 0)
    assert c.document.text_rows() == ["ab", "c"]
    assert c.delete_character()
    assert c.position == CursorPosition(0, 2)
    assert c.document.text_rows() == ["abc"]


def test_failed_edit_is_boundary_hit():
    doc = Document(1, 3)
    doc.initialize(["abc"])
    c = Coordinator(doc)
    c.col = 3
    assert not c.insert_character('d')
    assert not c.insert_line_break()
    assert c.position == CursorPosition(0, 3)
    assert doc.text_rows() == ["abc"]
    assert c.last_error is not None
    assert c.move_left()
    assert c.last_error is None


def test_backspace_at_origin_is_boundary_hit():
    c = create_coordinator(["abc"])
    assert not c.delete_character()
    assert c.position == CursorPosition(0, 0)
    assert c.document.text_rows() == ["abc"]


def test_cursor_always_valid():
    """A long scripted walk never leaves the document."""
    c = create_coordinator(["hello", "", "a longer line", "x"], width=5, height=2)
    script = "RRRRRRRDDDDLLLLLLLLLUUUiEiBBBBBBBBDRRRRRRRRRRRRRRRRRiiEBUUUU"
    for step in script:
        if step == 'R':
            c.move_right()
        elif step == 'L':
            c.move_left()
        elif step == 'U':
            c.move_up()
        elif step == 'D':
            c.move_down()
        elif step == 'i':
            c.insert_character('z')
        elif step == 'E':
            c.insert_line_break()
        elif step == 'B':
            c.delete_character()
        c.scroll()
        assert 0 <= c.row < c.document.row_count()
        assert 0 <= c.col <= len(c.document.row_at(c.row))


def test_unknown_scroll_mode():
    with pytest.raises(ValueError):
        create_coordinator(["a"], scroll_mode="center")


def test_resize_keeps_at_least_one_cell():
    c = create_coordinator(["a"])
    c.resize(0, -3)
    assert (c.width, c.height) == (1, 1)

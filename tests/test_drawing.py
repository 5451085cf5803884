import pytest

from prestoedit.drawing import (
    CursorStyle,
    Drawer,
    Handle,
    HiddenCursor,
    ImageLine,
    ShownCursor,
    Status,
    TextLine,
)
from prestoedit.geometry import Vector
from prestoedit.highlight import LinkColor


def test_shown_cursor_offset_moves_position_only():
    cur = ShownCursor(Vector(2, 3), Vector(8, 16), CursorStyle.BAR)
    moved = cur.offset(Vector(10, -1))
    assert moved.pos == Vector(2, 3) + Vector(10, -1)
    assert moved.size == cur.size
    assert moved.kind is CursorStyle.BAR


def test_offset_does_not_mutate_original():
    cur = ShownCursor(Vector(0, 0), Vector(1, 1), CursorStyle.BLOCK)
    cur.offset(Vector(5, 5))
    assert cur.pos == Vector(0, 0)


def test_hidden_cursor_offset_stays_hidden():
    assert HiddenCursor().offset(Vector(4, 4)) == HiddenCursor()


def test_status_fields():
    st = Status("left", "", "right")
    assert (st.left, st.center, st.right) == ("left", "", "right")


def test_lines_hold_content():
    line = TextLine("ab", [LinkColor("fg"), LinkColor("fg")])
    assert len(line.colors) == len(line.chars)
    assert ImageLine("!!logo", 250).height == 250


def test_interfaces_are_abstract():
    with pytest.raises(TypeError):
        Handle()
    with pytest.raises(TypeError):
        Drawer()
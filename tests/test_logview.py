import logging

from prestoedit.buffers.core import CloseThis, make_buffer
from prestoedit.buffers.logview import LogViewBuffer
from prestoedit.drawing import Handle, HiddenCursor, TextMode
from prestoedit.geometry import Rect, Vector
from prestoedit.highlight import LinkColor
from prestoedit.logstore import get_lines, setup_logger


class RecordingHandle(Handle):
    def __init__(self):
        self.calls = []

    def render_text(self, lines, bounds, mode):
        self.calls.append(("text", lines, bounds, mode))

    def render_line(self, start, end, color):
        self.calls.append(("line", start, end, color))

    def render_rect(self, start, size, color):
        self.calls.append(("rect", start, size, color))

    def render_cursor(self, cursor):
        self.calls.append(("cursor", cursor))

    def render_status(self, status, bounds):
        self.calls.append(("status", status, bounds))

    def get_char_size(self):
        return Vector(2, 4)

    def end(self):
        self.calls.append(("end",))


def draw(area):
    handle = RecordingHandle()
    make_buffer(LogViewBuffer()).draw(handle, area)
    return {call[0]: call for call in handle.calls}


def test_identity():
    buf = make_buffer(LogViewBuffer())
    assert buf.get_path() == "LogView"
    assert buf.close(None) == CloseThis()
    assert buf.set_focused(make_buffer(LogViewBuffer())) is True
    assert buf.get_cursor(Vector(5, 5), Vector(1, 1)) == HiddenCursor()


def test_newest_line_first_with_level_colour():
    setup_logger()
    logging.getLogger("viewtest").warning("hello")
    calls = draw(Rect(0, 0, 80, 24))
    _, lines, _, mode = calls["text"]
    assert mode is TextMode.LINES
    assert len(lines) == len(get_lines())
    newest = lines[0]
    assert newest.chars.endswith(" hello")
    assert "viewtest" in newest.chars
    assert len(newest.colors) == len(newest.chars)
    assert newest.colors[0] == LinkColor("lineNumberFg")
    assert newest.colors[-1] == LinkColor("log_warn")


def test_error_and_info_colours():
    setup_logger()
    logging.getLogger("viewtest").error("boom")
    logging.getLogger("viewtest").info("fine")
    _, lines, _, _ = draw(Rect(0, 0, 80, 24))["text"]
    assert lines[0].colors[-1] == LinkColor("log_info")
    assert lines[1].colors[-1] == LinkColor("log_error")


def test_gutter_rect_and_split_line_agree():
    setup_logger()
    area = Rect(3, 5, 80, 24)
    calls = draw(area)
    _, rect_start, rect_size, rect_color = calls["rect"]
    _, line_start, line_end, line_color = calls["line"]
    assert rect_start == Vector(area.x, area.y)
    assert rect_size.y == area.h
    assert line_start == Vector(area.x + rect_size.x, area.y)
    assert line_end == Vector(area.x + rect_size.x, area.y + area.h)
    assert rect_color == LinkColor("lineNumberBg")
    assert line_color == LinkColor("lineNumberSplit")
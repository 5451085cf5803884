from prestoedit.buffers.core import CloseThis, make_buffer
from prestoedit.buffers.highlights import HighlightBuffer
from prestoedit.drawing import Handle, HiddenCursor, TextMode
from prestoedit.geometry import Rect, Vector
from prestoedit.highlight import HexColor, LinkColor


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
        return Vector(1, 1)

    def end(self):
        self.calls.append(("end",))


def test_identity():
    buf = make_buffer(HighlightBuffer({}))
    assert buf.get_path() == "Highlight"
    assert buf.close(None) == CloseThis()
    assert buf.set_focused(make_buffer(HighlightBuffer({}))) is True
    assert buf.get_cursor(Vector(10, 10), Vector(1, 1)) == HiddenCursor()


def test_draws_one_swatch_per_colour():
    colors = {"fg": HexColor(255, 0, 255), "keyword": LinkColor("fg")}
    handle = RecordingHandle()
    area = Rect(0, 0, 40, 10)
    make_buffer(HighlightBuffer(colors)).draw(handle, area)
    (kind, lines, bounds, mode), = handle.calls
    assert (kind, bounds, mode) == ("text", area, TextMode.LINES)
    assert [line.chars for line in lines] == ["XXXXXX fg", "XXXXXX keyword"]
    for name, line in zip(colors, lines):
        assert len(line.colors) == len(line.chars)
        assert line.colors[:6] == [LinkColor(name)] * 6
        assert set(line.colors[6:]) == {LinkColor("fg")}


def test_empty_table_draws_no_lines():
    handle = RecordingHandle()
    make_buffer(HighlightBuffer({})).draw(handle, Rect(0, 0, 5, 5))
    assert handle.calls[0][1] == []
"""A buffer that shows and navigates a file as hexadecimal bytes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from prestoedit.buffers.core import Buffer, BufferContent, CloseKind, CloseThis
from prestoedit.buffers.text import file_type
from prestoedit.drawing import CursorData, CursorStyle, Handle, ShownCursor, TextLine, TextMode
from prestoedit.event import Event, KeyEvent, Mods, MouseEvent, Nav, NavEvent, SaveEvent
from prestoedit.geometry import Rect, Vector
from prestoedit.highlight import Color, LinkColor

_OFFSET_WIDTH = 9
_GROUPS = 4
_GROUP_SIZE = 4
_ROW = _GROUPS * _GROUP_SIZE
_MAX_COLUMN = _ROW - 1

_STEPS = {
    Nav.DOWN: Vector(0, 1),
    Nav.UP: Vector(0, -1),
    Nav.LEFT: Vector(-1, 0),
    Nav.RIGHT: Vector(1, 0),
}


class HexMode(Enum):
    NORMAL = "normal"
    INSERT = "insert"


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _byte_cell(value: int) -> tuple[str, Color]:
    if value == 0:
        return " ", LinkColor("error")
    if 32 < value < 128:
        return chr(value), LinkColor("fg")
    return ".", LinkColor("error")


@dataclass
class HexBuffer(BufferContent):
    """Shows the bytes of ``filename`` sixteen to a row."""

    filename: str
    cached: bool = False
    data: bytes = b""
    pos: Vector = Vector(0, 0)
    scroll: int = 0
    mode: HexMode = HexMode.NORMAL
    height: int = 0
    char_size: Vector = Vector(0, 0)

    def setup(self, base: Buffer) -> None:
        base.set_var("filetype", file_type(self.filename))

    def update(self, size: Vector) -> None:
        if not self.cached:
            try:
                with open(self.filename, "rb") as handle:
                    self.data = handle.read()
            except OSError:
                self.data = b"\x00"
            self.cached = True
        if size.x < 4:
            return

        x = _clamp(self.pos.x, 0, size.x - 6)
        y = _clamp(self.pos.y, 0, len(self.data) - 1)
        while y - self.scroll < 1 and self.scroll > 0:
            self.scroll -= 1
        while y - self.scroll > self.height - 1 and self.scroll < len(self.data):
            self.scroll += 1
        if y < len(self.data):
            x = _clamp(x, 0, _MAX_COLUMN)
        self.pos = Vector(x, y)

    def _render_row(self, start: int) -> tuple[TextLine, int]:
        chunk = self.data[start : start + _ROW]
        colors: list[Color] = [LinkColor("lineNumberFg")] * _OFFSET_WIDTH
        groups: list[str] = []
        suffix: list[str] = []
        for group in range(_GROUPS):
            cells = chunk[group * _GROUP_SIZE : (group + 1) * _GROUP_SIZE]
            missing = _GROUP_SIZE - len(cells)
            for value in cells:
                char, color = _byte_cell(value)
                suffix.append(char)
                colors.extend([color, color])
            colors.extend([LinkColor("fg")] * (2 * missing + 1))
            groups.append("".join(f"{value:02X}" for value in cells) + ".." * missing + " ")
        chars = f"{start:08X} " + "".join(groups) + "".join(suffix)
        return TextLine(chars, colors), start + len(chunk)

    def draw_conts(self, handle: Handle, coords: Rect) -> None:
        lines = []
        index = _ROW * self.scroll
        for _ in range(coords.h):
            line, index = self._render_row(index)
            lines.append(line)

        split_x = int(handle.get_char_size().x * 8.5)
        handle.render_rect(
            Vector(coords.x, coords.y),
            Vector(split_x, coords.h),
            LinkColor("lineNumberBg"),
        )
        handle.render_line(
            Vector(coords.x + split_x, coords.y),
            Vector(coords.x + split_x, coords.y + coords.h),
            LinkColor("lineNumberSplit"),
        )
        handle.render_text(lines, coords, TextMode.LINES)

    def get_cursor(self, size: Vector, char_size: Vector) -> CursorData:
        self.height = _div(size.y, char_size.y)
        self.char_size = char_size
        column = self.pos.x * 2 + _div(self.pos.x, _GROUP_SIZE)
        cursor = ShownCursor(
            pos=Vector(column * char_size.x, self.pos.y * char_size.y),
            size=Vector(char_size.x * 2, char_size.y),
            kind=CursorStyle.BLOCK if self.mode is HexMode.NORMAL else CursorStyle.BAR,
        )
        return cursor.offset(Vector(_OFFSET_WIDTH * char_size.x, -self.scroll * char_size.y))

    def event_process(self, ev: Event, lsp: Any, coords: Rect) -> None:
        plain = Mods()
        if isinstance(ev, NavEvent):
            if ev.mods != plain:
                return
            step = _STEPS.get(ev.nav)
            if step is not None:
                self.pos = self.pos + step
            elif ev.nav is Nav.ESCAPE and self.mode is HexMode.INSERT:
                self.mode = HexMode.NORMAL
        elif isinstance(ev, SaveEvent):
            if ev.path is None:
                with open(self.filename, "wb") as handle:
                    handle.write(self.data)
        elif isinstance(ev, KeyEvent):
            if ev.mods == plain and self.mode is HexMode.NORMAL and ev.char == "i":
                self.mode = HexMode.INSERT
        elif isinstance(ev, MouseEvent):
            x = _div(_div(ev.pos.x - coords.x, self.char_size.x), 2) - 5
            x -= _div(x, 9)
            y = _div(ev.pos.y - coords.y, self.char_size.y) + self.scroll
            self.pos = Vector(x, y)

    def get_path(self) -> str:
        return f"Hex[{self.filename}]"

    def set_focused(self, child: Buffer) -> bool:
        return False

    def close(self, lsp: Any) -> CloseKind:
        lsp.close_file(self.filename)
        return CloseThis()
"""A buffer that edits a text file line by line."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from prestoedit.buffers.core import Buffer, BufferContent, CloseKind, CloseThis
from prestoedit.drawing import CursorData, CursorStyle, Handle, ShownCursor, TextLine, TextMode
from prestoedit.event import Event, KeyEvent, Mods, MouseEvent, Nav, NavEvent, SaveEvent
from prestoedit.geometry import Rect, Vector
from prestoedit.highlight import Color, LinkColor
from prestoedit.lsp import LSPHighlight

_GUTTER = 5


class FileMode(Enum):
    NORMAL = "normal"
    INSERT = "insert"


def file_type(filename: str) -> str:
    """The text after the last dot of the file name, or the whole name."""
    return filename.split("/")[-1].split(".")[-1]


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


@dataclass
class FileBuffer(BufferContent):
    """Edits the lines of ``filename`` with a normal and an insert mode."""

    filename: str
    cached: bool = False
    data: list[str] = field(default_factory=list)
    pos: Vector = Vector(0, 0)
    scroll: int = 0
    mode: FileMode = FileMode.NORMAL
    height: int = 0
    char_size: Vector = Vector(0, 0)
    highlight: list[list[LSPHighlight]] = field(default_factory=list)

    def setup(self, base: Buffer) -> None:
        base.set_var("filetype", file_type(self.filename))

    def setup_lsp(self, lsp: Any) -> None:
        lsp.open_file(self.filename, "\n".join(self.data))

    def _load(self) -> None:
        try:
            with open(self.filename, encoding="utf-8", newline="") as handle:
                self.data.extend(_split_lines(handle.read()) or [""])
        except (OSError, UnicodeDecodeError):
            self.data.append("")
        self.cached = True

    def update(self, size: Vector) -> None:
        if not self.cached:
            self._load()
        if size.x < 4:
            return

        x = _clamp(self.pos.x, 0, size.x - 6)
        y = _clamp(self.pos.y, 0, len(self.data) - 1)
        while y - self.scroll < 1 and self.scroll > 0:
            self.scroll -= 1
        while y - self.scroll > self.height - 1 and self.scroll < len(self.data):
            self.scroll += 1
        if y < len(self.data):
            x = _clamp(x, 0, len(self.data[y]))
        self.pos = Vector(x, y)

    def _render_line(self, line_idx: int) -> TextLine:
        if line_idx >= len(self.data):
            return TextLine(" ", [LinkColor("lineNumberFg")])
        text = self.data[line_idx]
        colors: list[Color] = [LinkColor("lineNumberFg")] * _GUTTER + [LinkColor("fg")] * len(text)
        spans = self.highlight[line_idx] if line_idx < len(self.highlight) else []
        for span in spans:
            start = span.pos + _GUTTER
            for idx in range(start, min(start + span.length, len(colors))):
                colors[idx] = span.color
        return TextLine(f"{line_idx + 1:>4} {text}", colors)

    def draw_conts(self, handle: Handle, coords: Rect) -> None:
        lines = [self._render_line(idx + self.scroll) for idx in range(coords.h)]
        split_x = int(handle.get_char_size().x * 4.5)
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
        cursor = ShownCursor(
            pos=Vector(self.pos.x * char_size.x, self.pos.y * char_size.y),
            size=char_size,
            kind=CursorStyle.BLOCK if self.mode is FileMode.NORMAL else CursorStyle.BAR,
        )
        return cursor.offset(Vector(_GUTTER * char_size.x, -self.scroll * char_size.y))

    def _navigate(self, nav: Nav) -> None:
        x, y = self.pos.x, self.pos.y
        insert = self.mode is FileMode.INSERT
        if nav is Nav.DOWN:
            self.pos = Vector(x, y + 1)
        elif nav is Nav.UP:
            self.pos = Vector(x, y - 1)
        elif nav is Nav.LEFT:
            self.pos = Vector(x - 1, y)
        elif nav is Nav.RIGHT:
            self.pos = Vector(x + 1, y)
        elif not insert:
            return
        elif nav is Nav.ENTER:
            line = self.data[y]
            self.data[y] = line[:x]
            self.data.insert(y + 1, line[x:])
            self.pos = Vector(0, y + 1)
        elif nav is Nav.BACKSPACE:
            if x > 0:
                line = self.data[y]
                self.data[y] = line[: x - 1] + line[x:]
                self.pos = Vector(x - 1, y)
            elif y > 0:
                joined_at = len(self.data[y - 1])
                self.data[y - 1] += self.data.pop(y)
                self.pos = Vector(joined_at, y - 1)
        elif nav is Nav.ESCAPE:
            self.mode = FileMode.NORMAL

    def _save(self, lsp: Any) -> None:
        content = "".join(line + "\n" for line in self.data)
        with open(self.filename, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        lsp.save_file(self.filename, content)

    def event_process(self, ev: Event, lsp: Any, coords: Rect) -> None:
        plain = Mods()
        if isinstance(ev, NavEvent):
            if ev.mods == plain:
                self._navigate(ev.nav)
        elif isinstance(ev, SaveEvent):
            if ev.path is None:
                self._save(lsp)
        elif isinstance(ev, KeyEvent):
            if ev.mods == plain:
                if self.mode is FileMode.INSERT:
                    x, y = self.pos.x, self.pos.y
                    line = self.data[y]
                    self.data[y] = line[:x] + ev.char + line[x:]
                    self.pos = Vector(x + 1, y)
                elif ev.char == "i":
                    self.mode = FileMode.INSERT
        elif isinstance(ev, MouseEvent):
            self.pos = Vector(
                _div(ev.pos.x - coords.x, self.char_size.x) - _GUTTER,
                _div(ev.pos.y - coords.y, self.char_size.y) + self.scroll,
            )
        self.highlight = lsp.get_highlight(self.filename)

    def get_path(self) -> str:
        return f"File[{self.filename}]"

    def set_focused(self, child: Buffer) -> bool:
        return False

    def close(self, lsp: Any) -> CloseKind:
        lsp.close_file(self.filename)
        return CloseThis()
"""A drawer that renders the editor in a text terminal."""

from __future__ import annotations

import contextlib
from itertools import groupby
from typing import Any, Mapping

from blessed import Terminal

from prestoedit.drawing import (
    CursorData,
    CursorStyle,
    Drawer,
    Handle,
    ImageLine,
    ShownCursor,
    Status,
    TextMode,
)
from prestoedit.event import Event, KeyEvent, Mods, Nav, NavEvent, QuitEvent
from prestoedit.geometry import Rect, Vector
from prestoedit.highlight import Color, HexColor, get_color

_SYNC_BEGIN = "\x1b[?2026h"
_SYNC_END = "\x1b[?2026l"
_CURSOR_SHAPES = {
    CursorStyle.BLOCK: "\x1b[2 q",
    CursorStyle.BAR: "\x1b[5 q",
}

_NAV_NAMES = {
    "KEY_UP": Nav.UP,
    "KEY_DOWN": Nav.DOWN,
    "KEY_LEFT": Nav.LEFT,
    "KEY_RIGHT": Nav.RIGHT,
    "KEY_ESCAPE": Nav.ESCAPE,
    "KEY_ENTER": Nav.ENTER,
    "KEY_BACKSPACE": Nav.BACKSPACE,
}
_NAV_CHARS = {
    "\x1b": Nav.ESCAPE,
    "\r": Nav.ENTER,
    "\n": Nav.ENTER,
    "\x7f": Nav.BACKSPACE,
    "\x08": Nav.BACKSPACE,
}
_POLL_SECONDS = 0.5


def truncate(text: str, max_chars: int) -> str:
    """The first ``max_chars`` characters of ``text``."""
    return text[:max_chars]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class TerminalHandle(Handle):
    """Collects the output of one frame and writes it out at ``end``."""

    def __init__(self, term: Any, colors: Mapping[str, Color], stream: Any = None) -> None:
        self.term = term
        self.colors = colors
        self.stream = stream if stream is not None else term.stream
        self._parts: list[str] = []

    @property
    def output(self) -> str:
        """Everything queued so far and not yet written."""
        return "".join(self._parts)

    def _write(self, *parts: Any) -> None:
        self._parts.extend(str(part) for part in parts)

    def _foreground(self, color: Color) -> str:
        resolved = get_color(self.colors, color)
        if isinstance(resolved, HexColor):
            return str(self.term.color_rgb(resolved.r, resolved.g, resolved.b))
        return str(self.term.white)

    def begin_frame(self) -> None:
        """Queue a screen clear and the start of a synchronized update."""
        self._write(self.term.clear)
        if self.term.does_styling:
            self._write(_SYNC_BEGIN)

    def end(self) -> None:
        if self.term.does_styling:
            self._write(_SYNC_END)
        self.stream.write(self.output)
        self.stream.flush()
        self._parts.clear()

    def render_text(self, lines: list, bounds: Rect, mode: TextMode) -> None:
        for row, line in enumerate(lines):
            if row > bounds.h:
                break
            if isinstance(line, ImageLine):
                continue
            text = truncate(line.chars, bounds.w)
            if len(text) != len(line.chars):
                text = text[:-1] + ">"
            colors = line.colors[: len(text)]
            if len(colors) < len(text):
                raise ValueError("a text line has fewer colours than characters")

            y = bounds.y + row
            x = bounds.x
            for color, cells in groupby(zip(colors, text), key=lambda cell: cell[0]):
                run = "".join(char for _, char in cells)
                self._write(self.term.move_xy(x, y), self._foreground(color), run)
                x += len(run)
            self._write(self.term.normal)

    def render_rect(self, start: Vector, size: Vector, color: Color) -> None:
        """Filled rectangles are not drawn in a terminal."""

    def render_line(self, start: Vector, end: Vector, color: Color) -> None:
        if start == end:
            return
        if start.y == end.y:
            step = Vector(1 if start.x < end.x else -1, 0)
        elif start.x == end.x:
            step = Vector(0, 1 if start.y < end.y else -1)
        else:
            raise ValueError("only horizontal and vertical lines can be drawn")

        self._write(self.term.reverse)
        pos = start
        while pos != end:
            self._write(self.term.move_xy(pos.x, pos.y), " ")
            pos = pos + step
        self._write(self.term.normal)

    def render_cursor(self, cursor: CursorData) -> None:
        if not isinstance(cursor, ShownCursor):
            return
        x = _clamp(cursor.pos.x, 0, self.term.width)
        y = _clamp(cursor.pos.y, 0, self.term.height)
        self._write(self.term.move_xy(x, y))
        if self.term.does_styling:
            self._write(_CURSOR_SHAPES[cursor.kind])

    def render_status(self, status: Status, bounds: Rect) -> None:
        total = bounds.w
        left = truncate(status.left, total)
        room = total - len(left)
        right = status.right[len(status.right) - room :] if room > 0 else ""
        gap = total - len(right) - len(left)
        self._write(
            self.term.move_xy(0, bounds.y),
            self.term.reverse,
            left,
            " " * gap,
            right,
            self.term.normal,
        )

    def get_char_size(self) -> Vector:
        return Vector(1, 1)


class TerminalDrawer(Drawer):
    """Draws to a terminal through blessed and reads keys from it."""

    def __init__(self, term: Any = None) -> None:
        self.term = term if term is not None else Terminal()
        self._modes = contextlib.ExitStack()

    def _emit(self, text: Any) -> None:
        self.term.stream.write(str(text))
        self.term.stream.flush()

    def init(self) -> None:
        self._emit(self.term.enter_fullscreen)
        self._modes.enter_context(self.term.raw())

    def deinit(self) -> None:
        self._modes.close()
        self._emit(self.term.exit_fullscreen)

    def begin(self, colors: Mapping[str, Color]) -> TerminalHandle:
        handle = TerminalHandle(self.term, colors)
        handle.begin_frame()
        return handle

    def get_size(self) -> Vector:
        return Vector(self.term.width, self.term.height - 1)

    def get_events(self) -> list[Event]:
        key = self.term.inkey(timeout=_POLL_SECONDS)
        if not key:
            return []
        return self.translate_key(key)

    def translate_key(self, key: str) -> list[Event]:
        """Turn one keystroke into editor events."""
        nav = _NAV_NAMES.get(getattr(key, "name", None) or "") or _NAV_CHARS.get(str(key))
        if nav is not None:
            return [NavEvent(Mods(), nav)]
        if getattr(key, "is_sequence", False) or len(key) != 1:
            return []

        char = str(key)
        ctrl = False
        code = ord(char)
        if code == 0:
            ctrl, char = True, " "
        elif 1 <= code <= 26 and char != "\t":
            ctrl, char = True, chr(code + 96)
        elif code < 32:
            return []

        if ctrl and char == "c":
            return [QuitEvent()]
        return [KeyEvent(Mods(ctrl=ctrl, shift=char == ":"), char)]
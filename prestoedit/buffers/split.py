"""A buffer that shows two child buffers side by side or stacked."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from prestoedit.buffers.core import (
    Buffer,
    BufferContent,
    CloseDone,
    CloseKind,
    CloseReplace,
    CloseThis,
    NavDir,
    make_buffer,
)
from prestoedit.buffers.empty import EmptyBuffer
from prestoedit.drawing import CursorData, Handle
from prestoedit.event import Event, Mods, MouseEvent, Nav, NavEvent
from prestoedit.geometry import MeasureKind, Measurement, Rect, Vector
from prestoedit.highlight import LinkColor

_CTRL = Mods(ctrl=True)
_FOCUS_KEYS = {
    Nav.UP: NavDir.UP,
    Nav.DOWN: NavDir.DOWN,
    Nav.LEFT: NavDir.LEFT,
    Nav.RIGHT: NavDir.RIGHT,
}


class SplitDir(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


@dataclass(eq=False)
class SplitBuffer(BufferContent):
    """Two panes, ``a`` first and ``b`` second, one of which has focus."""

    a: Buffer
    b: Buffer
    split_dir: SplitDir
    split: Measurement = Measurement(MeasureKind.PERCENT, 0.5)
    a_active: bool = False
    char_size: Vector = Vector(1, 1)

    @property
    def _active(self) -> Buffer:
        return self.a if self.a_active else self.b

    def _set_active(self, buffer: Buffer) -> None:
        if self.a_active:
            self.a = buffer
        else:
            self.b = buffer

    def update(self, size: Vector) -> None:
        if self.split_dir is SplitDir.VERTICAL:
            split = self.split.get_value(size.y, self.char_size.y)
            self.a.update(Vector(size.x, split))
            self.b.update(Vector(size.x, size.y - split - 1))
        else:
            split = self.split.get_value(size.x, self.char_size.x)
            self.a.update(Vector(split, size.y))
            self.b.update(Vector(size.x - split - 1, size.y))

    def draw_conts(self, handle: Handle, coords: Rect) -> None:
        char_size = handle.get_char_size()
        if self.split_dir is SplitDir.VERTICAL:
            split = self.split.get_value(coords.h, char_size.y)
            self.a.draw(handle, Rect(coords.x, coords.y, coords.w, split))
            self.b.draw(
                handle,
                Rect(coords.x, coords.y + split + 1, coords.w, coords.h - split - 1),
            )
            handle.render_line(
                Vector(coords.x, coords.y + split),
                Vector(coords.x + coords.w, coords.y + split),
                LinkColor("split"),
            )
        else:
            split = self.split.get_value(coords.w, char_size.x)
            self.a.draw(handle, Rect(coords.x, coords.y, split, coords.h))
            self.b.draw(
                handle,
                Rect(coords.x + split + 1, coords.y, coords.w - split - 1, coords.h),
            )
            handle.render_line(
                Vector(coords.x + split, coords.y),
                Vector(coords.x + split, coords.y + coords.h),
                LinkColor("split"),
            )

    def get_cursor(self, size: Vector, char_size: Vector) -> CursorData:
        self.char_size = char_size
        if self.split_dir is SplitDir.VERTICAL:
            split = self.split.get_value(size.y, char_size.y)
            sub_size = Vector(size.x, split)
            shift = Vector(0, split + 1)
        else:
            split = self.split.get_value(size.x, char_size.x)
            sub_size = Vector(split, size.y)
            shift = Vector(split + 1, 0)
        cursor = self._active.get_cursor(sub_size, char_size)
        return cursor if self.a_active else cursor.offset(shift)

    def event_process(self, ev: Event, lsp: Any, coords: Rect) -> None:
        if isinstance(ev, NavEvent) and ev.mods == _CTRL and ev.nav in _FOCUS_KEYS:
            self.nav(_FOCUS_KEYS[ev.nav])
            return

        if self.split_dir is SplitDir.HORIZONTAL:
            first = replace(coords, w=_div(coords.w, 2))
            second = replace(first, x=first.x + first.w)
            if isinstance(ev, MouseEvent):
                self.a_active = ev.pos.x < first.x + first.w
        else:
            first = replace(coords, h=_div(coords.h, 2))
            second = replace(first, y=first.y + first.h)
            if isinstance(ev, MouseEvent):
                self.a_active = ev.pos.y < first.y + first.h

        if self.a_active:
            self.a.event_process(ev, lsp, first)
        else:
            self.b.event_process(ev, lsp, second)

    def nav(self, direction: NavDir) -> bool:
        pair = (direction, self.split_dir)
        if pair in ((NavDir.DOWN, SplitDir.VERTICAL), (NavDir.RIGHT, SplitDir.HORIZONTAL)):
            if self.a_active:
                if not self.a.nav(direction):
                    self.a_active = False
                return True
            return self.b.nav(direction)
        if pair in ((NavDir.UP, SplitDir.VERTICAL), (NavDir.LEFT, SplitDir.HORIZONTAL)):
            if not self.a_active:
                if not self.b.nav(direction):
                    self.a_active = True
                return True
            return self.a.nav(direction)
        return self._active.nav(direction)

    def get_path(self) -> str:
        return "Split>" + self._active.get_path()

    def set_focused(self, child: Buffer) -> bool:
        if self._active.set_focused(child):
            self._set_active(child)
        return False

    def close(self, lsp: Any) -> CloseKind:
        if self.a.is_empty() and self.b.is_empty():
            return CloseThis()

        active, other = (self.a, self.b) if self.a_active else (self.b, self.a)
        result = active.close(lsp)
        if isinstance(result, CloseDone):
            return result
        if isinstance(result, CloseThis):
            if active.is_empty():
                return CloseReplace(other)
            self._set_active(make_buffer(EmptyBuffer()))
        else:
            self._set_active(result.buffer)
        return CloseDone()

    def focused_child(self) -> Buffer | None:
        return self._active
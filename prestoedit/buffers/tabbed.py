"""A buffer holding several child buffers, one of which is shown."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from prestoedit.buffers.core import (
    Buffer,
    BufferContent,
    CloseDone,
    CloseKind,
    CloseThis,
    make_buffer,
)
from prestoedit.buffers.empty import EmptyBuffer
from prestoedit.drawing import CursorData, Handle
from prestoedit.event import Event
from prestoedit.geometry import Rect, Vector


@dataclass(eq=False)
class TabbedBuffer(BufferContent):
    """Tabs of buffers; only the ``active`` tab is drawn and receives input."""

    tabs: list[Buffer]
    active: int = 0
    char_size: Vector = Vector(1, 1)

    @property
    def _current(self) -> Buffer:
        return self.tabs[self.active]

    def _content_coords(self, coords: Rect) -> Rect:
        return replace(coords, y=coords.y + self.char_size.y, h=coords.h - self.char_size.y)

    def update(self, size: Vector) -> None:
        sub_size = Vector(size.x, size.y - 1)
        for tab in self.tabs:
            tab.update(sub_size)

    def draw_conts(self, handle: Handle, coords: Rect) -> None:
        self._current.draw(handle, self._content_coords(coords))

    def get_cursor(self, size: Vector, char_size: Vector) -> CursorData:
        self.char_size = char_size
        return self._current.get_cursor(size, char_size).offset(Vector(0, char_size.y))

    def event_process(self, ev: Event, lsp: Any, coords: Rect) -> None:
        self._current.event_process(ev, lsp, self._content_coords(coords))

    def get_path(self) -> str:
        return "Tabs>" + self._current.get_path()

    def set_focused(self, child: Buffer) -> bool:
        if self._current.set_focused(child):
            self.tabs[self.active] = child
        return False

    def close(self, lsp: Any) -> CloseKind:
        if self._current.is_empty():
            del self.tabs[self.active]
            if self.active != 0:
                self.active -= 1
            return CloseDone() if self.tabs else CloseThis()

        result = self._current.close(lsp)
        if isinstance(result, CloseDone):
            return result
        if isinstance(result, CloseThis):
            self.tabs[self.active] = make_buffer(EmptyBuffer())
        else:
            self.tabs[self.active] = result.buffer
        return CloseDone()
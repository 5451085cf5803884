"""The buffer tree: a generic buffer wrapper and the content interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from prestoedit.drawing import CursorData, Handle, TextLine
from prestoedit.event import Event
from prestoedit.geometry import Rect, Vector
from prestoedit.highlight import LinkColor


class NavDir(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class CloseDone:
    """The close was handled inside the buffer."""


@dataclass(frozen=True)
class CloseThis:
    """The buffer itself should be closed by its owner."""


@dataclass(frozen=True)
class CloseReplace:
    """The owner should replace the buffer with ``buffer``."""

    buffer: Buffer


CloseKind = CloseDone | CloseThis | CloseReplace


class BufferContent(ABC):
    """The behaviour of one kind of buffer."""

    def setup(self, base: Buffer) -> None:
        """Called once when the content is wrapped in a buffer."""

    def update(self, size: Vector) -> None:
        """Refresh state for the given available size."""

    @abstractmethod
    def draw_conts(self, handle: Handle, coords: Rect) -> None: ...

    @abstractmethod
    def get_cursor(self, size: Vector, char_size: Vector) -> CursorData: ...

    def event_process(self, ev: Event, lsp: Any, coords: Rect) -> None:
        """Handle an input event."""

    def nav(self, direction: NavDir) -> bool:
        """Move focus inside the buffer; False when it cannot."""
        return False

    @abstractmethod
    def get_path(self) -> str: ...

    @abstractmethod
    def set_focused(self, child: Buffer) -> bool: ...

    @abstractmethod
    def close(self, lsp: Any) -> CloseKind: ...

    def setup_lsp(self, lsp: Any) -> None:
        """Register the buffer's document with a language server."""

    def focused_child(self) -> Buffer | None:
        return None

    def is_empty(self) -> bool:
        return False


@dataclass(eq=False)
class Buffer:
    """A buffer: some content plus its variables."""

    content: BufferContent
    vars: dict[str, str] = field(default_factory=dict)

    def set_var(self, name: str, value: str) -> None:
        """Set a variable on the focused descendant, or here."""
        child = self.content.focused_child()
        if child is not None:
            child.set_var(name, value)
        else:
            self.vars[name] = value

    def get_var(self, name: str) -> str | None:
        """Look a variable up on the focused descendant, then here."""
        child = self.content.focused_child()
        if child is not None:
            value = child.get_var(name)
            if value is not None:
                return value
        return self.vars.get(name)

    def update(self, size: Vector) -> None:
        self.content.update(size)

    def draw_conts(self, handle: Handle, coords: Rect) -> None:
        self.content.draw_conts(handle, coords)

    def draw(self, handle: Handle, coords: Rect) -> None:
        self.draw_conts(handle, coords)

    def get_cursor(self, size: Vector, char_size: Vector) -> CursorData:
        return self.content.get_cursor(size, char_size)

    def event_process(self, ev: Event, lsp: Any, coords: Rect) -> None:
        self.content.event_process(ev, lsp, coords)

    def nav(self, direction: NavDir) -> bool:
        return self.content.nav(direction)

    def get_path(self) -> str:
        return self.content.get_path()

    def set_focused(self, child: Buffer) -> bool:
        return self.content.set_focused(child)

    def close(self, lsp: Any) -> CloseKind:
        return self.content.close(lsp)

    def is_empty(self) -> bool:
        return self.content.is_empty()

    def setup_lsp(self, lsp: Any) -> None:
        self.content.setup_lsp(lsp)


def make_buffer(content: BufferContent) -> Buffer:
    """Wrap ``content`` in a buffer and run its setup."""
    buffer = Buffer(content)
    content.setup(buffer)
    return buffer


def create_line(text: str) -> TextLine:
    """A text line drawn entirely in the foreground colour."""
    return TextLine(text, [LinkColor("fg")] * len(text))
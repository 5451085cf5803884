"""Rendering primitives and the interfaces drawers implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping

from prestoedit.event import Event
from prestoedit.geometry import Rect, Vector
from prestoedit.highlight import Color


@dataclass
class Status:
    """Text for the three parts of the status bar."""

    left: str
    center: str
    right: str


class CursorStyle(Enum):
    BLOCK = "block"
    BAR = "bar"


@dataclass(frozen=True)
class HiddenCursor:
    """No cursor is shown."""

    def offset(self, off: Vector) -> HiddenCursor:
        return self


@dataclass(frozen=True)
class ShownCursor:
    """A visible cursor at a pixel position."""

    pos: Vector
    size: Vector
    kind: CursorStyle

    def offset(self, off: Vector) -> ShownCursor:
        """Return this cursor moved by ``off``."""
        return replace(self, pos=self.pos + off)


CursorData = HiddenCursor | ShownCursor


class TextMode(Enum):
    LINES = "lines"
    CENTER = "center"


@dataclass
class TextLine:
    """A line of text with one colour per character."""

    chars: str
    colors: list[Color] = field(default_factory=list)


@dataclass
class ImageLine:
    """An image drawn in place of a text line."""

    path: str
    height: int


Line = TextLine | ImageLine


class Handle(ABC):
    """Drawing operations for one frame."""

    @abstractmethod
    def render_text(self, lines: list[Line], bounds: Rect, mode: TextMode) -> None: ...

    @abstractmethod
    def render_line(self, start: Vector, end: Vector, color: Color) -> None: ...

    @abstractmethod
    def render_rect(self, start: Vector, size: Vector, color: Color) -> None: ...

    @abstractmethod
    def render_cursor(self, cursor: CursorData) -> None: ...

    @abstractmethod
    def render_status(self, status: Status, bounds: Rect) -> None: ...

    @abstractmethod
    def get_char_size(self) -> Vector: ...

    @abstractmethod
    def end(self) -> None: ...


class Drawer(ABC):
    """A display backend that draws frames and produces input events."""

    @abstractmethod
    def init(self) -> None: ...

    @abstractmethod
    def deinit(self) -> None: ...

    @abstractmethod
    def begin(self, colors: Mapping[str, Color]) -> Handle: ...

    @abstractmethod
    def get_size(self) -> Vector: ...

    @abstractmethod
    def get_events(self) -> list[Event]: ...
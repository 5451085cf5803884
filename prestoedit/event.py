"""Input events delivered by a drawer to the editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from prestoedit.geometry import Vector


@dataclass(frozen=True)
class Mods:
    """Modifier keys held during an event."""

    ctrl: bool = False
    alt: bool = False
    shift: bool = False


class Nav(Enum):
    """Non-character keys."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ESCAPE = "escape"
    ENTER = "enter"
    BACKSPACE = "backspace"


@dataclass(frozen=True)
class KeyEvent:
    """A printable character was typed."""

    mods: Mods
    char: str


@dataclass(frozen=True)
class NavEvent:
    """A navigation or control key was pressed."""

    mods: Mods
    nav: Nav


@dataclass(frozen=True)
class SaveEvent:
    """A request to save, optionally to another path."""

    path: str | None = None


@dataclass(frozen=True)
class MouseEvent:
    """A mouse button was pressed at a position."""

    pos: Vector
    button: int


@dataclass(frozen=True)
class QuitEvent:
    """The user asked to leave the editor."""


Event = KeyEvent | NavEvent | SaveEvent | MouseEvent | QuitEvent
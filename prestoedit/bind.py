"""Key binding lookup."""

from __future__ import annotations

from typing import Mapping

from prestoedit.event import Event, KeyEvent, Mods, Nav, NavEvent
from prestoedit.script import Command

_NAV_NAMES = {
    Nav.UP: "UP",
    Nav.DOWN: "DOWN",
    Nav.LEFT: "LEFT",
    Nav.RIGHT: "RIGHT",
    Nav.ESCAPE: "ESC",
    Nav.ENTER: "ENTER",
    Nav.BACKSPACE: "BS",
}


def _prefix(mods: Mods) -> str:
    flags = ((mods.ctrl, "C-"), (mods.alt, "A-"), (mods.shift, "S-"))
    return "".join(part for held, part in flags if held)


def key_name(event: Event) -> str | None:
    """Return the binding name of a key event, such as ``<C-O>``, or None."""
    if isinstance(event, KeyEvent):
        char = event.char.upper() if event.char.isascii() else event.char
        return f"<{_prefix(event.mods)}{char}>"
    if isinstance(event, NavEvent):
        return f"<{_prefix(event.mods)}{_NAV_NAMES[event.nav]}>"
    return None


def check(binds: Mapping[str, Command], event: Event) -> Command | None:
    """Return the command bound to ``event``, if any."""
    name = key_name(event)
    return None if name is None else binds.get(name)
"""Colour values and colour-name resolution."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class InvalidColor:
    """A colour specification that could not be understood."""


@dataclass(frozen=True)
class Base16Color:
    """One of the sixteen terminal palette colours."""

    index: int


@dataclass(frozen=True)
class HexColor:
    """A 24-bit RGB colour."""

    r: int
    g: int
    b: int


@dataclass(frozen=True)
class LinkColor:
    """A reference to another named colour."""

    name: str


Color = InvalidColor | Base16Color | HexColor | LinkColor

_HEX_DIGITS = frozenset(string.hexdigits)


def get_color(colors: Mapping[str, Color], color: Color) -> Color | None:
    """Follow colour links until a concrete colour is reached.

    Returns None when a link names an unknown colour or the links form a cycle.
    """
    seen: set[str] = set()
    while isinstance(color, LinkColor):
        if color.name in seen:
            return None
        seen.add(color.name)
        target = colors.get(color.name)
        if target is None:
            return None
        color = target
    return color


def parse_color(text: str) -> Color:
    """Parse ``%name`` as a link and ``#RRGGBB`` as a hex colour.

    Raises ValueError for a six-character hex colour with non-hex digits.
    """
    if text.startswith("%"):
        return LinkColor(text[1:])
    if text.startswith("#"):
        digits = text[1:]
        if len(digits) != 6:
            return InvalidColor()
        if not set(digits) <= _HEX_DIGITS:
            raise ValueError(f"invalid hex colour: {text!r}")
        value = int(digits, 16)
        return HexColor((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
    return InvalidColor()
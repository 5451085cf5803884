"""A buffer showing collected log messages, newest first."""

from __future__ import annotations

import logging
from typing import Any

from prestoedit.buffers.core import Buffer, BufferContent, CloseKind, CloseThis
from prestoedit.drawing import CursorData, Handle, HiddenCursor, TextLine, TextMode
from prestoedit.geometry import Rect, Vector
from prestoedit.highlight import LinkColor
from prestoedit.logstore import get_lines

_GUTTER = 15


def _level_color(level: int) -> LinkColor:
    if level >= logging.ERROR:
        return LinkColor("log_error")
    if level >= logging.WARNING:
        return LinkColor("log_warn")
    if level >= logging.INFO:
        return LinkColor("log_info")
    return LinkColor("fg")


class LogViewBuffer(BufferContent):
    """Lists log lines with their source in a gutter."""

    def draw_conts(self, handle: Handle, coords: Rect) -> None:
        lines = []
        for entry in reversed(get_lines()):
            text = f"{entry.target:>{_GUTTER}} {entry.text}"
            color = _level_color(entry.level)
            gutter = min(len(text), _GUTTER + 1)
            colors = [LinkColor("lineNumberFg")] * gutter + [color] * (len(text) - gutter)
            lines.append(TextLine(text, colors))

        split_x = int(handle.get_char_size().x * (_GUTTER + 0.5))
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
        return HiddenCursor()

    def get_path(self) -> str:
        return "LogView"

    def set_focused(self, child: Buffer) -> bool:
        return True

    def close(self, lsp: Any) -> CloseKind:
        return CloseThis()
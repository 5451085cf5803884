"""The placeholder buffer shown where nothing is open."""

from __future__ import annotations

from typing import Any

from prestoedit.buffers.core import Buffer, BufferContent, CloseKind, CloseThis, create_line
from prestoedit.drawing import CursorData, Handle, HiddenCursor, ImageLine, TextMode
from prestoedit.geometry import Rect, Vector


class EmptyBuffer(BufferContent):
    """A buffer with no content that any new buffer may replace."""

    def draw_conts(self, handle: Handle, coords: Rect) -> None:
        handle.render_text(
            [
                ImageLine("!!logo", 250),
                create_line("        EMPTY BUFFER        "),
                create_line("Press Ctrl-O to open a file!"),
            ],
            coords,
            TextMode.CENTER,
        )

    def get_cursor(self, size: Vector, char_size: Vector) -> CursorData:
        return HiddenCursor()

    def get_path(self) -> str:
        return "Empty"

    def set_focused(self, child: Buffer) -> bool:
        return True

    def close(self, lsp: Any) -> CloseKind:
        return CloseThis()

    def is_empty(self) -> bool:
        return True
"""A buffer listing the configured colour names as swatches."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from prestoedit.buffers.core import Buffer, BufferContent, CloseKind, CloseThis
from prestoedit.drawing import CursorData, Handle, HiddenCursor, TextLine, TextMode
from prestoedit.geometry import Rect, Vector
from prestoedit.highlight import Color, LinkColor


@dataclass
class HighlightBuffer(BufferContent):
    """Shows every colour name next to a sample drawn in that colour."""

    colors: dict[str, Color] = field(default_factory=dict)

    def draw_conts(self, handle: Handle, coords: Rect) -> None:
        lines = [
            TextLine(
                "XXXXXX " + name,
                [LinkColor(name)] * 6 + [LinkColor("fg")] * (1 + len(name)),
            )
            for name in self.colors
        ]
        handle.render_text(lines, coords, TextMode.LINES)

    def get_cursor(self, size: Vector, char_size: Vector) -> CursorData:
        return HiddenCursor()

    def get_path(self) -> str:
        return "Highlight"

    def set_focused(self, child: Buffer) -> bool:
        return True

    def close(self, lsp: Any) -> CloseKind:
        return CloseThis()
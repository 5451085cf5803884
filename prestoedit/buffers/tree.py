"""A buffer listing the entries of a directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from prestoedit.buffers.core import Buffer, BufferContent, CloseKind, CloseThis
from prestoedit.drawing import CursorData, CursorStyle, Handle, ShownCursor, TextLine, TextMode
from prestoedit.geometry import Rect, Vector
from prestoedit.highlight import LinkColor


@dataclass(eq=False)
class TreeBuffer(BufferContent):
    """Lists the files (``F``) and directories (``D``) inside ``path``."""

    path: Path
    cache: list[tuple[str, str]] = field(default_factory=list)
    cached: bool = False

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def update(self, size: Vector) -> None:
        if not self.cached:
            for entry in self.path.iterdir():
                label = "D" if entry.is_dir() else "F"
                self.cache.append((label, entry.name))
            self.cached = True
        self.cache.sort(key=lambda item: item[0] + item[1])

    def draw_conts(self, handle: Handle, coords: Rect) -> None:
        lines = [
            TextLine(
                f"{label} {name}",
                [LinkColor("label")] * 2 + [LinkColor("fg")] * len(name),
            )
            for label, name in self.cache
        ]
        handle.render_text(lines, coords, TextMode.LINES)

    def get_cursor(self, size: Vector, char_size: Vector) -> CursorData:
        return ShownCursor(Vector(0, 0), char_size, CursorStyle.BLOCK)

    def get_path(self) -> str:
        return f"Tree[{self.path}]"

    def set_focused(self, child: Buffer) -> bool:
        return False

    def close(self, lsp: Any) -> CloseKind:
        return CloseThis()
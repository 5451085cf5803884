"""The editor command language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from prestoedit.highlight import Color, parse_color


class SplitKind(Enum):
    """Ways a pane can be divided."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    TABBED = "tabbed"

    @classmethod
    def parse(cls, text: str) -> SplitKind:
        """Parse a split name; anything unrecognised means tabbed."""
        name = text.lower()
        if name in ("horizontal", "h"):
            return cls.HORIZONTAL
        if name in ("vertical", "v"):
            return cls.VERTICAL
        return cls.TABBED


class OpenKind(Enum):
    """How a file is opened."""

    TEXT = "text"
    HEX = "hex"


@dataclass(frozen=True)
class UnknownCommand:
    text: str


@dataclass(frozen=True)
class IncompleteCommand:
    text: str


@dataclass(frozen=True)
class SplitCommand:
    kind: SplitKind


@dataclass(frozen=True)
class OpenCommand:
    path: str
    kind: OpenKind


@dataclass(frozen=True)
class WriteCommand:
    path: str | None = None


@dataclass(frozen=True)
class SourceCommand:
    path: str


@dataclass(frozen=True)
class BindCommand:
    """Bind a key to a command, or unbind it when ``command`` is None."""

    key: str
    command: Command | None = None


@dataclass(frozen=True)
class HighlightCommand:
    """Show the colour table (no name), remove a colour (no colour) or set one."""

    name: str | None = None
    color: Color | None = None


@dataclass(frozen=True)
class SetCommand:
    """Set a variable, or report it when ``value`` is None."""

    name: str
    value: str | None = None


@dataclass(frozen=True)
class AutoCommand:
    """Run ``command`` whenever ``name`` is set to ``value``."""

    name: str
    value: str
    command: str


@dataclass(frozen=True)
class LogCommand:
    pass


@dataclass(frozen=True)
class RunCommand:
    pass


@dataclass(frozen=True)
class CloseCommand:
    pass


@dataclass(frozen=True)
class ExitCommand:
    pass


Command = (
    UnknownCommand
    | IncompleteCommand
    | SplitCommand
    | OpenCommand
    | WriteCommand
    | SourceCommand
    | BindCommand
    | HighlightCommand
    | SetCommand
    | AutoCommand
    | LogCommand
    | RunCommand
    | CloseCommand
    | ExitCommand
)


def parse_command(text: str) -> Command:
    """Parse one line of the command language."""
    words = text.split()
    if not words:
        return UnknownCommand(text)
    head, args = words[0], words[1:]
    first = args[0] if args else None
    rest = " ".join(args[1:])

    if head in ("source", "src"):
        return SourceCommand(first) if first is not None else IncompleteCommand(text)
    if head in ("split", "s"):
        if first is None:
            return IncompleteCommand(text)
        return SplitCommand(SplitKind.parse(first))
    if head in ("openhex", "oh"):
        if first is None:
            return IncompleteCommand(text)
        return OpenCommand(first, OpenKind.HEX)
    if head in ("open", "o"):
        if first is None:
            return IncompleteCommand(text)
        return OpenCommand(first, OpenKind.TEXT)
    if head in ("write", "w"):
        return WriteCommand(first)
    if head in ("bind", "b"):
        if first is None:
            return IncompleteCommand(text)
        return BindCommand(first, parse_command(rest) if rest else None)
    if head in ("auto", "a"):
        if len(args) < 2:
            return IncompleteCommand(text)
        return AutoCommand(args[0], args[1], " ".join(args[2:]))
    if head == "set":
        if first is None:
            return IncompleteCommand(text)
        return SetCommand(first, rest or None)
    if head in ("quit", "q"):
        return CloseCommand()
    if head in ("exit", "e"):
        return ExitCommand()
    if head == "log":
        return LogCommand()
    if head in ("highlight", "hi"):
        if first is None:
            return HighlightCommand()
        return HighlightCommand(first, parse_color(rest) if rest else None)
    return UnknownCommand(text)
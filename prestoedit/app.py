"""The editor: its state, the command interpreter and the main loop."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path

import platformdirs

from prestoedit.bind import check
from prestoedit.buffers.core import Buffer, CloseReplace, CloseThis, make_buffer
from prestoedit.buffers.empty import EmptyBuffer
from prestoedit.buffers.hexview import HexBuffer
from prestoedit.buffers.highlights import HighlightBuffer
from prestoedit.buffers.logview import LogViewBuffer
from prestoedit.buffers.split import SplitBuffer, SplitDir
from prestoedit.buffers.tabbed import TabbedBuffer
from prestoedit.buffers.text import FileBuffer
from prestoedit.drawing import Drawer, Handle, Status
from prestoedit.event import KeyEvent, Mods, Nav, NavEvent, QuitEvent, SaveEvent
from prestoedit.geometry import Rect
from prestoedit.highlight import Color
from prestoedit.logstore import setup_logger
from prestoedit.lsp import LSPClient
from prestoedit.script import (
    AutoCommand,
    BindCommand,
    CloseCommand,
    Command,
    HighlightCommand,
    IncompleteCommand,
    LogCommand,
    OpenCommand,
    OpenKind,
    RunCommand,
    SetCommand,
    SourceCommand,
    SplitCommand,
    SplitKind,
    UnknownCommand,
    WriteCommand,
    parse_command,
)
from prestoedit.terminal import TerminalDrawer

logger = logging.getLogger("prestoedit")

DEFAULT_CONFIG = "// prestoedit configuration\n"

_SPLIT_DIRS = {
    SplitKind.HORIZONTAL: SplitDir.HORIZONTAL,
    SplitKind.VERTICAL: SplitDir.VERTICAL,
}


@dataclass
class EditorStatus:
    """What the status bar shows: the buffer path or an active prompt."""

    path: str = ""
    prompt: str | None = None
    input: str = ""
    ft: str = ""

    def draw(self, handle: Handle, coords: Rect) -> None:
        left = self.path if self.prompt is None else f"{self.prompt}:{self.input}"
        handle.render_status(Status(left, "", self.ft + " | PrestoEdit"), coords)


class Editor:
    """The editor state together with the command interpreter."""

    def __init__(self, drawer: Drawer, lsp: LSPClient | None = None) -> None:
        self.drawer = drawer
        self.lsp = lsp if lsp is not None else LSPClient()
        self.buffer: Buffer = make_buffer(EmptyBuffer())
        self.status = EditorStatus()
        self.binds: dict[str, Command] = {}
        self.colors: dict[str, Color] = {}
        self.auto: dict[tuple[str, str], str] = {}

    def _screen(self) -> Rect:
        size = self.drawer.get_size()
        return Rect(0, 0, size.x, size.y)

    def prompt(self, label: str, default: str) -> str | None:
        """Read a line of input in the status bar; None if it was cancelled."""
        self.status.prompt = label
        self.status.input = default
        self.render()

        plain = Mods()
        done = False
        while not done:
            for ev in self.drawer.get_events():
                if isinstance(ev, NavEvent) and ev.mods == plain:
                    if ev.nav is Nav.ESCAPE:
                        self.status.prompt = None
                        return None
                    if ev.nav is Nav.ENTER:
                        done = True
                    elif ev.nav is Nav.BACKSPACE:
                        self.status.input = self.status.input[:-1]
                elif isinstance(ev, KeyEvent) and ev.mods == plain:
                    self.status.input += ev.char
                elif isinstance(ev, QuitEvent):
                    done = True
            self.render()

        self.status.prompt = None
        self.render()
        return self.status.input

    def render(self) -> None:
        """Draw one frame: the buffer tree, the cursor and the status bar."""
        size = self.drawer.get_size()
        self.buffer.update(size)

        handle = self.drawer.begin(self.colors)
        self.buffer.draw(handle, Rect(0, 0, size.x, size.y))
        handle.render_cursor(self.buffer.get_cursor(size, handle.get_char_size()))

        self.status.path = self.buffer.get_path()
        self.status.ft = repr(self.buffer.get_var("filetype"))
        self.status.draw(handle, Rect(0, size.y - 1, size.x, 1))
        handle.end()

    def _focus(self, buffer: Buffer, message: str | None = None) -> None:
        if self.buffer.set_focused(buffer):
            self.buffer = buffer
            if message:
                logger.info("%s", message)

    def _run_prompted(self, default: str) -> None:
        text = self.prompt("", default)
        if text is not None:
            self.run_command(parse_command(text))

    def _source(self, path: str) -> None:
        if path.startswith("~"):
            path = str(Path.home()) + path[1:]
        logger.info("source config %s", path)
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
        for line in text.splitlines():
            self.run_command(parse_command(line.split("//", 1)[0].strip()))

    def _open(self, command: OpenCommand) -> None:
        path = command.path
        if command.kind is OpenKind.HEX:
            self._focus(make_buffer(HexBuffer(filename=path)), f"Opened hex {path}")
            return
        buffer = make_buffer(FileBuffer(filename=path))
        try:
            with open(path, encoding="utf-8") as handle:
                content = handle.read()
        except (OSError, UnicodeDecodeError):
            content = None
        if content is not None:
            self.lsp.open_file(path, content)
        self._focus(buffer, f"Opened file {path}")

    def _split(self, kind: SplitKind) -> None:
        if kind is SplitKind.TABBED:
            self._focus(TabbedBuffer([make_buffer(EmptyBuffer())]).wrap(), "Split tabbed")
            return
        direction = _SPLIT_DIRS[kind]
        split = SplitBuffer(make_buffer(EmptyBuffer()), make_buffer(EmptyBuffer()), direction)
        self._focus(make_buffer(split), f"Split pane {direction.value}")

    def _set(self, command: SetCommand) -> None:
        name, value = command.name, command.value
        if value is None:
            logger.info("vale %s is %r", name, self.buffer.get_var(name))
            return
        follow_up = self.auto.get((name, value))
        if follow_up is not None:
            self.run_command(parse_command(follow_up))
        if name == "lsp":
            logger.info("set lsp to %s", value)
            self.lsp.spawn(value)
            self.buffer.setup_lsp(self.lsp)
        self.buffer.set_var(name, value)

    def run_command(self, command: Command) -> None:
        """Carry out one command."""
        if isinstance(command, UnknownCommand):
            if command.text:
                logger.warning("unknown command: %s", command.text)
        elif isinstance(command, IncompleteCommand):
            self._run_prompted(command.text + " ")
        elif isinstance(command, SplitCommand):
            self._split(command.kind)
        elif isinstance(command, OpenCommand):
            self._open(command)
        elif isinstance(command, WriteCommand):
            self.buffer.event_process(SaveEvent(command.path), self.lsp, self._screen())
        elif isinstance(command, SourceCommand):
            self._source(command.path)
        elif isinstance(command, RunCommand):
            self._run_prompted("")
        elif isinstance(command, CloseCommand):
            result = self.buffer.close(self.lsp)
            if isinstance(result, CloseReplace):
                self.buffer = result.buffer
            elif isinstance(result, CloseThis):
                logger.info("Closed buffer %s", self.buffer.get_path())
                self.buffer = make_buffer(EmptyBuffer())
        elif isinstance(command, LogCommand):
            self._focus(make_buffer(LogViewBuffer()), "Opened log")
        elif isinstance(command, HighlightCommand):
            if command.name is None:
                self._focus(make_buffer(HighlightBuffer(colors=dict(self.colors))))
            elif command.color is None:
                self.colors.pop(command.name, None)
            else:
                self.colors[command.name] = command.color
        elif isinstance(command, BindCommand):
            if command.command is None:
                self.binds.pop(command.key, None)
            else:
                self.binds[command.key] = command.command
        elif isinstance(command, SetCommand):
            self._set(command)
        elif isinstance(command, AutoCommand):
            self.auto[(command.name, command.value)] = command.command
        else:
            logger.warning("todo: %r", command)

    def run(self) -> None:
        """Process input until the drawer reports a quit."""
        self.render()
        done = False
        while not done:
            for ev in self.drawer.get_events():
                if isinstance(ev, QuitEvent):
                    done = True
                    continue
                command = check(self.binds, ev)
                if command is not None:
                    self.run_command(command)
                else:
                    self.buffer.event_process(ev, self.lsp, self._screen())
            self.render()
            self.lsp.update()


def _tabbed_wrap(self: TabbedBuffer) -> Buffer:
    return make_buffer(self)


TabbedBuffer.wrap = _tabbed_wrap  # type: ignore[attr-defined]


def config_file_path() -> Path:
    """The path of the user's startup configuration file."""
    return Path(platformdirs.user_config_dir("prestoedit", appauthor=False)) / "init.pe"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="prestoedit", description="A modal text editor.")
    parser.add_argument("-c", "--cmd", action="store_true", help="run in the terminal")
    parser.parse_args(argv)

    setup_logger()

    config_file = config_file_path()
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        if not config_file.exists():
            config_file.write_text(DEFAULT_CONFIG, encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot prepare config %s: %s", config_file, exc)

    drawer = TerminalDrawer()
    drawer.init()
    try:
        with LSPClient() as lsp:
            editor = Editor(drawer, lsp)
            editor.run_command(SourceCommand(str(config_file)))
            editor.binds["<S-:>"] = RunCommand()
            editor.run()
    finally:
        drawer.deinit()
    return 0
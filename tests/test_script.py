import pytest

from prestoedit.highlight import HexColor, InvalidColor, LinkColor
from prestoedit.script import (
    AutoCommand,
    BindCommand,
    CloseCommand,
    ExitCommand,
    HighlightCommand,
    IncompleteCommand,
    LogCommand,
    OpenCommand,
    OpenKind,
    SetCommand,
    SourceCommand,
    SplitCommand,
    SplitKind,
    UnknownCommand,
    WriteCommand,
    parse_command,
)


@pytest.mark.parametrize("word", ["source", "src"])
def test_source(word):
    assert parse_command(f"{word} ~/init.pe") == SourceCommand("~/init.pe")


@pytest.mark.parametrize("text", ["source", "split", "open", "o", "oh", "bind", "set", "auto x"])
def test_missing_argument_is_incomplete(text):
    assert parse_command(text) == IncompleteCommand(text)


@pytest.mark.parametrize(
    "text, kind",
    [
        ("split h", SplitKind.HORIZONTAL),
        ("s Horizontal", SplitKind.HORIZONTAL),
        ("split v", SplitKind.VERTICAL),
        ("s VERTICAL", SplitKind.VERTICAL),
        ("split tabs", SplitKind.TABBED),
    ],
)
def test_split(text, kind):
    assert parse_command(text) == SplitCommand(kind)


def test_split_kind_parse_is_case_insensitive():
    assert SplitKind.parse("H") is SplitKind.HORIZONTAL
    assert SplitKind.parse("V") is SplitKind.VERTICAL


def test_open_variants():
    assert parse_command("open main.rs") == OpenCommand("main.rs", OpenKind.TEXT)
    assert parse_command("oh data.bin") == OpenCommand("data.bin", OpenKind.HEX)
    assert parse_command("openhex data.bin") == OpenCommand("data.bin", OpenKind.HEX)


def test_write():
    assert parse_command("w") == WriteCommand(None)
    assert parse_command("write out.txt") == WriteCommand("out.txt")


def test_bind_nested_command():
    assert parse_command("bind <C-S> w") == BindCommand("<C-S>", WriteCommand(None))
    assert parse_command("b <C-O> open") == BindCommand("<C-O>", IncompleteCommand("open"))


def test_unbind():
    assert parse_command("bind <C-O>") == BindCommand("<C-O>", None)


def test_auto():
    assert parse_command("auto filetype rs set lsp rust-analyzer") == AutoCommand(
        "filetype", "rs", "set lsp rust-analyzer"
    )
    assert parse_command("a x y") == AutoCommand("x", "y", "")


def test_set():
    assert parse_command("set lsp") == SetCommand("lsp", None)
    assert parse_command("set tab  4   wide") == SetCommand("tab", "4 wide")


def test_simple_commands():
    assert parse_command("q") == CloseCommand()
    assert parse_command("quit") == CloseCommand()
    assert parse_command("e") == ExitCommand()
    assert parse_command("log") == LogCommand()


def test_highlight_forms():
    assert parse_command("hi") == HighlightCommand()
    assert parse_command("hi fg") == HighlightCommand("fg", None)
    assert parse_command("highlight fg #FF00FF") == HighlightCommand("fg", HexColor(255, 0, 255))
    assert parse_command("hi split %fg") == HighlightCommand("split", LinkColor("fg"))
    assert parse_command("hi fg #12") == HighlightCommand("fg", InvalidColor())


def test_highlight_bad_hex_raises():
    with pytest.raises(ValueError):
        parse_command("hi fg #GGGGGG")


def test_unknown():
    assert parse_command("") == UnknownCommand("")
    assert parse_command("frobnicate 1") == UnknownCommand("frobnicate 1")
import dataclasses

import pytest

from prestoedit.event import (
    KeyEvent,
    Mods,
    MouseEvent,
    Nav,
    NavEvent,
    QuitEvent,
    SaveEvent,
)
from prestoedit.geometry import Vector


def test_mods_default_to_none_held():
    assert Mods() == Mods(ctrl=False, alt=False, shift=False)


def test_key_events_compare_by_value():
    assert KeyEvent(Mods(), "a") == KeyEvent(Mods(), "a")
    assert (KeyEvent(Mods(ctrl=True), "a") == KeyEvent(Mods(), "a")) is False


def test_duplicate_events_collapse_in_set():
    events = {KeyEvent(Mods(), "x"), KeyEvent(Mods(), "x"), NavEvent(Mods(), Nav.UP)}
    assert len(events) == 2


def test_events_are_frozen():
    ev = NavEvent(Mods(), Nav.ENTER)
    with pytest.raises(dataclasses.FrozenInstanceError):
        ev.nav = Nav.ESCAPE
    assert ev.nav == Nav.ENTER


def test_save_event_default_path():
    assert SaveEvent().path is None
    assert SaveEvent("out.txt").path == "out.txt"


def test_mouse_event_holds_position():
    ev = MouseEvent(Vector(3, 9), 1)
    assert ev.pos == Vector(3, 9)
    assert ev.button == 1


def test_quit_events_equal():
    assert len({QuitEvent(), QuitEvent()}) == 1
    assert (QuitEvent() == SaveEvent()) is False
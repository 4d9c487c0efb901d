"""Tests for text sources - snapshot diffing and the keyboard hook handler."""
from types import SimpleNamespace
from unittest.mock import patch

import keyboard
import pytest

from velocity_trigger.config import Config
from velocity_trigger.handlers import TextChangeTracker
from velocity_trigger.handlers.keystroke import KeystrokeHandler


def key(name, event_type=keyboard.KEY_DOWN):
    return SimpleNamespace(name=name, event_type=event_type)


class TestTextChangeTracker:
    def test_appended_chars_are_ingested(self, engine):
        tracker = TextChangeTracker(engine)
        assert tracker.update("abc") == 3
        assert tracker.update("abcd") == 1
        assert [c for c, _ in engine.state.history] == ["a", "b", "c", "d"]

    def test_shrinking_or_same_length_ingests_nothing(self, engine):
        tracker = TextChangeTracker(engine)
        tracker.update("hello")
        assert tracker.update("hell") == 0
        assert tracker.update("help") == 0
        assert tracker.get_text() == "help"
        assert tracker.update("helps") == 1
        assert engine.state.history[-1][0] == "s"

    def test_inactive_engine_only_records_text(self, make_engine):
        engine = make_engine(activate=False)
        tracker = TextChangeTracker(engine)
        assert tracker.update("some text") == 0
        assert tracker.get_text() == "some text"

    def test_composing_chars_not_counted(self, engine):
        tracker = TextChangeTracker(engine)
        engine.set_composing(True)
        assert tracker.update("ni") == 0
        assert tracker.get_text() == "ni"

    def test_none_snapshot(self, engine):
        tracker = TextChangeTracker(engine)
        tracker.update("abc")
        assert tracker.update(None) == 0
        assert tracker.get_text() == ""


@pytest.fixture
def ctrl_released():
    with patch("velocity_trigger.handlers.keystroke.keyboard.is_pressed", return_value=False) as m:
        yield m


class TestKeystrokeHandler:
    def test_chars_build_buffer_and_ingest(self, engine, ctrl_released):
        handler = KeystrokeHandler(engine)
        for name in ["h", "i", "space", "tab", "enter"]:
            handler.on_key(key(name))
        assert handler.get_text() == "hi \t\n"
        assert len(engine.state.history) == 5

    def test_backspace_trims_buffer_only(self, engine, ctrl_released):
        handler = KeystrokeHandler(engine)
        handler.on_key(key("a"))
        handler.on_key(key("b"))
        handler.on_key(key("backspace"))
        assert handler.get_text() == "a"
        assert len(engine.state.history) == 2

    def test_key_up_and_named_keys_ignored(self, engine, ctrl_released):
        handler = KeystrokeHandler(engine)
        handler.on_key(key("a", event_type=keyboard.KEY_UP))
        handler.on_key(key("shift"))
        handler.on_key(key("left"))
        assert handler.get_text() == ""

    def test_ctrl_chords_ignored(self, engine):
        handler = KeystrokeHandler(engine)
        with patch("velocity_trigger.handlers.keystroke.keyboard.is_pressed", return_value=True):
            handler.on_key(key("s"))
        assert handler.get_text() == ""

    def test_buffer_capped(self, engine, ctrl_released):
        handler = KeystrokeHandler(engine, Config.override(max_field_buffer=5))
        for name in "abcdefg":
            handler.on_key(key(name))
        assert handler.get_text() == "cdefg"

    def test_reset(self, engine, ctrl_released):
        handler = KeystrokeHandler(engine)
        handler.on_key(key("a"))
        handler.reset()
        assert handler.get_text() == ""

    def test_install_hooks_keyboard_and_hotkey(self, engine):
        handler = KeystrokeHandler(engine)
        with patch("velocity_trigger.handlers.keystroke.keyboard.hook") as hook, \
                patch("velocity_trigger.handlers.keystroke.keyboard.add_hotkey") as add_hotkey:
            handler.install()
        hook.assert_called_once_with(handler.on_key)
        add_hotkey.assert_called_once_with(Config.MANUAL_TRIGGER_HOTKEY, engine.force_trigger)

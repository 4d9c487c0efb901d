"""Pytest fixtures and shared setup."""
import os
import sys

import pytest

# Ensure project root is on path
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from velocity_trigger.config import Config  # noqa: E402
from velocity_trigger.engine import VelocityEngine  # noqa: E402
from velocity_trigger.timers import ManualScheduler  # noqa: E402


class Field:
    """Stand-in for an editable text field."""

    def __init__(self, text=""):
        self.text = text

    def get_text(self):
        return self.text


def type_text(engine, scheduler, field, text, interval=0.2):
    """Append `text` to the field one char at a time, ingesting each."""
    for char in text:
        field.text += char
        engine.ingest(char)
        scheduler.advance(interval)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def field():
    return Field()


@pytest.fixture
def fired():
    return []


@pytest.fixture
def states():
    return []


@pytest.fixture
def make_engine(scheduler, field, fired, states):
    """Build an activated engine on the simulated clock."""
    def _make(config=Config, activate=True):
        engine = VelocityEngine(config, scheduler=scheduler)
        engine.on_trigger(fired.append)
        engine.on_state_change(lambda state, value: states.append((state, value)))
        if activate:
            engine.activate(field.get_text)
        return engine
    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()

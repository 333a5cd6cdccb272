"""
Shared pytest fixtures for cmdfeeder tests.

This module provides common fixtures including:
- Feeder instances with and without a data filter
- A recorder that captures feeder notifications in order
- FastAPI test client utilities
"""

import os
import sys
from typing import Any, List, Tuple

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cmdfeeder.modules.config import reset_config
from cmdfeeder.modules.feeder import Feeder, FeederEvent


class EventRecorder:
    """
    Record every notification raised by a feeder.

    Usage:
        def test_hold(feeder, recorder):
            recorder.attach(feeder)
            feeder.hold("door open")
            assert recorder.names() == ["hold", "change"]
    """

    def __init__(self):
        self.events: List[Tuple[str, Tuple[Any, ...]]] = []

    def attach(self, feeder: Feeder) -> "EventRecorder":
        for event in FeederEvent:
            feeder.subscribe(event, self._handler(event))
        return self

    def _handler(self, event: FeederEvent):
        def handle(*args):
            self.events.append((event.value, args))

        return handle

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def data(self) -> List[Tuple[Any, ...]]:
        return [args for name, args in self.events if name == FeederEvent.DATA.value]

    def clear(self) -> None:
        self.events.clear()


def skip_blank(command, context):
    """Filter that rejects empty strings."""
    return command or ""


@pytest.fixture
def feeder():
    """Feeder without a data filter."""
    return Feeder()


@pytest.fixture
def filtered_feeder():
    """Feeder that skips blank lines."""
    return Feeder(data_filter=skip_blank)


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Make every test read configuration from a clean environment."""
    for name in (
        "API_HOST",
        "API_PORT",
        "LOG_LEVEL",
        "DEBUG",
        "FEEDER_STRIP_COMMENTS",
        "FEEDER_MAX_SENT_HISTORY",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()

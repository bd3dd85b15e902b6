"""Shared pytest fixtures for PomoTimer tests."""

import os
import sys
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pomotimer.database.db import configure_engine, init_db
from pomotimer.database.store import MemoryKeyValueStore
from pomotimer.history.store import HistoryStore
from pomotimer.timer.engine import TimerEngine

from helpers import FakeClock, RecordingSoundPlayer


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
def sound_player():
    return RecordingSoundPlayer()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(qapp, kv_store, sound_player, clock):
    """Fresh TimerEngine with default durations and recorded sounds."""
    return TimerEngine(
        parent=None,
        history=HistoryStore(kv_store),
        sound_player=sound_player,
        clock=clock,
    )

"""Shared pytest fixtures for SpeechTimer tests."""

import sys
import pytest

from PyQt6.QtWidgets import QApplication

from speechtimer.database.db import configure_engine, init_db
from speechtimer.timer.config import ThresholdConfig
from speechtimer.timer.engine import TimerSession
from speechtimer.timer.scheduling import ManualTickScheduler, VirtualClock


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
def clock():
    return VirtualClock()


@pytest.fixture
def scheduler():
    return ManualTickScheduler()


@pytest.fixture
def table_topics():
    """The 60/90/120/150 ladder used throughout the tests."""
    return ThresholdConfig(
        name="Table Topics",
        green_time=60,
        orange_time=90,
        red_time=120,
        finish_time=150,
    )


@pytest.fixture
def session(qapp, clock, scheduler, table_topics):
    """TimerSession on a virtual clock, configured with ``table_topics``."""
    s = TimerSession(parent=None, clock=clock, scheduler=scheduler)
    s.set_config(table_topics)
    return s


@pytest.fixture
def open_ended(qapp, clock, scheduler):
    """TimerSession whose config has no finish time."""
    s = TimerSession(parent=None, clock=clock, scheduler=scheduler)
    s.set_config(ThresholdConfig(name="Open", green_time=60, orange_time=90, red_time=120))
    return s

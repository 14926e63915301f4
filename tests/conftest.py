"""Shared fixtures for tests."""

from __future__ import annotations

import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Generator

import pytest

# Set up test database before importing storage
_test_db_fd, _test_db_path = tempfile.mkstemp(suffix=".db")
os.environ["SPRINT_DB"] = _test_db_path


@pytest.fixture(scope="session", autouse=True)
def setup_test_db() -> Generator[Path, None, None]:
    """Set up a test database for the entire test session."""
    import storage

    storage.DB_PATH = Path(_test_db_path)
    storage.init_db()

    yield Path(_test_db_path)

    os.close(_test_db_fd)
    os.unlink(_test_db_path)


@pytest.fixture
def clean_db(setup_test_db: Path) -> Generator[None, None, None]:
    """Remove stored settings before each test."""
    import storage

    storage.DB_PATH = setup_test_db
    conn = storage.get_connection()
    conn.execute("DELETE FROM settings")
    conn.commit()
    conn.close()

    yield


@pytest.fixture
def two_week_config():
    """Two-week Mon-Fri sprints starting Monday 2026-01-05."""
    from models import Configuration

    return Configuration(epoch=date(2026, 1, 5), sprint_length_weeks=2, working_weekdays=frozenset({1, 2, 3, 4, 5}))


@pytest.fixture
def four_day_config():
    """One-week sprints with a Mon-Thu working week."""
    from models import Configuration

    return Configuration(epoch=date(2026, 1, 5), sprint_length_weeks=1, working_weekdays=frozenset({1, 2, 3, 4}))


@pytest.fixture
def wednesday_config():
    """Two-week sprints where only Wednesday is a working day."""
    from models import Configuration

    return Configuration(epoch=date(2026, 1, 5), sprint_length_weeks=2, working_weekdays=frozenset({3}))


@pytest.fixture
def display_options():
    from models import DisplayOptions

    return DisplayOptions()

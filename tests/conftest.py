"""Pytest configuration and shared fixtures for Momentum tests.

Provides an isolated SQLite database per test, a habit store on top of it,
and small factories for habits so tests never touch the real data directory.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from momentum.config import BaseConfig
from momentum.infra.database import create_session_factory, init_database
from momentum.infra.repositories import SQLModelHabitStore
from momentum.models import Habit
from momentum.services.tracker import HabitTracker

# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path, monkeypatch) -> BaseConfig:
    """Config rooted in a temporary data directory."""

    monkeypatch.setenv("MOMENTUM_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("MOMENTUM_DATABASE_URL", raising=False)
    monkeypatch.delenv("MOMENTUM_EXPORT_DIR", raising=False)
    monkeypatch.setenv("MOMENTUM_DEV_MODE", "true")
    return BaseConfig()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to the test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    init_database(engine)

    yield engine

    SQLModel.metadata.drop_all(engine)
    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories receive in the app."""
    return create_session_factory(db_engine)


@pytest.fixture
def store(session_factory) -> SQLModelHabitStore:
    return SQLModelHabitStore(session_factory)


@pytest.fixture
def tracker(store) -> HabitTracker:
    """Tracker with no default habits and a deterministic id clock."""

    ticks = iter(range(1_700_000_000_000, 1_700_000_100_000))
    return HabitTracker(store, clock=lambda: next(ticks))


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory():
    """Factory for building in-memory habits.

    Returns:
        Callable: Function that creates Habit instances from completed day strings
    """

    counter = {"next": 1}

    def _create_habit(name: str = "Test Habit", *days: str, habit_id: int | None = None) -> Habit:
        """Create a habit completed on each of ``days``.

        Args:
            name: Display name
            days: ``YYYY-MM-DD`` strings to mark as completed
            habit_id: Explicit id; sequential ids are used otherwise

        Returns:
            Habit: New habit instance
        """
        if habit_id is None:
            habit_id = counter["next"]
            counter["next"] += 1
        return Habit(id=habit_id, name=name, dates={day: True for day in days})

    return _create_habit

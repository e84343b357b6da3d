"""
Shared test fixtures for the Smart Garden test suite.

Provides:
- In-memory SQLite database with all tables created
- Repository instances wired to the test database
- Mock repositories for service-level tests
- A seeded random source and a fixed clock
- A Flask app backed by a temporary database file

Usage:
    def test_example(metric_repo, fixed_now):
        row = metric_repo.insert_reading(1, "temperature", 21.5, fixed_now)
        assert row["reading_id"] is not None
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from app import create_app
from infrastructure.database.repositories.metrics import MetricRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler

# ---------------------------------------------------------------------------
# Logging: keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("infrastructure").setLevel(logging.WARNING)
logging.getLogger("app").setLevel(logging.WARNING)


# ========================== Database Fixtures ==============================


@pytest.fixture()
def db_handler():
    """In-memory SQLite database with all tables created.

    Each test gets a fresh database: no cross-test contamination.
    """
    handler = SQLiteDatabaseHandler(":memory:")
    handler.create_tables()
    yield handler
    handler.close()


@pytest.fixture()
def metric_repo(db_handler):
    """MetricRepository backed by the in-memory DB."""
    return MetricRepository(db_handler)


# ========================== Mock Fixtures ==================================


@pytest.fixture()
def mock_metric_repo():
    """Mock MetricRepository with an empty store by default."""
    repo = Mock(spec=MetricRepository)
    repo.query_readings.return_value = []
    repo.query_aggregates.return_value = {}
    return repo


@pytest.fixture()
def seeded_rng():
    return random.Random(1234)


@pytest.fixture()
def fixed_now():
    """Request time used by clock-injected services."""
    return datetime(2026, 5, 15, 12, 0, tzinfo=timezone.utc)


# ========================== Flask Fixtures =================================


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("GARDEN_SECRET_KEY", "test-secret")
    app = create_app({"database_path": str(tmp_path / "test.db"), "log_path": None})
    app.config["TESTING"] = True
    yield app
    app.config["CONTAINER"].shutdown()


@pytest.fixture()
def client(app):
    return app.test_client()

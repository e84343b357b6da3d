"""
Tests for MetricRepository against the in-memory SQLite store.
"""

import sqlite3
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler


def _at(hours_ago, now):
    return now - timedelta(hours=hours_ago)


class TestInsertReading:
    def test_returns_stored_row(self, metric_repo, fixed_now):
        row = metric_repo.insert_reading(1, "temperature", 21.5, fixed_now)

        assert row["reading_id"] is not None
        assert row["metric_type"] == "temperature"
        assert row["value"] == 21.5
        assert row["recorded_at"] == "2026-05-15T12:00:00"

    def test_timestamps_are_stored_as_utc(self, metric_repo, db_handler):
        local = datetime(2026, 5, 15, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        metric_repo.insert_reading(1, "humidity", 60, local)

        with db_handler.connection() as conn:
            stored = conn.execute("SELECT recorded_at FROM MetricReadings").fetchone()[0]
        assert stored == "2026-05-15T12:00:00"

    def test_unknown_metric_violates_constraint(self, metric_repo, fixed_now):
        with pytest.raises(sqlite3.IntegrityError):
            metric_repo.insert_reading(1, "ph", 6.5, fixed_now)


class TestQueryReadings:
    def test_filters_by_window_garden_and_metric(self, metric_repo, fixed_now):
        # Arrange
        metric_repo.insert_reading(1, "temperature", 18.0, _at(24 * 10, fixed_now))  # outside week
        metric_repo.insert_reading(1, "temperature", 22.0, _at(2, fixed_now))
        metric_repo.insert_reading(1, "temperature", 20.0, _at(30, fixed_now))
        metric_repo.insert_reading(1, "humidity", 55.0, _at(1, fixed_now))
        metric_repo.insert_reading(2, "temperature", 30.0, _at(1, fixed_now))

        # Act
        since = fixed_now - timedelta(days=7)
        all_metrics = metric_repo.query_readings(1, since)
        temperature = metric_repo.query_readings(1, since, "temperature")

        # Assert
        assert [r["value"] for r in all_metrics] == [20.0, 22.0, 55.0]
        assert [r["value"] for r in temperature] == [20.0, 22.0]
        assert all(r["garden_id"] == 1 for r in all_metrics)

    def test_empty_window(self, metric_repo, fixed_now):
        assert metric_repo.query_readings(1, fixed_now) == []


class TestQueryAggregates:
    def test_per_metric_aggregates(self, metric_repo, fixed_now):
        for value in (20.0, 22.0, 27.0):
            metric_repo.insert_reading(1, "temperature", value, _at(3, fixed_now))
        metric_repo.insert_reading(1, "co2_level", 410.0, _at(3, fixed_now))

        aggregates = metric_repo.query_aggregates(1, fixed_now - timedelta(days=7))

        assert aggregates["temperature"] == {"avg": 23.0, "min": 20.0, "max": 27.0, "count": 3}
        assert aggregates["co2_level"]["count"] == 1

    def test_no_rows_is_empty_mapping(self, metric_repo, fixed_now):
        assert metric_repo.query_aggregates(99, fixed_now - timedelta(days=90)) == {}


def test_ping(db_handler):
    assert db_handler.ping() is True


class TestConnections:
    def test_in_memory_database_is_shared_across_threads(self, db_handler, metric_repo, fixed_now):
        def insert(metric):
            try:
                return metric_repo.insert_reading(1, metric, 1.0, fixed_now)
            finally:
                metric_repo.release_connection()

        with ThreadPoolExecutor(max_workers=2) as pool:
            rows = list(pool.map(insert, ["temperature", "humidity"]))

        assert all(row["reading_id"] for row in rows)
        assert len(metric_repo.query_readings(1, fixed_now)) == 2

    def test_close_db_keeps_in_memory_data(self, db_handler, metric_repo, fixed_now):
        metric_repo.insert_reading(1, "temperature", 20.0, fixed_now)

        db_handler.close_db()

        assert len(metric_repo.query_readings(1, fixed_now)) == 1

    def test_file_database_releases_worker_connection(self, tmp_path):
        handler = SQLiteDatabaseHandler(str(tmp_path / "garden.db"))
        handler.create_tables()

        def open_and_release():
            conn = handler.get_db()
            handler.close_db()
            return conn

        with ThreadPoolExecutor(max_workers=1) as pool:
            worker_conn = pool.submit(open_and_release).result()

        assert worker_conn is not handler.get_db()
        with pytest.raises(sqlite3.ProgrammingError):
            worker_conn.execute("SELECT 1")
        handler.close()

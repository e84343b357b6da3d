"""
Unit tests for AnalyticsService.

Tests the analytics service methods including:
- Daily bucketing and mean aggregation of raw readings
- Synthetic fallback for empty windows (and never for failing stores)
- Period statistics rounding and fallback table
- Concurrent metric writes with partial/total failure reporting
"""

import sqlite3
from datetime import date, datetime, timedelta, timezone

import pytest

from app.domain.exceptions import PartialWriteError, StoreUnavailableError, ValidationError
from app.enums import AnalyticsPeriod, MetricType
from app.services.application.analytics_service import AnalyticsService, parse_metric
from app.services.utilities.synthetic_series import SyntheticSeriesGenerator


# ==================== Fixtures ====================

@pytest.fixture
def analytics_service(mock_metric_repo, seeded_rng, fixed_now):
    """AnalyticsService with a mocked repository, UTC calendar and fixed clock."""
    return AnalyticsService(
        mock_metric_repo,
        SyntheticSeriesGenerator(rng=seeded_rng, tz=timezone.utc),
        clock=lambda: fixed_now,
        tz=timezone.utc,
    )


def _row(reading_id, metric, value, recorded_at):
    return {
        "reading_id": reading_id,
        "garden_id": 1,
        "metric_type": metric,
        "value": value,
        "recorded_at": recorded_at,
    }


# ==================== Series Tests ====================

class TestMetricSeries:
    """Test daily bucketing of raw readings."""

    def test_same_day_readings_collapse_to_mean(self, analytics_service, mock_metric_repo):
        """N readings on one day produce one point equal to their mean."""
        # Arrange
        mock_metric_repo.query_readings.return_value = [
            _row(1, "temperature", 20.0, "2026-05-14T06:00:00"),
            _row(2, "temperature", 21.0, "2026-05-14T12:00:00"),
            _row(3, "temperature", 22.5, "2026-05-14T18:00:00"),
        ]

        # Act
        result = analytics_service.get_metric_series(1, "week")

        # Assert
        points = result.metrics["temperature"]
        assert len(points) == 1
        assert points[0].value == 21.2
        assert points[0].label == "14"
        assert points[0].date == date(2026, 5, 14)
        assert result.data_points == 3
        assert result.synthetic is False

    def test_points_ascend_by_date_per_metric(self, analytics_service, mock_metric_repo):
        """Each metric gets its own series ordered by day."""
        mock_metric_repo.query_readings.return_value = [
            _row(1, "humidity", 60.0, "2026-05-12T10:00:00"),
            _row(2, "temperature", 19.0, "2026-05-12T10:00:00"),
            _row(3, "humidity", 70.0, "2026-05-13T10:00:00"),
            _row(4, "temperature", 23.0, "2026-05-14T10:00:00"),
        ]

        result = analytics_service.get_metric_series(1)

        assert list(result.metrics) == ["temperature", "humidity"]
        assert [p.date.day for p in result.metrics["temperature"]] == [12, 14]
        assert [p.value for p in result.metrics["humidity"]] == [60.0, 70.0]

    def test_repeated_queries_are_stable(self, analytics_service, mock_metric_repo):
        """Re-querying unchanged data yields identical points."""
        mock_metric_repo.query_readings.return_value = [
            _row(1, "soil_moisture", 40.04, "2026-05-10T08:00:00"),
            _row(2, "soil_moisture", 45.0, "2026-05-10T20:00:00"),
        ]

        first = analytics_service.get_metric_series(1).to_dict()["metrics"]
        second = analytics_service.get_metric_series(1).to_dict()["metrics"]

        assert first == second

    def test_window_starts_period_days_before_now(self, analytics_service, mock_metric_repo, fixed_now):
        """Month windows query the last 30 days."""
        analytics_service.get_metric_series(7, AnalyticsPeriod.MONTH)

        garden_id, since, metric = mock_metric_repo.query_readings.call_args.args
        assert garden_id == 7
        assert since == fixed_now - timedelta(days=30)
        assert metric is None

    def test_unknown_period_falls_back_to_week(self, analytics_service, mock_metric_repo, fixed_now):
        result = analytics_service.get_metric_series(1, "fortnight")

        _, since, _ = mock_metric_repo.query_readings.call_args.args
        assert since == fixed_now - timedelta(days=7)
        assert result.period == AnalyticsPeriod.WEEK

    def test_metric_filter_is_passed_to_store(self, analytics_service, mock_metric_repo):
        analytics_service.get_metric_series(1, "week", "CO2_level")

        _, _, metric = mock_metric_repo.query_readings.call_args.args
        assert metric == "co2_level"

    def test_unknown_metric_is_rejected(self, analytics_service, mock_metric_repo):
        with pytest.raises(ValidationError):
            analytics_service.get_metric_series(1, "week", "ph")

        mock_metric_repo.query_readings.assert_not_called()

    def test_rows_with_invalid_timestamp_are_skipped(self, analytics_service, mock_metric_repo):
        mock_metric_repo.query_readings.return_value = [
            _row(1, "temperature", 20.0, "not-a-date"),
            _row(2, "temperature", 24.0, "2026-05-13T10:00:00"),
        ]

        result = analytics_service.get_metric_series(1)

        assert [p.value for p in result.metrics["temperature"]] == [24.0]
        assert result.data_points == 1
        assert result.synthetic is False

    def test_only_malformed_rows_count_as_empty(self, analytics_service, mock_metric_repo):
        """A window whose rows all fail to parse is served like an empty one."""
        mock_metric_repo.query_readings.return_value = [
            _row(1, "temperature", 20.0, "not-a-date"),
            _row(2, "ph", 6.5, "2026-05-13T10:00:00"),
        ]

        result = analytics_service.get_metric_series(1)

        assert result.synthetic is True
        assert result.data_points == 0
        assert set(result.metrics) == set(MetricType.values())

    def test_buckets_follow_configured_timezone(self, mock_metric_repo, fixed_now):
        """A late-evening UTC reading lands on the next local day east of UTC."""
        plus_three = timezone(timedelta(hours=3))
        service = AnalyticsService(mock_metric_repo, clock=lambda: fixed_now, tz=plus_three)
        mock_metric_repo.query_readings.return_value = [
            _row(1, "temperature", 18.0, "2026-05-13T22:30:00"),
        ]

        point = service.get_metric_series(1).metrics["temperature"][0]

        assert point.date == date(2026, 5, 14)
        assert point.timestamp == datetime(2026, 5, 14, tzinfo=plus_three)


class TestSyntheticFallback:
    """Empty windows are served from the synthetic generator."""

    def test_empty_store_returns_synthetic_week(self, analytics_service):
        result = analytics_service.get_metric_series(1, "week")

        assert result.synthetic is True
        assert result.data_points == 0
        assert set(result.metrics) == set(MetricType.values())
        assert all(len(points) == 7 for points in result.metrics.values())

    def test_empty_store_returns_synthetic_month(self, analytics_service):
        result = analytics_service.get_metric_series(1, "month")

        assert all(len(points) == 30 for points in result.metrics.values())

    def test_store_failure_is_not_masked(self, analytics_service, mock_metric_repo):
        """A failing store raises instead of serving demo data."""
        mock_metric_repo.query_readings.side_effect = sqlite3.OperationalError("database is locked")

        with pytest.raises(StoreUnavailableError) as excinfo:
            analytics_service.get_metric_series(1)

        assert isinstance(excinfo.value.__cause__, sqlite3.OperationalError)


# ==================== Statistics Tests ====================

class TestPeriodStatistics:
    """Test per-metric statistics."""

    def test_single_reading(self, analytics_service, mock_metric_repo):
        mock_metric_repo.query_aggregates.return_value = {
            "temperature": {"avg": 25.0, "min": 25.0, "max": 25.0, "count": 1},
        }

        stats = analytics_service.get_period_statistics(1, "week")

        assert stats["temperature"].to_dict() == {"average": 25.0, "min": 25.0, "max": 25.0, "dataPoints": 1}

    def test_values_round_to_one_decimal(self, analytics_service, mock_metric_repo):
        mock_metric_repo.query_aggregates.return_value = {
            "humidity": {"avg": 61.666666, "min": 40.04, "max": 82.96, "count": 3},
        }

        stats = analytics_service.get_period_statistics(1)

        assert stats["humidity"].average == 61.7
        assert stats["humidity"].min == 40.0
        assert stats["humidity"].max == 83.0

    def test_empty_week_uses_synthetic_table(self, analytics_service):
        stats = analytics_service.get_period_statistics(1, "week")

        assert set(stats) == set(MetricType.values())
        assert stats["temperature"].average == 24.5
        assert all(s.data_points == 21 for s in stats.values())

    def test_empty_quarter_uses_larger_point_count(self, analytics_service):
        stats = analytics_service.get_period_statistics(1, "quarter")

        assert all(s.data_points == 90 for s in stats.values())

    def test_store_failure_raises(self, analytics_service, mock_metric_repo):
        mock_metric_repo.query_aggregates.side_effect = sqlite3.DatabaseError("disk I/O error")

        with pytest.raises(StoreUnavailableError):
            analytics_service.get_period_statistics(1)


# ==================== Write Tests ====================

class TestRecordMetrics:
    """Concurrent metric ingestion."""

    def test_all_metrics_stored(self, analytics_service, mock_metric_repo, fixed_now):
        # Arrange
        ids = {"temperature": 11, "humidity": 12}
        mock_metric_repo.insert_reading.side_effect = lambda g, metric, v, ts: {"reading_id": ids[metric]}

        # Act
        result = analytics_service.record_metrics(3, {"temperature": 21.5, "humidity": "64"})

        # Assert
        assert result.complete
        assert result.stored == {"temperature": 11, "humidity": 12}
        assert result.recorded_at == fixed_now
        assert mock_metric_repo.insert_reading.call_count == 2
        mock_metric_repo.insert_reading.assert_any_call(3, "humidity", 64.0, fixed_now)

    def test_explicit_timestamp_is_used(self, analytics_service, mock_metric_repo):
        mock_metric_repo.insert_reading.return_value = {"reading_id": 1}

        result = analytics_service.record_metrics(1, {"co2_level": 410}, recorded_at="2026-05-01T08:00:00Z")

        assert result.recorded_at == datetime(2026, 5, 1, 8, 0, tzinfo=timezone.utc)

    def test_partial_failure_reports_both_sides(self, analytics_service, mock_metric_repo):
        def insert(garden_id, metric, value, ts):
            if metric == "humidity":
                raise sqlite3.OperationalError("database is locked")
            return {"reading_id": 5}

        mock_metric_repo.insert_reading.side_effect = insert

        with pytest.raises(PartialWriteError) as excinfo:
            analytics_service.record_metrics(1, {"temperature": 20, "humidity": 60})

        detail = excinfo.value.detail
        assert detail["stored"] == {"temperature": 5}
        assert detail["failed"] == {"humidity": "store write failed"}
        assert "locked" not in str(detail)

    def test_total_failure_raises_store_unavailable(self, analytics_service, mock_metric_repo):
        mock_metric_repo.insert_reading.side_effect = sqlite3.OperationalError("unable to open database file")

        with pytest.raises(StoreUnavailableError) as excinfo:
            analytics_service.record_metrics(1, {"temperature": 20, "light_level": 900})

        assert not isinstance(excinfo.value, PartialWriteError)
        assert set(excinfo.value.detail["failed"]) == {"temperature", "light_level"}

    def test_worker_connections_are_released(self, analytics_service, mock_metric_repo):
        """Each insert releases its worker's connection, even when it fails."""
        mock_metric_repo.insert_reading.side_effect = [{"reading_id": 1}, sqlite3.OperationalError("disk I/O error")]

        with pytest.raises(PartialWriteError):
            analytics_service.record_metrics(1, {"temperature": 20, "humidity": 60})

        assert mock_metric_repo.release_connection.call_count == 2

    @pytest.mark.parametrize(
        "values",
        [
            {},
            {"ph": 6.5},
            {"temperature": "warm"},
            {"temperature": True},
        ],
    )
    def test_invalid_payload_is_rejected(self, analytics_service, mock_metric_repo, values):
        with pytest.raises(ValidationError):
            analytics_service.record_metrics(1, values)

        mock_metric_repo.insert_reading.assert_not_called()


class TestParseMetric:
    """Metric filter parsing."""

    def test_known_names_resolve_case_insensitively(self):
        assert parse_metric("Temperature") is MetricType.TEMPERATURE
        assert parse_metric(MetricType.HUMIDITY) is MetricType.HUMIDITY

    def test_missing_filter_means_all_metrics(self):
        assert parse_metric(None) is None
        assert parse_metric("  ") is None

    def test_unknown_name_lists_allowed_metrics(self):
        with pytest.raises(ValidationError) as excinfo:
            parse_metric("ph")

        assert "soil_moisture" in excinfo.value.detail["allowed"]


class TestRecordMetricsAgainstStore:
    """Concurrent writes through the real SQLite-backed repository."""

    def test_in_memory_store_receives_every_metric(self, metric_repo, fixed_now):
        # Arrange
        service = AnalyticsService(metric_repo, clock=lambda: fixed_now, tz=timezone.utc, write_workers=3)

        # Act
        result = service.record_metrics(1, {"temperature": 20.0, "humidity": 60.0, "co2_level": 415.0})

        # Assert
        assert result.complete
        assert set(result.stored) == {"temperature", "humidity", "co2_level"}
        rows = metric_repo.query_readings(1, fixed_now - timedelta(minutes=1))
        assert sorted(row["metric_type"] for row in rows) == ["co2_level", "humidity", "temperature"]

    def test_stored_readings_feed_the_series(self, metric_repo, fixed_now):
        service = AnalyticsService(metric_repo, clock=lambda: fixed_now, tz=timezone.utc)

        service.record_metrics(2, {"temperature": 21.0}, recorded_at=fixed_now - timedelta(hours=1))
        service.record_metrics(2, {"temperature": 23.0}, recorded_at=fixed_now - timedelta(hours=2))
        result = service.get_metric_series(2, "week", "temperature")

        assert result.synthetic is False
        assert result.data_points == 2
        assert [p.value for p in result.metrics["temperature"]] == [22.0]

"""
Analytics Service

Time-series analytics over raw garden metric readings:
- Daily aggregated series per metric (calendar-day buckets, mean per bucket)
- Period statistics per metric (average/min/max/count)
- Recording a batch of metric readings for a garden

When the store holds no readings for the requested window, both read paths
fall back to synthetic demo data so consumers never see an empty chart. A
failing store is never masked: it surfaces as StoreUnavailableError.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Callable, Mapping

from app.domain.exceptions import (
    GardenError,
    PartialWriteError,
    StoreUnavailableError,
    ValidationError,
)
from app.domain.metrics import MetricReading, MetricSeriesResult, MetricWriteResult, PeriodStats, SeriesPoint
from app.enums import AnalyticsPeriod, MetricType
from app.services.utilities.synthetic_series import SyntheticSeriesGenerator, synthetic_period_statistics
from app.utils.time import coerce_datetime, local_date, start_of_day, utc_now
from infrastructure.database.repositories.base import MetricReadingStore

logger = logging.getLogger(__name__)

# Reported to callers in place of the store's own error text
WRITE_FAILED_REASON = "store write failed"


def parse_metric(metric: MetricType | str | None) -> MetricType | None:
    """Resolve an optional metric filter; unknown names are a ValidationError."""
    if metric is None or isinstance(metric, MetricType):
        return metric
    raw = str(metric).strip().lower()
    if not raw:
        return None
    try:
        return MetricType(raw)
    except ValueError:
        raise ValidationError(
            f"Unknown metric '{metric}'",
            detail={"allowed": list(MetricType.values())},
        ) from None


class AnalyticsService:
    """
    Garden metric analytics service.

    Every call is request-scoped: it issues its store queries, derives the
    result and keeps no state between calls.
    """

    def __init__(
        self,
        repository: MetricReadingStore,
        generator: SyntheticSeriesGenerator | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
        tz: tzinfo | None = None,
        write_workers: int = 5,
    ):
        """
        Initialize analytics service.

        Args:
            repository: Metric reading store
            generator: Synthetic series generator used for empty windows
            clock: Returns "now" as an aware datetime
            tz: Timezone that defines calendar days (server local when None)
            write_workers: Max concurrent inserts in record_metrics
        """
        self.repository = repository
        self.tz = tz
        self.generator = generator or SyntheticSeriesGenerator(tz=tz)
        self.clock = clock
        self.write_workers = max(1, int(write_workers))

    # ------------------------------------------------------------------
    # Series
    # ------------------------------------------------------------------

    def get_metric_series(
        self,
        garden_id: int,
        period: AnalyticsPeriod | str | None = AnalyticsPeriod.WEEK,
        metric: MetricType | str | None = None,
    ) -> MetricSeriesResult:
        """
        Daily mean series per metric for the period ending now.

        Args:
            garden_id: Garden to analyse
            period: week/month/quarter; unknown values resolve to week
            metric: Optional metric filter

        Returns:
            MetricSeriesResult with one SeriesPoint per (metric, day) that has
            data, ascending by date. data_points counts the readings that parsed.
            With no usable rows, every metric gets a synthetic series and the
            metric filter is ignored.

        Raises:
            ValidationError: Unknown metric filter
            StoreUnavailableError: The store query failed
        """
        resolved = AnalyticsPeriod.parse(period)
        metric_type = parse_metric(metric)
        end = self.clock()
        start = end - timedelta(days=resolved.days)

        rows = self._query_store(
            "readings",
            garden_id,
            lambda: self.repository.query_readings(
                garden_id,
                start,
                metric_type.value if metric_type else None,
            ),
        )
        logger.debug(f"Retrieved {len(rows)} readings for garden {garden_id} since {start.isoformat()}")
        readings = self.parse_rows(rows)

        if not readings:
            logger.info(
                "No usable readings for garden %s in the last %s days, serving synthetic series",
                garden_id,
                resolved.days,
            )
            return MetricSeriesResult(
                metrics=self.generator.generate_all(resolved, now=end),
                period=resolved,
                metric=metric_type,
                data_points=0,
                start=start,
                end=end,
                synthetic=True,
            )

        return MetricSeriesResult(
            metrics=self.aggregate_daily(readings),
            period=resolved,
            metric=metric_type,
            data_points=len(readings),
            start=start,
            end=end,
        )

    @staticmethod
    def parse_rows(rows: list[Mapping[str, Any]]) -> list[MetricReading]:
        """Convert store rows to readings, skipping unknown metrics and unparsable timestamps."""
        readings = []
        for row in rows:
            try:
                readings.append(MetricReading.from_row(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping reading %s: %s", row.get("reading_id"), e)
        return readings

    def aggregate_daily(self, readings: list[MetricReading]) -> dict[str, list[SeriesPoint]]:
        """Bucket readings by (calendar day, metric) and average each bucket."""
        buckets: dict[str, dict[date, list[float]]] = defaultdict(lambda: defaultdict(list))

        for reading in readings:
            day = local_date(reading.recorded_at, self.tz)
            buckets[reading.metric_type.value][day].append(reading.value)

        ordered_metrics = [m.value for m in MetricType if m.value in buckets]

        series: dict[str, list[SeriesPoint]] = {}
        for name in ordered_metrics:
            points = []
            for day in sorted(buckets[name]):
                values = buckets[name][day]
                points.append(
                    SeriesPoint(
                        label=str(day.day),
                        value=round(sum(values) / len(values), 1),
                        date=day,
                        timestamp=start_of_day(day, self.tz),
                    )
                )
            series[name] = points
        return series

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_period_statistics(
        self,
        garden_id: int,
        period: AnalyticsPeriod | str | None = AnalyticsPeriod.WEEK,
    ) -> dict[str, PeriodStats]:
        """
        Average/min/max/count per metric over the period ending now.

        Falls back to the fixed synthetic statistics table when the store has
        no rows for the window. That table is independent of the synthetic
        series and may disagree with it.

        Raises:
            StoreUnavailableError: The store query failed
        """
        resolved = AnalyticsPeriod.parse(period)
        since = self.clock() - timedelta(days=resolved.days)

        aggregates = self._query_store(
            "aggregates",
            garden_id,
            lambda: self.repository.query_aggregates(garden_id, since),
        )

        if not aggregates:
            logger.info("No readings for garden %s, serving synthetic %s statistics", garden_id, resolved)
            return synthetic_period_statistics(resolved)

        return {
            name: PeriodStats(
                average=round(float(values["avg"]), 1),
                min=round(float(values["min"]), 1),
                max=round(float(values["max"]), 1),
                data_points=int(values["count"]),
            )
            for name, values in aggregates.items()
        }

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def record_metrics(
        self,
        garden_id: int,
        values: Mapping[MetricType | str, Any],
        recorded_at: datetime | str | None = None,
    ) -> MetricWriteResult:
        """
        Store one reading per metric, issuing the inserts concurrently.

        Args:
            garden_id: Garden the readings belong to
            values: metric -> numeric value
            recorded_at: Reading time (defaults to now)

        Returns:
            MetricWriteResult listing the stored row id per metric

        Raises:
            ValidationError: Empty payload, unknown metric or non-numeric value
            PartialWriteError: Some inserts failed (detail lists both sides)
            StoreUnavailableError: Every insert failed
        """
        readings = self._validate_readings(values)
        if recorded_at is None:
            timestamp = self.clock()
        else:
            timestamp = coerce_datetime(recorded_at)
            if timestamp is None:
                raise ValidationError(f"Invalid recorded_at timestamp: {recorded_at!r}")

        result = MetricWriteResult(garden_id=garden_id, recorded_at=timestamp)
        workers = min(self.write_workers, len(readings))

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="metric-write") as executor:
            futures = {
                executor.submit(self._insert_reading, garden_id, metric, value, timestamp): metric
                for metric, value in readings.items()
            }
            for future in as_completed(futures):
                metric = futures[future]
                try:
                    row = future.result()
                    result.stored[metric.value] = row.get("reading_id") if isinstance(row, Mapping) else row
                except Exception as e:
                    logger.error(f"Failed to record {metric.value} for garden {garden_id}: {e}")
                    result.failed[metric.value] = WRITE_FAILED_REASON

        if not result.failed:
            logger.info("Recorded %d metrics for garden %s", len(result.stored), garden_id)
            return result

        if not result.stored:
            raise StoreUnavailableError("Failed to record metrics", detail=result.to_dict())
        raise PartialWriteError(
            f"Recorded {len(result.stored)} of {len(readings)} metrics",
            detail=result.to_dict(),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _insert_reading(self, garden_id: int, metric: MetricType, value: float, timestamp: datetime) -> Any:
        try:
            return self.repository.insert_reading(garden_id, metric.value, value, timestamp)
        finally:
            # Pool threads are discarded after each batch
            self.repository.release_connection()

    @staticmethod
    def _validate_readings(values: Mapping[MetricType | str, Any]) -> dict[MetricType, float]:
        if not values:
            raise ValidationError("At least one metric value is required")

        readings: dict[MetricType, float] = {}
        for raw_metric, raw_value in values.items():
            metric = parse_metric(raw_metric)
            if metric is None:
                raise ValidationError("Metric name must not be empty")
            if isinstance(raw_value, bool):
                raise ValidationError(f"Value for {metric.value} must be numeric")
            try:
                readings[metric] = float(raw_value)
            except (TypeError, ValueError):
                raise ValidationError(f"Value for {metric.value} must be numeric") from None
        return readings

    @staticmethod
    def _query_store(what: str, garden_id: int, query: Callable[[], Any]) -> Any:
        try:
            return query()
        except GardenError:
            raise
        except Exception as e:
            logger.error(f"Error fetching metric {what} for garden {garden_id}: {e}", exc_info=True)
            raise StoreUnavailableError(f"Metric store unavailable while reading {what}") from e

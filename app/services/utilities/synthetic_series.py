"""
Synthetic Series Generator
==========================
Plausible demo data for gardens without recorded readings.

Two independent fallback datasets live here:

- ``SyntheticSeriesGenerator``: a bounded random walk per metric, used when
  the daily series query returns no rows.
- ``synthetic_period_statistics``: a fixed table of period statistics, used
  when the aggregate query returns no rows.

The statistics table is NOT derived from the random walk, so the two can
disagree for the same garden and period. This is a known inconsistency kept
as-is until the intended behavior is confirmed.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from types import MappingProxyType
from typing import Mapping

from app.domain.metrics import PeriodStats, SeriesPoint
from app.enums import AnalyticsPeriod, MetricType
from app.utils.time import to_local, utc_now

logger = logging.getLogger(__name__)

# Daily drift applied on top of the per-metric noise.
TREND_RANGE = 0.15


@dataclass(frozen=True)
class MetricProfile:
    """Random-walk parameters of one metric."""

    base_value: float
    variance: float
    min_value: float
    max_value: float


SYNTHETIC_METRIC_PROFILES: Mapping[MetricType, MetricProfile] = MappingProxyType(
    {
        MetricType.TEMPERATURE: MetricProfile(24, 3, 18, 35),
        MetricType.HUMIDITY: MetricProfile(65, 8, 30, 85),
        MetricType.SOIL_MOISTURE: MetricProfile(45, 6, 20, 80),
        MetricType.LIGHT_LEVEL: MetricProfile(1200, 200, 800, 2000),
        MetricType.CO2_LEVEL: MetricProfile(420, 30, 380, 500),
    }
)

# metric -> (average, min, max)
_SYNTHETIC_STATS_TABLE: Mapping[MetricType, tuple[float, float, float]] = MappingProxyType(
    {
        MetricType.TEMPERATURE: (24.5, 18.2, 31.8),
        MetricType.HUMIDITY: (65.3, 45.1, 82.7),
        MetricType.SOIL_MOISTURE: (48.2, 32.5, 68.9),
        MetricType.LIGHT_LEVEL: (1250.0, 850.0, 1850.0),
        MetricType.CO2_LEVEL: (425.0, 390.0, 480.0),
    }
)

WEEK_SYNTHETIC_DATA_POINTS = 21
DEFAULT_SYNTHETIC_DATA_POINTS = 90


def synthetic_period_statistics(period: AnalyticsPeriod | str | None) -> dict[str, PeriodStats]:
    """Fixed demo statistics for every metric."""
    resolved = AnalyticsPeriod.parse(period)
    data_points = WEEK_SYNTHETIC_DATA_POINTS if resolved == AnalyticsPeriod.WEEK else DEFAULT_SYNTHETIC_DATA_POINTS
    return {
        metric.value: PeriodStats(average=avg, min=low, max=high, data_points=data_points)
        for metric, (avg, low, high) in _SYNTHETIC_STATS_TABLE.items()
    }


def series_length(period: AnalyticsPeriod | str | None) -> int:
    """7 points for a week, 30 for anything else."""
    return 7 if str(period) == AnalyticsPeriod.WEEK.value else 30


class SyntheticSeriesGenerator:
    """
    Bounded random-walk series generator.

    Args:
        rng: Randomness source; pass a seeded ``random.Random`` for repeatable
            output. Defaults to a fresh unseeded generator.
        tz: Timezone used for the calendar dates of the points (server
            local when None).
    """

    def __init__(self, rng: random.Random | None = None, tz: tzinfo | None = None):
        self.rng = rng or random.Random()
        self.tz = tz

    def generate(
        self,
        period: AnalyticsPeriod | str | None,
        base_value: float,
        variance: float,
        min_value: float,
        max_value: float,
        *,
        now: datetime | None = None,
    ) -> list[SeriesPoint]:
        """
        Generate one point per day, oldest first, ending today.

        Each step adds a uniform trend in [-0.15, 0.15] and a uniform change in
        [-variance/2, variance/2], then clamps to [min_value, max_value].
        """
        anchor = to_local(now or utc_now(), self.tz)
        days = series_length(period)
        current = float(base_value)
        points: list[SeriesPoint] = []

        for offset in range(days - 1, -1, -1):
            trend = self.rng.uniform(-TREND_RANGE, TREND_RANGE)
            change = self.rng.uniform(-variance / 2, variance / 2)
            current = min(max_value, max(min_value, current + trend + change))

            moment = anchor - timedelta(days=offset)
            day = moment.date()
            points.append(
                SeriesPoint(
                    label=str(day.day),
                    value=round(current, 1),
                    date=day,
                    timestamp=moment,
                )
            )

        return points

    def generate_profile(
        self,
        metric: MetricType,
        period: AnalyticsPeriod | str | None,
        *,
        now: datetime | None = None,
    ) -> list[SeriesPoint]:
        """Generate a series using the built-in parameters of *metric*."""
        profile = SYNTHETIC_METRIC_PROFILES[metric]
        return self.generate(
            period,
            profile.base_value,
            profile.variance,
            profile.min_value,
            profile.max_value,
            now=now,
        )

    def generate_all(
        self,
        period: AnalyticsPeriod | str | None,
        *,
        now: datetime | None = None,
    ) -> dict[str, list[SeriesPoint]]:
        """Series for every metric, keyed by metric name."""
        logger.debug("Generating synthetic series for period=%s", period)
        return {metric.value: self.generate_profile(metric, period, now=now) for metric in SYNTHETIC_METRIC_PROFILES}

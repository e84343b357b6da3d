"""
Metric Value Objects
====================
Immutable value objects for raw sensor readings and the series and
statistics derived from them. Derived objects are built fresh per request
and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping

from app.enums import AnalyticsPeriod, MetricType
from app.utils.time import coerce_datetime


@dataclass(frozen=True)
class MetricReading:
    """
    A single raw reading as stored in the metric store.
    Never updated once written.
    """

    garden_id: int
    metric_type: MetricType
    value: float
    recorded_at: datetime
    reading_id: int | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "MetricReading":
        """Build from a store row; raises ValueError for an unknown metric or bad timestamp."""
        recorded_at = coerce_datetime(row.get("recorded_at"))
        if recorded_at is None:
            raise ValueError(f"invalid recorded_at {row.get('recorded_at')!r}")
        return cls(
            garden_id=int(row["garden_id"]),
            metric_type=MetricType(row["metric_type"]),
            value=float(row["value"]),
            recorded_at=recorded_at,
            reading_id=row.get("reading_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "reading_id": self.reading_id,
            "garden_id": self.garden_id,
            "metric_type": self.metric_type.value,
            "value": self.value,
            "recorded_at": self.recorded_at.isoformat(),
        }


@dataclass(frozen=True)
class SeriesPoint:
    """One chart point: the mean of a metric over one calendar day."""

    label: str
    value: float
    date: date
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "value": self.value,
            "date": self.date.isoformat(),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class PeriodStats:
    """Aggregate statistics of one metric over a period."""

    average: float
    min: float
    max: float
    data_points: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "average": self.average,
            "min": self.min,
            "max": self.max,
            "dataPoints": self.data_points,
        }


@dataclass
class MetricSeriesResult:
    """
    Per-metric daily series for a period.

    Attributes:
        metrics: metric name -> ascending list of SeriesPoint
        period: Resolved analytics period
        metric: Metric filter requested by the caller (None = all)
        data_points: Raw row count returned by the store
        start: Start of the requested window
        end: End of the requested window
        synthetic: True when the series came from the synthetic fallback
    """

    metrics: dict[str, list[SeriesPoint]]
    period: AnalyticsPeriod
    metric: MetricType | None
    data_points: int
    start: datetime
    end: datetime
    synthetic: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "metrics": {name: [point.to_dict() for point in points] for name, points in self.metrics.items()},
            "period": self.period.value,
            "metric": self.metric.value if self.metric else None,
            "dataPoints": self.data_points,
            "dateRange": {
                "start": self.start.isoformat(),
                "end": self.end.isoformat(),
            },
            "synthetic": self.synthetic,
        }


@dataclass
class MetricWriteResult:
    """Outcome of recording several metrics for one garden in one request."""

    garden_id: int
    recorded_at: datetime
    stored: dict[str, int] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "gardenId": self.garden_id,
            "recordedAt": self.recorded_at.isoformat(),
            "stored": dict(self.stored),
            "failed": dict(self.failed),
        }

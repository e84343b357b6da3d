from __future__ import annotations

from datetime import datetime
from typing import Any

from infrastructure.database.ops.metrics import MetricOperations


class MetricRepository:
    """Expose raw metric reading persistence and range queries."""

    def __init__(self, backend: MetricOperations) -> None:
        self._backend = backend

    def insert_reading(
        self,
        garden_id: int,
        metric_type: str,
        value: float,
        recorded_at: datetime,
    ) -> dict[str, Any]:
        return self._backend.insert_metric_reading(
            garden_id=garden_id,
            metric_type=metric_type,
            value=value,
            recorded_at=recorded_at,
        )

    def query_readings(
        self,
        garden_id: int,
        since: datetime,
        metric_type: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch readings recorded at or after ``since``.

        Args:
            garden_id: Garden to read
            since: Inclusive lower bound
            metric_type: Optional metric filter

        Returns:
            Rows ordered by recorded_at ascending
        """
        return self._backend.get_metric_readings_since(garden_id, since, metric_type)

    def query_aggregates(self, garden_id: int, since: datetime) -> dict[str, dict[str, float]]:
        """Per-metric AVG/MIN/MAX/COUNT since ``since``."""
        return self._backend.get_metric_aggregates_since(garden_id, since)

    def release_connection(self) -> None:
        """Close the calling thread's connection, for short-lived worker threads."""
        self._backend.close_db()

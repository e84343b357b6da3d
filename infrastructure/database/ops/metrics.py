from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Any

from app.utils.time import sqlite_timestamp

logger = logging.getLogger(__name__)


class MetricOperations:
    """Insert and range-query helpers for raw metric readings.

    Every sqlite3 failure is logged and re-raised: callers must be able to
    tell an unavailable store apart from an empty one.
    """

    @staticmethod
    def _timestamp_query_param(dt: datetime) -> str:
        """Return a naive UTC ISO8601 timestamp suitable for lexical range filtering."""
        return sqlite_timestamp(dt)

    def insert_metric_reading(
        self,
        *,
        garden_id: int,
        metric_type: str,
        value: float,
        recorded_at: datetime,
    ) -> dict[str, Any]:
        """
        Insert one metric reading and return the stored row.

        Args:
            garden_id: Garden the reading belongs to
            metric_type: One of the MetricReadings.metric_type values
            value: Reading value
            recorded_at: Time the reading was taken
        """
        stamp = self._timestamp_query_param(recorded_at)
        try:
            with self.connection() as db:
                cursor = db.execute(
                    """
                    INSERT INTO MetricReadings (garden_id, metric_type, value, recorded_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (garden_id, metric_type, float(value), stamp),
                )
                reading_id = cursor.lastrowid
        except sqlite3.Error as exc:
            logger.error(
                "Error inserting %s reading for garden %s: %s",
                metric_type,
                garden_id,
                exc,
            )
            raise

        return {
            "reading_id": reading_id,
            "garden_id": garden_id,
            "metric_type": metric_type,
            "value": float(value),
            "recorded_at": stamp,
        }

    def get_metric_readings_since(
        self,
        garden_id: int,
        since: datetime,
        metric_type: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch raw readings recorded at or after ``since``, oldest first.

        Args:
            garden_id: Garden to read
            since: Inclusive lower bound of recorded_at
            metric_type: Optional metric filter
        """
        query = """
            SELECT reading_id, garden_id, metric_type, value, recorded_at
            FROM MetricReadings
            WHERE garden_id = ?
              AND recorded_at >= ?
        """
        params: list[Any] = [garden_id, self._timestamp_query_param(since)]
        if metric_type is not None:
            query += " AND metric_type = ?"
            params.append(metric_type)
        query += " ORDER BY recorded_at ASC, reading_id ASC"

        try:
            db = self.get_db()
            rows = db.execute(query, params).fetchall()
        except sqlite3.Error as exc:
            logger.error("Error fetching metric readings for garden %s: %s", garden_id, exc)
            raise
        return [dict(row) for row in rows]

    def get_metric_aggregates_since(self, garden_id: int, since: datetime) -> dict[str, dict[str, float]]:
        """
        Aggregate readings per metric type.

        Returns:
            metric_type -> {"avg", "min", "max", "count"}; empty when no rows match
        """
        try:
            db = self.get_db()
            rows = db.execute(
                """
                SELECT metric_type,
                       AVG(value) AS avg,
                       MIN(value) AS min,
                       MAX(value) AS max,
                       COUNT(*) AS count
                FROM MetricReadings
                WHERE garden_id = ?
                  AND recorded_at >= ?
                GROUP BY metric_type
                ORDER BY metric_type
                """,
                (garden_id, self._timestamp_query_param(since)),
            ).fetchall()
        except sqlite3.Error as exc:
            logger.error("Error aggregating metric readings for garden %s: %s", garden_id, exc)
            raise

        return {
            row["metric_type"]: {
                "avg": row["avg"],
                "min": row["min"],
                "max": row["max"],
                "count": row["count"],
            }
            for row in rows
        }

    def get_db(self):  # pragma: no cover
        raise NotImplementedError

    def connection(self):  # pragma: no cover
        raise NotImplementedError

    def close_db(self, _e=None):  # pragma: no cover
        raise NotImplementedError

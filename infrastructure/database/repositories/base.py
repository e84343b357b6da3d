"""
Base Repository Protocol
========================

Defines the query surface the analytics core needs from the metric store.
Uses ``typing.Protocol`` (structural subtyping) so any store exposing these
operations satisfies the contract **without inheritance**.

This keeps the persistence layer swappable (e.g. SQLite → PostgreSQL)
without touching service code.

Usage in service type hints::

    from infrastructure.database.repositories.base import MetricReadingStore


    class MyService:
        def __init__(self, repo: MetricReadingStore) -> None: ...
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MetricReadingStore(Protocol):
    """Read/write contract of the raw metric reading store."""

    def insert_reading(
        self,
        garden_id: int,
        metric_type: str,
        value: float,
        recorded_at: datetime,
    ) -> dict[str, Any]:
        """Persist one reading and return the stored row."""
        ...

    def query_readings(
        self,
        garden_id: int,
        since: datetime,
        metric_type: str | None = None,
    ) -> list[dict[str, Any]]:
        """Readings recorded at or after ``since``, ordered by time."""
        ...

    def query_aggregates(self, garden_id: int, since: datetime) -> dict[str, dict[str, float]]:
        """Per-metric ``{avg, min, max, count}`` since ``since``."""
        ...

    def release_connection(self) -> None:
        """Drop any per-thread resources held for the calling thread."""
        ...


__all__ = ["MetricReadingStore"]

"""Utility functions for time handling.

All timestamps should be UTC and timezone-aware. Persist UTC timestamps as
naive ISO-8601 strings via sqlite_timestamp() so range filters compare
lexically. Calendar bucketing converts to local time with to_local().
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from typing import Any


def utc_now() -> datetime:
    """Return current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def iso_now(*, timespec: str | None = None) -> str:
    """Return current UTC time as an ISO8601 string (timezone-aware)."""
    now = utc_now()
    if timespec:
        return now.isoformat(timespec=timespec)
    return now.isoformat()


def to_local(dt: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert an aware or naive (assumed UTC) datetime to *tz*.

    With ``tz=None`` the server's local timezone is used.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)


def local_date(dt: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of *dt* as seen in *tz* (server local by default)."""
    return to_local(dt, tz).date()


def start_of_day(day: date, tz: tzinfo | None = None) -> datetime:
    """Midnight of *day* in *tz* as an aware datetime."""
    if tz is None:
        return datetime.combine(day, time.min).astimezone()
    return datetime.combine(day, time.min, tzinfo=tz)


def sqlite_timestamp(dt: datetime) -> str:
    """Format a datetime as a naive UTC ISO string for SQLite range filters."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return dt.replace(tzinfo=None).isoformat(timespec="seconds")


def coerce_datetime(value: Any) -> datetime | None:
    """
    Coerce value to datetime, returning None on failure.

    Args:
        value: String or datetime to coerce

    Returns:
        Datetime in timezone.utc or None if invalid
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw.replace("Z", "+00:00")
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    else:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed

"""
Metric-related Enumerations
===========================

This module contains the enums describing environmental sensor readings
and the analytics windows they are aggregated over.
"""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class MetricType(str, Enum):
    """Environmental metrics recorded for a garden"""

    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    SOIL_MOISTURE = "soil_moisture"
    LIGHT_LEVEL = "light_level"
    CO2_LEVEL = "co2_level"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)

    def __str__(self):
        return self.value


class AnalyticsPeriod(str, Enum):
    """Relative time windows anchored to the request time"""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"

    @property
    def days(self) -> int:
        return _PERIOD_DAYS[self]

    @classmethod
    def parse(cls, value: "AnalyticsPeriod | str | None") -> "AnalyticsPeriod":
        """Resolve a period token, falling back to WEEK for unknown input."""
        if isinstance(value, cls):
            return value
        if value:
            try:
                return cls(str(value).strip().lower())
            except ValueError:
                logger.debug("Unknown analytics period %r, using week", value)
        return cls.WEEK

    def __str__(self):
        return self.value


_PERIOD_DAYS = {
    AnalyticsPeriod.WEEK: 7,
    AnalyticsPeriod.MONTH: 30,
    AnalyticsPeriod.QUARTER: 90,
}

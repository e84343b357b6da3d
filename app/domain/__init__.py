"""
Domain Value Objects Package
=============================
Contains immutable value objects and pure domain calculations.

Value objects are immutable objects that represent descriptive aspects of the domain
with no conceptual identity. They are defined only by their attributes.
"""

from .agronomics import DailyTemperature, PhenophaseResult
from .economics import EconomicCalculator, IrrigationCost, ProductionCost, ReturnOnInvestment
from .metrics import MetricReading, MetricSeriesResult, MetricWriteResult, PeriodStats, SeriesPoint

__all__ = [
    # Metrics
    "MetricReading",
    "SeriesPoint",
    "PeriodStats",
    "MetricSeriesResult",
    "MetricWriteResult",
    # Agronomy
    "DailyTemperature",
    "PhenophaseResult",
    # Economics
    "EconomicCalculator",
    "IrrigationCost",
    "ReturnOnInvestment",
    "ProductionCost",
]

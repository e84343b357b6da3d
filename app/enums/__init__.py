"""
Enums Module
============

This module provides enumeration types for the garden analytics application.
Enums ensure type safety and consistency across the codebase.
"""

from app.enums.common import (
    DiseaseType,
    HealthLevel,
    RiskLevel,
)
from app.enums.growth import PhenologicalStage
from app.enums.metrics import AnalyticsPeriod, MetricType

__all__ = [
    # Metric enums
    "MetricType",
    "AnalyticsPeriod",
    # Growth enums
    "PhenologicalStage",
    # Common enums
    "RiskLevel",
    "HealthLevel",
    "DiseaseType",
]

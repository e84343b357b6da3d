"""
Common Enumerations
====================

This module contains common enums used across multiple services.
These are application-wide enums that don't fit in metric or growth categories.
"""

from enum import Enum


class RiskLevel(str, Enum):
    """
    Risk levels for disease assessments.
    Used by: disease_predictor, agronomy API
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value


class HealthLevel(str, Enum):
    """
    Service health levels.
    Used by: health API
    """
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"

    def __str__(self) -> str:
        return self.value


class DiseaseType(str, Enum):
    """
    Diseases scored by the rule-based risk model.
    Used by: disease_predictor
    """
    SCAB = "scab"
    POWDERY_MILDEW = "powdery_mildew"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").capitalize()

    def __str__(self) -> str:
        return self.value

"""
Service Organization
====================
Services are organized by their lifecycle and instantiation pattern:

**application/**
  Singleton services managed by ServiceContainer. One instance per application.
  Examples: AnalyticsService

**ai/**
  Stateless agronomic models.
  Examples: PhenologyPredictor, DiseasePredictor

**utilities/**
  Stateless utility services that can be instantiated multiple times.
  Examples: SyntheticSeriesGenerator
"""

from .application.analytics_service import AnalyticsService
from .utilities.synthetic_series import SyntheticSeriesGenerator

__all__ = [
    "AnalyticsService",
    "SyntheticSeriesGenerator",
]

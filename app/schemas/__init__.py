"""
Schemas Module
==============

This module provides Pydantic models for request validation.
Schemas ensure data integrity and provide automatic validation.
"""

from app.schemas.agronomy import DailyWeatherEntry, DiseaseRiskRequest, PhenologyRequest
from app.schemas.analytics import MetricRecordRequest
from app.schemas.economics import IrrigationCostRequest, ProductionCostRequest, RoiRequest

__all__ = [
    # Analytics schemas
    "MetricRecordRequest",
    # Agronomy schemas
    "DailyWeatherEntry",
    "PhenologyRequest",
    "DiseaseRiskRequest",
    # Economics schemas
    "IrrigationCostRequest",
    "RoiRequest",
    "ProductionCostRequest",
]

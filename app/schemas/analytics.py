"""
Analytics Schemas
=================

Pydantic models for metric ingestion requests.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.enums import MetricType


class MetricRecordRequest(BaseModel):
    """Request model for recording one reading per metric for a garden"""

    temperature: Optional[float] = Field(default=None, description="Air temperature (°C)")
    humidity: Optional[float] = Field(default=None, ge=0, le=100, description="Relative humidity (%)")
    soil_moisture: Optional[float] = Field(
        default=None, ge=0, le=100, alias="soilMoisture", description="Soil moisture (%)"
    )
    light_level: Optional[float] = Field(default=None, ge=0, alias="lightLevel", description="Light level (lux)")
    co2_level: Optional[float] = Field(default=None, ge=0, alias="co2Level", description="CO2 concentration (ppm)")
    recorded_at: Optional[datetime] = Field(
        default=None, alias="recordedAt", description="Reading time (ISO 8601, defaults to now)"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "temperature": 23.4,
                "humidity": 61.0,
                "soilMoisture": 44.5,
                "recordedAt": "2026-05-01T08:30:00Z",
            }
        },
    )

    @model_validator(mode="after")
    def require_one_metric(self) -> "MetricRecordRequest":
        if not self.readings():
            raise ValueError("at least one metric value is required")
        return self

    def readings(self) -> dict[str, float]:
        """Metric name -> value for every metric present in the request."""
        return {
            metric.value: getattr(self, metric.value)
            for metric in MetricType
            if getattr(self, metric.value) is not None
        }

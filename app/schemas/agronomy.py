"""
Agronomy Schemas
================

Pydantic models for phenology and disease risk requests.
"""

from pydantic import BaseModel, ConfigDict, Field


class DailyWeatherEntry(BaseModel):
    """Daily temperature extremes (°C)"""

    max_temp: float = Field(..., alias="maxTemp", description="Daily maximum temperature")
    min_temp: float = Field(..., alias="minTemp", description="Daily minimum temperature")

    model_config = ConfigDict(populate_by_name=True)


class PhenologyRequest(BaseModel):
    """Request model for the phenological stage prediction"""

    daily_weather: list[DailyWeatherEntry] = Field(
        default_factory=list, alias="dailyWeather", description="Daily weather since season start"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "dailyWeather": [
                    {"maxTemp": 24.0, "minTemp": 12.0},
                    {"maxTemp": 26.5, "minTemp": 14.0},
                ]
            }
        },
    )


class DiseaseRiskRequest(BaseModel):
    """Request model for the fungal disease risk assessment"""

    temperature: float = Field(..., description="Air temperature (°C)")
    humidity: float = Field(..., ge=0, le=100, description="Relative humidity (%)")
    leaf_wetness: float = Field(default=0.0, ge=0, alias="leafWetness", description="Leaf wetness duration (h)")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"temperature": 20.0, "humidity": 95.0, "leafWetness": 8.0}},
    )

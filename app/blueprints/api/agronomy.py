"""
Agronomy API Blueprint
======================

Crop model endpoints.

Routes:
- POST /api/agronomy/phenology - Phenological stage from daily weather (GDD)
- POST /api/agronomy/disease-risk - Fungal disease risk from current weather
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response
from pydantic import ValidationError

from app.blueprints.api._common import (
    get_disease_predictor as _disease_predictor,
    get_json as _get_json,
    get_phenology_predictor as _phenology_predictor,
    invalid_request as _invalid_request,
    success as _success,
)
from app.domain.agronomics import DailyTemperature
from app.schemas import DiseaseRiskRequest, PhenologyRequest
from app.utils.http import safe_route

logger = logging.getLogger(__name__)

agronomy_api = Blueprint("agronomy_api", __name__, url_prefix="/api/agronomy")


@agronomy_api.post("/phenology")
@safe_route("Failed to predict phenological stage")
def predict_phenology() -> Response:
    """
    Predict the current phenological stage.

    Request body:
    - dailyWeather: [{maxTemp, minTemp}] since season start (may be empty)

    Returns:
        {currentPhase, nextPhase, progress, gdd, daysToNextPhase}
    """
    try:
        body = PhenologyRequest(**_get_json())
    except ValidationError as ve:
        return _invalid_request(ve)

    days = [DailyTemperature(max_temp=d.max_temp, min_temp=d.min_temp) for d in body.daily_weather]
    return _success(_phenology_predictor().predict(days).to_dict())


@agronomy_api.post("/disease-risk")
@safe_route("Failed to assess disease risk")
def assess_disease_risk() -> Response:
    """
    Assess scab and powdery mildew risk.

    Request body:
    - temperature: °C
    - humidity: %
    - leafWetness: hours (default 0)

    Returns:
        {"risks": [...]} in rule order (scab before powdery mildew)
    """
    try:
        body = DiseaseRiskRequest(**_get_json())
    except ValidationError as ve:
        return _invalid_request(ve)

    risks = _disease_predictor().assess(body.temperature, body.humidity, body.leaf_wetness)
    return _success({"risks": [risk.to_dict() for risk in risks]})

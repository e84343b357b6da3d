"""
Economics API Blueprint
=======================

Routes:
- POST /api/economics/irrigation-cost - Cost of one irrigation run
- POST /api/economics/roi - Return on a yield-raising investment
- POST /api/economics/production-cost - Production cost per kg
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response
from pydantic import ValidationError

from app.blueprints.api._common import (
    get_economic_calculator as _calculator,
    get_json as _get_json,
    invalid_request as _invalid_request,
    success as _success,
)
from app.schemas import IrrigationCostRequest, ProductionCostRequest, RoiRequest
from app.utils.http import safe_route

logger = logging.getLogger(__name__)

economics_api = Blueprint("economics_api", __name__, url_prefix="/api/economics")


@economics_api.post("/irrigation-cost")
@safe_route("Failed to calculate irrigation cost")
def irrigation_cost() -> Response:
    """Water, electricity and labor cost of pumping ``waterVolume`` m³."""
    try:
        body = IrrigationCostRequest(**_get_json())
    except ValidationError as ve:
        return _invalid_request(ve)

    cost = _calculator().irrigation_cost(body.water_volume, body.electricity_rate, body.labor_cost)
    return _success(cost.to_dict())


@economics_api.post("/roi")
@safe_route("Failed to calculate ROI")
def return_on_investment() -> Response:
    """
    Return on investment.

    ``paybackPeriod`` is null when the investment never pays back.
    """
    try:
        body = RoiRequest(**_get_json())
    except ValidationError as ve:
        return _invalid_request(ve)

    result = _calculator().roi(
        body.initial_investment,
        body.yield_increase,
        body.product_price,
        body.operational_costs,
    )
    return _success(result.to_dict())


@economics_api.post("/production-cost")
@safe_route("Failed to calculate production cost")
def production_cost() -> Response:
    try:
        body = ProductionCostRequest(**_get_json())
    except ValidationError as ve:
        return _invalid_request(ve)

    result = _calculator().production_cost(body.operational_costs, body.yield_amount, body.fixed_costs)
    return _success(result.to_dict())

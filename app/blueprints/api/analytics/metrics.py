"""
Metric Analytics Endpoints
==========================

Endpoints for daily metric series, period statistics and metric ingestion.
"""

import logging

from flask import Response, current_app, request
from pydantic import ValidationError

from app.blueprints.api._common import (
    get_analytics_service as _analytics_service,
    get_json as _get_json,
    invalid_request as _invalid_request,
    success as _success,
)
from app.blueprints.api.analytics import analytics_api
from app.enums import AnalyticsPeriod
from app.schemas import MetricRecordRequest
from app.utils.http import safe_route

logger = logging.getLogger(__name__)


def _requested_period() -> AnalyticsPeriod:
    default = current_app.config.get("DEFAULT_PERIOD", AnalyticsPeriod.WEEK.value)
    return AnalyticsPeriod.parse(request.args.get("period") or default)


@analytics_api.get("/gardens/<int:garden_id>/series")
@safe_route("Failed to get metric series")
def get_metric_series(garden_id: int) -> Response:
    """
    Daily aggregated series for chart rendering.

    Query params:
    - period: week|month|quarter (default: week; unknown values use week)
    - metric: Optional metric filter (temperature, humidity, soil_moisture,
      light_level, co2_level)

    Returns:
    - metrics: {metric: [{label, value, date, timestamp}]}
    - period, metric, dataPoints, dateRange, synthetic
    """
    result = _analytics_service().get_metric_series(
        garden_id,
        period=_requested_period(),
        metric=request.args.get("metric"),
    )
    return _success(result.to_dict())


@analytics_api.get("/gardens/<int:garden_id>/statistics")
@safe_route("Failed to get metric statistics")
def get_metric_statistics(garden_id: int) -> Response:
    """
    Average/min/max/count per metric for the period.

    Query params:
    - period: week|month|quarter (default: week)
    """
    period = _requested_period()
    stats = _analytics_service().get_period_statistics(garden_id, period)
    return _success(
        {
            "gardenId": garden_id,
            "period": period.value,
            "statistics": {name: value.to_dict() for name, value in stats.items()},
        }
    )


@analytics_api.post("/gardens/<int:garden_id>/metrics")
@safe_route("Failed to record garden metrics")
def record_metrics(garden_id: int) -> Response:
    """
    Record one reading per metric for a garden.

    Request body:
    - temperature, humidity, soilMoisture, lightLevel, co2Level: at least one
    - recordedAt: Optional ISO 8601 timestamp (default: now)

    Returns 201 when every metric was stored. A partial or total store
    failure returns 503 with the stored/failed breakdown in ``details``.
    """
    try:
        body = MetricRecordRequest(**_get_json())
    except ValidationError as ve:
        return _invalid_request(ve)

    result = _analytics_service().record_metrics(garden_id, body.readings(), recorded_at=body.recorded_at)
    return _success(result.to_dict(), 201, message="Metrics recorded")

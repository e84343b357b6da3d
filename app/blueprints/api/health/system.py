"""
System Health Endpoints
=======================

Liveness and metric store connectivity checks.
"""

from __future__ import annotations

import logging
import sqlite3

from flask import Blueprint, Response

from app.blueprints.api._common import (
    fail as _fail,
    get_database as _database,
    success as _success,
)
from app.enums.common import HealthLevel
from app.utils.http import safe_route
from app.utils.time import iso_now

logger = logging.getLogger("health_api")


def register_system_routes(health_api: Blueprint):
    """Register system health routes on the blueprint."""

    @health_api.get("/ping")
    @safe_route("Failed to handle ping request")
    def ping() -> Response:
        """
        Basic liveness check for monitoring tools.

        Returns:
            {"status": "ok", "timestamp": "..."}
        """
        return _success({"status": "ok", "timestamp": iso_now()})

    @health_api.get("")
    @safe_route("Failed to get system health")
    def get_health() -> Response:
        """
        Probe the metric store with ``SELECT 1``.

        Returns 200 ``healthy`` when the store answers, 503 ``unhealthy``
        otherwise.
        """
        try:
            _database().ping()
        except sqlite3.Error as e:
            logger.error("Health check failed: %s", e)
            return _fail(
                "Metric store unavailable",
                503,
                details={"status": str(HealthLevel.UNHEALTHY), "database": "disconnected", "timestamp": iso_now()},
            )

        return _success({"status": str(HealthLevel.HEALTHY), "database": "connected", "timestamp": iso_now()})

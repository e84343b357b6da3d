"""
Blueprint Common Utilities
==========================

Shared helper functions for all API blueprints.
Import these instead of duplicating helper code in each blueprint.

Usage:
    from app.blueprints.api._common import (
        get_container, get_json, success, fail,
        get_analytics_service, get_economic_calculator, ...
    )

This module centralizes:
- Service container access
- Request JSON parsing
- Standardized response helpers
- Common service accessors
"""
from __future__ import annotations

import logging

from flask import current_app, request
from pydantic import ValidationError

from app.utils.http import error_response, success_response

logger = logging.getLogger("api._common")

# ============================================================================
# CONTAINER ACCESS
# ============================================================================

def get_container():
    """
    Get the service container from Flask app config.

    Returns:
        ServiceContainer: The application service container

    Raises:
        RuntimeError: If container is not configured
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


# ============================================================================
# REQUEST HELPERS
# ============================================================================

def get_json() -> dict:
    """
    Get JSON request body with silent failure.

    Returns:
        dict: Parsed JSON body or empty dict if not available
    """
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


# ============================================================================
# RESPONSE HELPERS
# ============================================================================

def success(data: dict | list | None = None, status: int = 200, *, message: str | None = None):
    """
    Standard success response wrapper.

    Returns:
        Flask Response with format: {"ok": true, "data": ..., "error": null}
    """
    return success_response(data, status, message=message)


def fail(message: str, status: int = 400, *, details: dict | None = None):
    """
    Standard error response wrapper.

    Returns:
        Flask Response with format: {"ok": false, "data": null, "error": {...}}
    """
    return error_response(message, status, details=details)


def invalid_request(ve: ValidationError):
    """400 response listing pydantic validation errors."""
    return fail(
        "Invalid request",
        400,
        details={"errors": ve.errors(include_url=False, include_context=False)},
    )


# ============================================================================
# SERVICE ACCESSORS
# ============================================================================

def get_database():
    """Get the SQLite database handler."""
    return get_container().database


def get_analytics_service():
    """Get the metric analytics service."""
    return get_container().analytics_service


def get_phenology_predictor():
    """Get the GDD phenology predictor."""
    return get_container().phenology_predictor


def get_disease_predictor():
    """Get the fungal disease risk predictor."""
    return get_container().disease_predictor


def get_economic_calculator():
    """Get the economic calculator."""
    return get_container().economic_calculator

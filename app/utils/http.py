from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from flask import Response, jsonify

from app.utils.time import iso_now

_log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Generic user-facing messages: never leak internals
# ---------------------------------------------------------------------------
_GENERIC_MESSAGES: dict[int, str] = {
    400: "Invalid request",
    404: "Resource not found",
    405: "Method not allowed",
    500: "An internal error occurred",
    503: "Service temporarily unavailable",
}


def safe_error(
    exc: BaseException,
    status: int = 500,
    *,
    context: str = "",
    details: dict | None = None,
) -> Response:
    """Return a generic error response while logging the real exception.

    Parameters
    ----------
    exc:
        The caught exception: logged server-side, **never** sent to the
        client.
    status:
        HTTP status code for the response (determines the generic message).
    context:
        Optional human-readable context string logged alongside *exc*,
        e.g. ``"recording garden metrics"``.
    details:
        Structured context the exception explicitly allows clients to see.
    """
    _log.error("API error [%s] %s: %s", status, context, exc, exc_info=exc)
    message = _GENERIC_MESSAGES.get(status, _GENERIC_MESSAGES[500])
    return error_response(message, status, details=details)


def success_response(
    data: dict | list | None = None,
    status: int = 200,
    *,
    message: str | None = None,
) -> Response:
    payload: dict[str, Any] = {"ok": True, "data": data, "error": None}
    if message is not None:
        payload["message"] = message
    response = jsonify(payload)
    response.status_code = status
    return response


def error_response(
    message: str,
    status: int = 500,
    *,
    details: dict | None = None,
) -> Response:
    payload: dict[str, Any] = {"message": message, "timestamp": iso_now()}
    response_body: dict[str, Any] = {
        "ok": False,
        "data": None,
        "error": payload,
        "message": message,
    }
    if details:
        response_body["details"] = details
    response = jsonify(response_body)
    response.status_code = status
    return response


def garden_error_response(exc: BaseException, *, context: str = "") -> Response:
    """Map a :class:`~app.domain.exceptions.GardenError` onto the envelope.

    4xx errors carry their own message; 5xx errors are logged and replaced
    by a generic message. ``exc.detail`` is only sent when the exception
    class sets ``expose_detail``.
    """
    status = getattr(exc, "http_status", 500)
    details = exc.detail if getattr(exc, "expose_detail", False) else None
    if status >= 500:
        return safe_error(exc, status, context=context, details=details)
    return error_response(str(exc) or _GENERIC_MESSAGES.get(status, "Invalid request"), status, details=details)


# ---------------------------------------------------------------------------
# Route decorator: eliminates per-route try/except boilerplate
# ---------------------------------------------------------------------------


def safe_route(
    error_message: str = "An internal error occurred",
    *,
    error_status: int = 500,
) -> Callable:
    """Decorator that wraps a Flask route handler with standardized error handling.

    Catches :class:`~app.domain.exceptions.GardenError` subclasses and maps
    them to the correct HTTP status via ``exc.http_status``. Any other
    ``Exception`` is logged and returns a generic 500.

    Usage::

        @analytics_api.get("/gardens/<int:garden_id>/series")
        @safe_route("Failed to get metric series")
        def get_metric_series(garden_id: int):
            svc = _analytics_service()
            ...

    Parameters
    ----------
    error_message:
        Context logged with 5xx errors.
    error_status:
        Default HTTP status for non-GardenError exceptions (default 500).
    """
    from app.domain.exceptions import GardenError

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Response:
            try:
                return fn(*args, **kwargs)
            except GardenError as exc:
                return garden_error_response(exc, context=error_message)
            except Exception as exc:
                return safe_error(exc, error_status, context=error_message)

        return wrapper

    return decorator

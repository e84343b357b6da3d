"""Centralized exception hierarchy for the garden analytics service.

All domain and service exceptions inherit from :class:`GardenError` so that
callers can catch a single base class when they need a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

Blueprint-level error handling (see ``app/utils/http.safe_route``) maps these
to the correct HTTP status codes automatically.

Hierarchy
---------
::

    GardenError (base, maps to 500)
    ├── ValidationError             (400: bad input from caller)
    ├── StoreUnavailableError       (503: metric store read/write failed)
    │   └── PartialWriteError       (503: some metrics of a batch failed)
    └── ConfigurationError          (500: missing / invalid config)
"""

from __future__ import annotations


class GardenError(Exception):
    """Base exception for all garden analytics errors.

    Parameters
    ----------
    message:
        Human-readable description (logged server-side, **not** leaked to
        the HTTP client unless the exception class opts in).
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    http_status: int = 500
    expose_detail: bool = False

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(GardenError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400
    expose_detail: bool = True


# ── Server errors (5xx) ──────────────────────────────────────────────


class StoreUnavailableError(GardenError):
    """The metric reading store could not be read or written (HTTP 503).

    Never replaced by synthetic data: the fallback series only covers an
    *empty* store, not a failing one.
    """

    http_status: int = 503
    expose_detail: bool = True


class PartialWriteError(StoreUnavailableError):
    """Some metric writes of a single request failed (HTTP 503).

    ``detail`` carries ``stored`` (metric → row id) and ``failed``
    (metric → reason) so the caller can tell what was persisted.
    """


class ConfigurationError(GardenError):
    """Missing or invalid application configuration (HTTP 500)."""

    http_status: int = 500

from __future__ import annotations

import atexit
import logging
import threading
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from app.blueprints.api.agronomy import agronomy_api
from app.blueprints.api.analytics import analytics_api
from app.blueprints.api.economics import economics_api
from app.blueprints.api.health import health_api
from app.config import load_config, setup_logging


def create_app(config_overrides: dict[str, Any] | None = None) -> Flask:
    config = load_config()
    if config_overrides:
        for key, value in config_overrides.items():
            setattr(config, key.lower(), value)

    # Configure logging early so container startup is visible in the terminal and log file.
    setup_logging(debug=config.DEBUG, log_level=config.log_level, log_path=config.log_path)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())

    from app.services.container import ServiceContainer

    container = ServiceContainer.build(config, app=flask_app)
    flask_app.config["CONTAINER"] = container

    # ── Graceful shutdown ───────────────────────────────────────────
    _shutdown_lock = threading.Lock()
    _shutdown_done = False

    def _graceful_shutdown(reason: str = "unknown") -> None:
        nonlocal _shutdown_done
        with _shutdown_lock:
            if _shutdown_done:
                return
            _shutdown_done = True
        logging.info("Graceful shutdown initiated (%s)", reason)
        try:
            container.shutdown()
        except Exception as exc:
            logging.warning("Error during graceful shutdown: %s", exc)

    atexit.register(_graceful_shutdown, "atexit")

    # Global JSON error handler: catches any unhandled exception on /api/
    # routes and returns a generic message instead of leaking stack traces.
    # Domain exceptions carry their own ``http_status``.
    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        if not request.path.startswith("/api/"):
            raise exc
        from app.domain.exceptions import GardenError
        from app.utils.http import error_response, garden_error_response, safe_error

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, GardenError):
            return garden_error_response(exc, context=type(exc).__name__)

        return safe_error(exc, 500, context="unhandled")

    # ── API version prefix ──────────────────────────────────────────
    V1 = "/api/v1"

    flask_app.register_blueprint(analytics_api, url_prefix=f"{V1}/analytics")
    flask_app.register_blueprint(agronomy_api, url_prefix=f"{V1}/agronomy")
    flask_app.register_blueprint(economics_api, url_prefix=f"{V1}/economics")
    flask_app.register_blueprint(health_api, url_prefix=f"{V1}/health")

    for bp_name, _bp in flask_app.blueprints.items():
        logging.debug(f" Registered blueprint: {bp_name}")

    # ── Backward-compat: rewrite /api/* → /api/v1/* ─────────────
    # WSGI-level rewrite (no HTTP redirect: fully transparent to clients).
    _original_wsgi = flask_app.wsgi_app

    def _legacy_api_rewrite(environ, start_response):
        path = environ.get("PATH_INFO", "")
        if path.startswith("/api/") and not path.startswith("/api/v1/"):
            environ["PATH_INFO"] = "/api/v1" + path[4:]
        return _original_wsgi(environ, start_response)

    flask_app.wsgi_app = _legacy_api_rewrite  # type: ignore[assignment]

    logger = logging.getLogger(__name__)
    logger.info("Smart Garden application initialized successfully.")

    return flask_app


__all__ = ["create_app"]

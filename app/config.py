"""
Configuration for the Smart Garden Analytics service
====================================================
Runtime settings loaded from ``GARDEN_*`` environment variables.
Sets up the logging configuration as well.
"""

import os
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

from app.domain.exceptions import ConfigurationError
from app.enums import AnalyticsPeriod

DEFAULT_SECRET_KEY = "GardenDevSecretKey"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("GARDEN_ENV", "development"))
    secret_key: str = field(default_factory=lambda: os.getenv("GARDEN_SECRET_KEY", DEFAULT_SECRET_KEY))
    database_path: str = field(default_factory=lambda: os.getenv("GARDEN_DATABASE_PATH", "database/garden.db"))
    db_cache_size_kb: int = field(default_factory=lambda: _env_int("GARDEN_DB_CACHE_SIZE_KB", 8_000))

    DEBUG: bool = field(default_factory=lambda: _env_bool("GARDEN_DEBUG", False))
    log_level: str = field(default_factory=lambda: os.getenv("GARDEN_LOG_LEVEL", "INFO"))
    log_path: str = field(default_factory=lambda: os.getenv("GARDEN_LOG_PATH", "logs/garden.log"))

    # Analytics
    default_period: str = field(default_factory=lambda: os.getenv("GARDEN_DEFAULT_PERIOD", "week"))
    write_workers: int = field(default_factory=lambda: _env_int("GARDEN_WRITE_WORKERS", 5))

    # Agronomy / economics
    gdd_base_temp_c: float = field(default_factory=lambda: _env_float("GARDEN_GDD_BASE_TEMP_C", 10.0))
    water_price_per_m3: float = field(default_factory=lambda: _env_float("GARDEN_WATER_PRICE", 0.15))
    pump_kwh_per_m3: float = field(default_factory=lambda: _env_float("GARDEN_PUMP_KWH_PER_M3", 0.1))

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # SECURITY: Fail fast if using default secret key in production
        if self.environment == "production" and self.secret_key == DEFAULT_SECRET_KEY:
            raise ConfigurationError(
                "Cannot use default secret key in production. "
                "Set GARDEN_SECRET_KEY environment variable to a secure random value."
            )
        if self.write_workers < 1:
            raise ConfigurationError("GARDEN_WRITE_WORKERS must be at least 1")

        # Unknown period tokens fall back to week, same as request parameters
        self.default_period = AnalyticsPeriod.parse(self.default_period).value

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        if not self.secret_key:
            raise ConfigurationError("Missing GARDEN_SECRET_KEY environment variable.")

        return {
            "ENV": self.environment,
            "SECRET_KEY": self.secret_key,
            "DATABASE_PATH": self.database_path,
            "DEFAULT_PERIOD": self.default_period,
            "DEBUG": self.DEBUG,
        }


def setup_logging(debug: bool = False, *, log_level: str = "INFO", log_path: str | None = "logs/garden.log") -> None:
    """Setup logging configuration."""
    import logging
    import sys
    from logging.handlers import RotatingFileHandler

    level = logging.DEBUG if debug else logging.getLevelName(str(log_level).upper())
    if not isinstance(level, int):
        level = logging.INFO

    # Root logger
    root = logging.getLogger()
    root.setLevel(level)

    # Keep existing handlers but avoid adding duplicates when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "garden_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "garden_file" for h in root.handlers)
    added_handler = False

    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "garden_console"
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    # File handler
    if log_path and not has_file:
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "garden_file"
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    # Ensure handler levels follow the desired log level
    for handler in root.handlers:
        if getattr(handler, "name", "") in {"garden_console", "garden_file"}:
            handler.setLevel(level)

    if added_handler:
        root.info(f"Logging initialized at level: {logging.getLevelName(level)}")

    if _env_bool("GARDEN_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    return AppConfig()

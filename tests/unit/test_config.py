"""Tests for environment-driven AppConfig."""

import logging

import pytest

from app.config import DEFAULT_SECRET_KEY, AppConfig, setup_logging
from app.domain.exceptions import ConfigurationError


def test_defaults(monkeypatch):
    for name in ("GARDEN_ENV", "GARDEN_DATABASE_PATH", "GARDEN_WRITE_WORKERS", "GARDEN_DEFAULT_PERIOD"):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig()

    assert config.environment == "development"
    assert config.database_path == "database/garden.db"
    assert config.write_workers == 5
    assert config.default_period == "week"
    assert config.gdd_base_temp_c == 10.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GARDEN_WRITE_WORKERS", "2")
    monkeypatch.setenv("GARDEN_WATER_PRICE", "0.4")
    monkeypatch.setenv("GARDEN_DEFAULT_PERIOD", "Quarter")
    monkeypatch.setenv("GARDEN_DEBUG", "yes")

    config = AppConfig()

    assert config.write_workers == 2
    assert config.water_price_per_m3 == 0.4
    assert config.default_period == "quarter"
    assert config.DEBUG is True
    assert config.as_flask_config()["DEFAULT_PERIOD"] == "quarter"


def test_unknown_default_period_becomes_week(monkeypatch):
    monkeypatch.setenv("GARDEN_DEFAULT_PERIOD", "year")

    assert AppConfig().default_period == "week"


def test_non_integer_env_rejected(monkeypatch):
    monkeypatch.setenv("GARDEN_WRITE_WORKERS", "many")

    with pytest.raises(ValueError):
        AppConfig()


def test_default_secret_refused_in_production(monkeypatch):
    monkeypatch.setenv("GARDEN_ENV", "production")
    monkeypatch.delenv("GARDEN_SECRET_KEY", raising=False)

    with pytest.raises(ConfigurationError):
        AppConfig()

    monkeypatch.setenv("GARDEN_SECRET_KEY", "s3cret")
    assert AppConfig().secret_key != DEFAULT_SECRET_KEY


def test_setup_logging_is_idempotent(tmp_path):
    log_path = tmp_path / "logs" / "garden.log"

    setup_logging(log_path=str(log_path))
    setup_logging(log_path=str(log_path))

    names = [h.name for h in logging.getLogger().handlers]
    assert names.count("garden_console") == 1
    assert names.count("garden_file") <= 1

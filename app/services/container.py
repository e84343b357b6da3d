from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from flask import Flask

from app.config import AppConfig
from app.domain.economics import EconomicCalculator
from app.services.ai.disease_predictor import DiseasePredictor
from app.services.ai.plant_growth_predictor import PhenologyPredictor
from app.services.application.analytics_service import AnalyticsService
from app.services.utilities.synthetic_series import SyntheticSeriesGenerator
from infrastructure.database.repositories.metrics import MetricRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate and manage core backend services."""

    config: AppConfig
    database: SQLiteDatabaseHandler
    metric_repo: MetricRepository
    analytics_service: AnalyticsService
    # Agronomy / economics models
    phenology_predictor: PhenologyPredictor
    disease_predictor: DiseasePredictor
    economic_calculator: EconomicCalculator

    @classmethod
    def build(cls, config: AppConfig, *, app: Optional[Flask] = None) -> "ServiceContainer":
        """Construct the service container with all dependencies.

        Args:
            config: Application configuration
            app: Flask app whose teardown closes per-thread DB connections
        """
        logger.info("Building ServiceContainer...")
        database = SQLiteDatabaseHandler(config.database_path, cache_size_kb=config.db_cache_size_kb)
        database.init_app(app)

        metric_repo = MetricRepository(database)
        container = cls(
            config=config,
            database=database,
            metric_repo=metric_repo,
            analytics_service=AnalyticsService(
                metric_repo,
                SyntheticSeriesGenerator(),
                write_workers=config.write_workers,
            ),
            phenology_predictor=PhenologyPredictor(base_temp_c=config.gdd_base_temp_c),
            disease_predictor=DiseasePredictor(),
            economic_calculator=EconomicCalculator(
                water_price_per_m3=config.water_price_per_m3,
                pump_kwh_per_m3=config.pump_kwh_per_m3,
            ),
        )
        logger.info("ServiceContainer built successfully.")
        return container

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        self.database.close()
        logger.info("ServiceContainer shutdown complete.")

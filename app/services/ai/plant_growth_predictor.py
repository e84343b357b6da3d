"""
Phenology Prediction Service
============================
Predicts the developmental stage of a crop from its accumulated
growing-degree-days (GDD).

The model is deterministic and stateless: every call recomputes GDD from
the daily temperatures it is given.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from app.domain.agronomics import (
    DEFAULT_GDD_BASE_TEMP_C,
    DailyTemperature,
    PhenophaseResult,
    calculate_daily_gdd,
    stage_for_gdd,
)

logger = logging.getLogger(__name__)


class PhenologyPredictor:
    """
    Growing-degree-day phenology model.

    Sums daily heat units above a base temperature and places the total on
    the ordered stage table from ``app.domain.agronomics``.
    """

    def __init__(self, base_temp_c: float = DEFAULT_GDD_BASE_TEMP_C):
        self.base_temp_c = float(base_temp_c)

    def predict(
        self,
        daily_weather: Iterable[DailyTemperature | Mapping[str, Any]],
    ) -> PhenophaseResult:
        """
        Predict the current phenological phase.

        Args:
            daily_weather: Daily max/min temperatures, as DailyTemperature
                objects or mappings with ``maxTemp``/``minTemp`` keys.

        Returns:
            PhenophaseResult for the accumulated GDD. An empty sequence
            yields the dormant stage with zero progress.
        """
        days = [day if isinstance(day, DailyTemperature) else DailyTemperature.from_mapping(day) for day in daily_weather]
        gdd = calculate_daily_gdd(days, base_temp_c=self.base_temp_c)
        result = stage_for_gdd(gdd)

        logger.debug(
            "Phenology: %d days, gdd=%.1f, phase=%s (%.0f%% to %s)",
            len(days),
            gdd,
            result.current_phase,
            result.progress,
            result.next_phase,
        )
        return result

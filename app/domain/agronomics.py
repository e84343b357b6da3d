from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from app.enums import PhenologicalStage

logger = logging.getLogger(__name__)

DEFAULT_GDD_BASE_TEMP_C = 10.0

# Ascending (cumulative GDD threshold, stage) pairs.
PHENOLOGY_STAGE_THRESHOLDS: tuple[tuple[float, PhenologicalStage], ...] = (
    (0.0, PhenologicalStage.DORMANT),
    (100.0, PhenologicalStage.BUD_SWELL),
    (200.0, PhenologicalStage.BUD_BREAK),
    (300.0, PhenologicalStage.LEAF_EMERGENCE),
    (500.0, PhenologicalStage.BLOOM),
    (800.0, PhenologicalStage.BERRY_SET),
    (1200.0, PhenologicalStage.VERAISON),
    (1600.0, PhenologicalStage.FULL_MATURITY),
)

# Rough accrual rate used to turn remaining GDD into days.
ASSUMED_GDD_PER_DAY = 10.0


@dataclass(frozen=True)
class DailyTemperature:
    """Daily temperature extremes (°C)."""

    max_temp: float
    min_temp: float

    @property
    def mean_temp(self) -> float:
        return (self.max_temp + self.min_temp) / 2

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DailyTemperature":
        """Accept both ``maxTemp``/``minTemp`` and ``max_temp``/``min_temp`` keys."""
        max_temp = data.get("maxTemp", data.get("max_temp"))
        min_temp = data.get("minTemp", data.get("min_temp"))
        if max_temp is None or min_temp is None:
            raise ValueError("daily weather entries need maxTemp and minTemp")
        return cls(max_temp=float(max_temp), min_temp=float(min_temp))


@dataclass(frozen=True)
class PhenophaseResult:
    """Phenological stage derived from cumulative GDD."""

    current_phase: PhenologicalStage
    next_phase: PhenologicalStage
    progress: float
    gdd: float
    days_to_next_phase: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentPhase": self.current_phase.value,
            "nextPhase": self.next_phase.value,
            "progress": round(self.progress, 1),
            "gdd": round(self.gdd, 1),
            "daysToNextPhase": self.days_to_next_phase,
        }


def calculate_daily_gdd(
    daily_weather: Iterable[DailyTemperature],
    *,
    base_temp_c: float = DEFAULT_GDD_BASE_TEMP_C,
) -> float:
    """
    Calculate Growing Degree Days from daily temperature extremes.

    GDD = Σ max((Tmax + Tmin) / 2 - base_temp, 0)

    An empty sequence yields 0.0.
    """
    base = float(base_temp_c)
    return float(sum(max(0.0, day.mean_temp - base) for day in daily_weather))


def stage_for_gdd(gdd: float) -> PhenophaseResult:
    """
    Map cumulative GDD onto the stage table.

    The current stage is the highest threshold <= gdd and the next stage is
    the first threshold > gdd. Past the last threshold the crop stays at full
    maturity with progress 100 and no days remaining.
    """
    current_threshold, current_stage = PHENOLOGY_STAGE_THRESHOLDS[0]
    for threshold, stage in PHENOLOGY_STAGE_THRESHOLDS:
        if gdd >= threshold:
            current_threshold, current_stage = threshold, stage
            continue

        span = threshold - current_threshold
        progress = min(100.0, max(0.0, (gdd - current_threshold) / span * 100.0))
        return PhenophaseResult(
            current_phase=current_stage,
            next_phase=stage,
            progress=progress,
            gdd=gdd,
            days_to_next_phase=math.ceil((threshold - gdd) / ASSUMED_GDD_PER_DAY),
        )

    return PhenophaseResult(
        current_phase=current_stage,
        next_phase=current_stage,
        progress=100.0,
        gdd=gdd,
        days_to_next_phase=0,
    )

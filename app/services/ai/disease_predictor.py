"""
Disease Prediction Service
===========================
Scores fungal disease risk from instantaneous weather conditions.

Two independent threshold rules are evaluated on every call:

- Scab: very humid (> 90 %) and mild (10–25 °C), worsened by leaf wetness.
- Powdery mildew: warm (15–30 °C) and humid (> 70 %).

A reading can trigger neither, either or both rules. Findings are returned
scab first, then powdery mildew.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.enums import DiseaseType, RiskLevel

logger = logging.getLogger(__name__)

SCAB_MAX_PROBABILITY = 95.0
POWDERY_MILDEW_MAX_PROBABILITY = 90.0


@dataclass
class DiseaseRisk:
    """
    Disease risk assessment result.

    Attributes:
        disease_type: Disease the rule scores
        risk_level: Risk level bucket of the score
        risk_score: Raw rule score
        probability: Score scaled to a capped percentage
        recommendation: Suggested treatment
    """

    disease_type: DiseaseType
    risk_level: RiskLevel
    risk_score: float
    probability: float
    recommendation: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "disease": self.disease_type.display_name,
            "diseaseType": self.disease_type.value,
            "riskLevel": self.risk_level.value,
            "riskScore": round(self.risk_score, 2),
            "probability": round(self.probability, 1),
            "recommendation": self.recommendation,
        }


def _risk_level(score: float, *, high_above: float, medium_above: float) -> RiskLevel:
    if score > high_above:
        return RiskLevel.HIGH
    if score > medium_above:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


class DiseasePredictor:
    """
    Rule-based disease risk model.

    Stateless: every call is a pure function of its three inputs.
    """

    def assess(
        self,
        temperature: float,
        humidity: float,
        leaf_wetness: float = 0.0,
    ) -> list[DiseaseRisk]:
        """
        Assess disease risks for the current conditions.

        Args:
            temperature: Air temperature (°C)
            humidity: Relative humidity (%)
            leaf_wetness: Leaf wetness reading (0-10 scale in practice)

        Returns:
            Triggered findings, scab before powdery mildew
        """
        risks: list[DiseaseRisk] = []

        scab = self._assess_scab_risk(temperature, humidity, leaf_wetness)
        if scab:
            risks.append(scab)

        mildew = self._assess_powdery_mildew_risk(temperature, humidity)
        if mildew:
            risks.append(mildew)

        logger.debug(
            "Disease risk for T=%s H=%s LW=%s: %s",
            temperature,
            humidity,
            leaf_wetness,
            [f"{r.disease_type}:{r.risk_level}" for r in risks] or "none",
        )
        return risks

    def _assess_scab_risk(self, temperature: float, humidity: float, leaf_wetness: float) -> DiseaseRisk | None:
        if not (humidity > 90 and 10 < temperature < 25):
            return None

        score = (humidity - 85) * 0.1 + leaf_wetness / 10
        level = _risk_level(score, high_above=7, medium_above=4)
        recommendation = (
            "Urgent fungicide treatment" if level == RiskLevel.HIGH else "Preventive fungicide treatment"
        )
        return DiseaseRisk(
            disease_type=DiseaseType.SCAB,
            risk_level=level,
            risk_score=score,
            probability=min(SCAB_MAX_PROBABILITY, score * 10),
            recommendation=recommendation,
        )

    def _assess_powdery_mildew_risk(self, temperature: float, humidity: float) -> DiseaseRisk | None:
        if not (15 < temperature < 30 and humidity > 70):
            return None

        score = (temperature - 15) * 0.5 + (humidity - 70) * 0.3
        return DiseaseRisk(
            disease_type=DiseaseType.POWDERY_MILDEW,
            risk_level=_risk_level(score, high_above=6, medium_above=3),
            risk_score=score,
            probability=min(POWDERY_MILDEW_MAX_PROBABILITY, score * 12),
            recommendation="Apply sulfur-based treatment",
        )

"""
AI Services
===========
Agronomic prediction models.

Services:
- PhenologyPredictor: Growing-degree-day phenological stage model
- DiseasePredictor: Rule-based fungal disease risk

All public symbols are importable via ``from app.services.ai import X``.
Imports are **lazy**: each submodule is loaded only when one of its
symbols is first accessed.
"""

from __future__ import annotations

import importlib
from typing import Any

# ── Symbol → submodule mapping ──────────────────────────────────────
_LAZY_IMPORTS: dict[str, str] = {
    # disease_predictor
    "DiseasePredictor": "app.services.ai.disease_predictor",
    "DiseaseRisk": "app.services.ai.disease_predictor",
    # plant_growth_predictor
    "PhenologyPredictor": "app.services.ai.plant_growth_predictor",
}

__all__ = list(_LAZY_IMPORTS.keys())


def __getattr__(name: str) -> Any:
    """Lazy-load symbols on first access."""
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = importlib.import_module(module_path)
    value = getattr(module, name)
    # Cache on the module so subsequent accesses skip __getattr__
    globals()[name] = value
    return value

"""Fuzzy irrigation decision engine.

The public functions below are pure and synchronous; repeated calls with
identical arguments return identical results.
"""

from __future__ import annotations

from .growth_stage import CropType, GrowthStage, resolve_stage, stage_bounds
from .irrigation import (
    IrrigationDecision,
    IrrigationInputs,
    IrrigationReport,
    calculate_irrigation,
    classify_level,
    evaluate_planting,
)
from .plant_health import (
    PlantHealthAssessment,
    assess_plant_health,
    calculate_recent_irrigation_score,
)
from .safety import SafetyMessage, apply_overrides
from .volume import estimate_volume

__all__ = [
    "CropType",
    "GrowthStage",
    "IrrigationDecision",
    "IrrigationInputs",
    "IrrigationReport",
    "PlantHealthAssessment",
    "SafetyMessage",
    "apply_overrides",
    "assess_plant_health",
    "calculate_irrigation",
    "calculate_recent_irrigation_score",
    "classify_level",
    "estimate_volume",
    "evaluate_planting",
    "resolve_stage",
    "stage_bounds",
]

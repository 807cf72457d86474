"""Irrigation decision pipeline combining fuzzy rules, safety and volume."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple

from .growth_stage import GrowthStage, resolve_stage
from .plant_health import (
    PlantHealthAssessment,
    assess_plant_health,
    calculate_recent_irrigation_score,
)
from .recommendations import recommend_actions
from .rule_engine import FuzzyInputs, evaluate_rules
from .safety import SafetyMessage, apply_overrides
from .utils import clamp_pct
from .volume import estimate_volume

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "IrrigationLabel",
    "RiskLevel",
    "IrrigationInputs",
    "IrrigationDecision",
    "IrrigationReport",
    "classify_level",
    "calculate_irrigation",
    "evaluate_planting",
]


class IrrigationLabel:
    NONE = "No Irrigation"
    LIGHT = "Light Irrigation"
    MODERATE = "Moderate Irrigation"
    HEAVY = "Heavy Irrigation"


class RiskLevel:
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class IrrigationInputs:
    """Readings and crop context for a single decision.

    Percentages are soil moisture, relative humidity, rain probability,
    plant health score and recent irrigation score. Temperature is in °C.
    """

    soil: float
    humidity: float
    temperature: float
    forecast: float
    plant_health: float
    recent_irrigation: float
    crop_type: str
    days_since_planting: float = 30

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "IrrigationInputs":
        return cls(
            soil=float(data["soil"]),
            humidity=float(data["humidity"]),
            temperature=float(data["temperature"]),
            forecast=float(data["forecast"]),
            plant_health=float(data["plant_health"]),
            recent_irrigation=float(data["recent_irrigation"]),
            crop_type=str(data["crop_type"]),
            days_since_planting=float(data.get("days_since_planting", 30)),
        )

    def clamped(self) -> "IrrigationInputs":
        """Return a copy with every percentage clamped to 0-100."""
        return IrrigationInputs(
            soil=clamp_pct(self.soil),
            humidity=clamp_pct(self.humidity),
            temperature=self.temperature,
            forecast=clamp_pct(self.forecast),
            plant_health=clamp_pct(self.plant_health),
            recent_irrigation=clamp_pct(self.recent_irrigation),
            crop_type=self.crop_type,
            days_since_planting=self.days_since_planting,
        )


@dataclass(frozen=True)
class IrrigationDecision:
    """Final irrigation recommendation for one planting unit."""

    raw_level: float
    level: float
    label: str
    risk_level: str
    safety: SafetyMessage
    stage: GrowthStage | None
    ml_per_plant: float
    total_volume_ml: float
    total_volume_liters: float

    @property
    def safety_message(self) -> str:
        return self.safety.text

    def as_dict(self) -> Dict[str, Any]:
        return {
            "raw_level": self.raw_level,
            "level": self.level,
            "label": self.label,
            "risk_level": self.risk_level,
            "safety": self.safety.value,
            "safety_message": self.safety.text,
            "safety_severity": self.safety.severity.value,
            "stage": self.stage.value if self.stage else None,
            "ml_per_plant": self.ml_per_plant,
            "total_volume_ml": self.total_volume_ml,
            "total_volume_liters": self.total_volume_liters,
        }


@dataclass(frozen=True)
class IrrigationReport:
    """Health assessment, decision and advice produced from raw history."""

    recent_irrigation_score: float
    health: PlantHealthAssessment
    decision: IrrigationDecision
    recommendations: Tuple[str, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "recent_irrigation_score": self.recent_irrigation_score,
            "health": self.health.as_dict(),
            "decision": self.decision.as_dict(),
            "recommendations": list(self.recommendations),
        }


def classify_level(level: float, soil: float, recent_irrigation: float) -> Tuple[str, str]:
    """Return ``(label, risk_level)`` for a final irrigation ``level``."""

    if level <= 20:
        return IrrigationLabel.NONE, RiskLevel.LOW
    if level <= 40:
        return IrrigationLabel.LIGHT, RiskLevel.LOW
    if level <= 65:
        return IrrigationLabel.MODERATE, RiskLevel.MEDIUM if soil > 60 else RiskLevel.LOW
    if soil > 50 or recent_irrigation > 40:
        return IrrigationLabel.HEAVY, RiskLevel.HIGH
    return IrrigationLabel.HEAVY, RiskLevel.MEDIUM


def calculate_irrigation(inputs: IrrigationInputs | Mapping[str, Any]) -> IrrigationDecision:
    """Return the irrigation decision for ``inputs``.

    The fuzzy rule level is passed through the safety overrides, labelled,
    and converted into a water volume for the crop's current growth stage.
    The function never raises for numeric input or unknown crops.
    """

    if not isinstance(inputs, IrrigationInputs):
        inputs = IrrigationInputs.from_mapping(inputs)
    values = inputs.clamped()

    raw_level = evaluate_rules(
        FuzzyInputs(
            soil=values.soil,
            humidity=values.humidity,
            temperature=values.temperature,
            forecast=values.forecast,
            plant_health=values.plant_health,
            recent_irrigation=values.recent_irrigation,
        )
    )
    safety = apply_overrides(
        raw_level, values.soil, values.recent_irrigation, values.plant_health
    )
    label, risk = classify_level(safety.level, values.soil, values.recent_irrigation)

    stage = resolve_stage(values.crop_type, values.days_since_planting)
    volume = estimate_volume(safety.level, values.crop_type, stage)
    _LOGGER.debug(
        "Irrigation raw=%.2f final=%.2f stage=%s volume=%.1f mL",
        raw_level,
        safety.level,
        stage.value if stage else None,
        volume.total_ml,
    )

    display = volume.as_dict()
    return IrrigationDecision(
        raw_level=raw_level,
        level=safety.level,
        label=label,
        risk_level=risk,
        safety=safety.message,
        stage=stage,
        ml_per_plant=display["ml_per_plant"],
        total_volume_ml=display["total_ml"],
        total_volume_liters=display["total_liters"],
    )


def evaluate_planting(
    *,
    soil: float,
    humidity: float,
    temperature: float,
    forecast: float,
    irrigation_history: Iterable[float | None],
    crop_type: str,
    days_since_planting: float = 30,
) -> IrrigationReport:
    """Run the full flow from raw irrigation history to advice.

    The recent irrigation score feeds the health assessment, and both feed
    :func:`calculate_irrigation`.
    """

    recent = calculate_recent_irrigation_score(list(irrigation_history))
    health = assess_plant_health(
        clamp_pct(soil), recent, crop_type, days_since_planting
    )
    decision = calculate_irrigation(
        IrrigationInputs(
            soil=soil,
            humidity=humidity,
            temperature=temperature,
            forecast=forecast,
            plant_health=health.score,
            recent_irrigation=recent,
            crop_type=crop_type,
            days_since_planting=days_since_planting,
        )
    )
    advice = recommend_actions(
        soil=clamp_pct(soil),
        recent_irrigation=recent,
        health_score=health.score,
        safety=decision.safety,
    )
    return IrrigationReport(
        recent_irrigation_score=recent,
        health=health,
        decision=decision,
        recommendations=tuple(advice),
    )

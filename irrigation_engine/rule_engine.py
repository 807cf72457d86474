"""Fuzzy rule bank mapping environmental inputs to an irrigation level."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .membership import Dimension, memberships

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "NO_IRRIGATION",
    "LIGHT_IRRIGATION",
    "MODERATE_IRRIGATION",
    "HEAVY_IRRIGATION",
    "FuzzyInputs",
    "FuzzyRule",
    "RULES",
    "fuzzify",
    "rule_strengths",
    "evaluate_rules",
]

# Consequent levels in percent.
NO_IRRIGATION = 0.0
LIGHT_IRRIGATION = 25.0
MODERATE_IRRIGATION = 50.0
HEAVY_IRRIGATION = 80.0


@dataclass(frozen=True)
class FuzzyInputs:
    """Crisp values for the six rule engine input dimensions."""

    soil: float
    humidity: float
    temperature: float
    forecast: float
    plant_health: float
    recent_irrigation: float

    def by_dimension(self) -> Dict[str, float]:
        return {
            Dimension.SOIL: self.soil,
            Dimension.HUMIDITY: self.humidity,
            Dimension.TEMPERATURE: self.temperature,
            Dimension.FORECAST: self.forecast,
            Dimension.HEALTH: self.plant_health,
            Dimension.RECENT_IRRIGATION: self.recent_irrigation,
        }


@dataclass(frozen=True)
class FuzzyRule:
    """Conjunction of ``(dimension, category)`` terms and its output level."""

    name: str
    antecedents: Tuple[Tuple[str, str], ...]
    output: float

    def strength(self, degrees: Dict[str, Dict[str, float]]) -> float:
        """Return the fuzzy AND (minimum) of the antecedent degrees."""
        return min(degrees[dim][cat] for dim, cat in self.antecedents)


_S, _H, _T = Dimension.SOIL, Dimension.HUMIDITY, Dimension.TEMPERATURE
_F, _P, _R = Dimension.FORECAST, Dimension.HEALTH, Dimension.RECENT_IRRIGATION

RULES: Tuple[FuzzyRule, ...] = (
    # Over-irrigation protection
    FuzzyRule("saturated_soil", ((_S, "saturated"),), NO_IRRIGATION),
    FuzzyRule("wet_after_heavy", ((_S, "wet"), (_R, "heavy")), NO_IRRIGATION),
    FuzzyRule(
        "wet_moderate_poor_health",
        ((_S, "wet"), (_R, "moderate"), (_P, "poor")),
        NO_IRRIGATION,
    ),
    FuzzyRule("critical_health_wet", ((_P, "critical"), (_S, "wet")), NO_IRRIGATION),
    FuzzyRule("heavy_humid", ((_R, "heavy"), (_H, "high")), NO_IRRIGATION),
    # Standard irrigation
    FuzzyRule(
        "dry_hot_no_rain_healthy",
        ((_S, "dry"), (_T, "high"), (_F, "dry"), (_P, "healthy")),
        HEAVY_IRRIGATION,
    ),
    FuzzyRule(
        "dry_hot_no_rain_poor",
        ((_S, "dry"), (_T, "high"), (_F, "dry"), (_P, "poor")),
        MODERATE_IRRIGATION,
    ),
    FuzzyRule(
        "moist_mild_no_rain_healthy",
        ((_S, "moist"), (_H, "medium"), (_F, "dry"), (_P, "healthy")),
        MODERATE_IRRIGATION,
    ),
    FuzzyRule(
        "moist_mild_cloudy",
        ((_S, "moist"), (_H, "medium"), (_F, "cloudy")),
        LIGHT_IRRIGATION,
    ),
    FuzzyRule("rain_expected", ((_F, "rain"),), NO_IRRIGATION),
    FuzzyRule(
        "dry_air_dry_soil_healthy",
        ((_H, "low"), (_S, "dry"), (_P, "healthy")),
        MODERATE_IRRIGATION,
    ),
    FuzzyRule("cool_moist", ((_T, "low"), (_S, "moist")), LIGHT_IRRIGATION),
    # Plant health
    FuzzyRule("critical_health_dry", ((_P, "critical"), (_S, "dry")), LIGHT_IRRIGATION),
    FuzzyRule("excellent_health_moist", ((_P, "excellent"), (_S, "moist")), LIGHT_IRRIGATION),
    # Recent irrigation
    FuzzyRule("moist_after_heavy", ((_R, "heavy"), (_S, "moist")), NO_IRRIGATION),
    FuzzyRule("wet_after_moderate", ((_R, "moderate"), (_S, "wet")), NO_IRRIGATION),
    FuzzyRule(
        "dry_unwatered_healthy",
        ((_R, "none"), (_S, "dry"), (_P, "healthy")),
        MODERATE_IRRIGATION,
    ),
)


def fuzzify(inputs: FuzzyInputs) -> Dict[str, Dict[str, float]]:
    """Return membership degrees for every category of every dimension."""
    return {dim: memberships(dim, value) for dim, value in inputs.by_dimension().items()}


def rule_strengths(inputs: FuzzyInputs) -> List[Tuple[FuzzyRule, float]]:
    """Return each rule paired with its firing strength, in bank order."""
    degrees = fuzzify(inputs)
    return [(rule, rule.strength(degrees)) for rule in RULES]


def evaluate_rules(inputs: FuzzyInputs) -> float:
    """Return the defuzzified irrigation level in percent.

    All rules fire in parallel and the level is the strength-weighted
    average of their outputs. When no rule fires the level is ``0``.
    """

    numerator = 0.0
    denominator = 0.0
    for rule, strength in rule_strengths(inputs):
        if strength > 0:
            _LOGGER.debug("Rule %s fired with strength %.3f", rule.name, strength)
        numerator += strength * rule.output
        denominator += strength

    if denominator <= 0:
        return 0.0
    return numerator / denominator

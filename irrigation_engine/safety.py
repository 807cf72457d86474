"""Hard safety limits applied on top of the fuzzy irrigation level."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .utils import clamp_pct

_LOGGER = logging.getLogger(__name__)

SATURATION_SOIL = 85.0
RECENT_LIMIT_SOIL = 75.0
RECENT_LIMIT_IRRIGATION = 60.0
RECENT_LIMIT_CAP = 20.0
HEALTH_LIMIT_SCORE = 40.0
HEALTH_LIMIT_SOIL = 60.0
HEALTH_LIMIT_CAP = 25.0

__all__ = [
    "Severity",
    "SafetyMessage",
    "SafetyResult",
    "apply_overrides",
]


class Severity(str, Enum):
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


class SafetyMessage(str, Enum):
    """Outcome of the safety check, in priority order."""

    SATURATION_BLOCK = "saturation_block"
    RECENT_IRRIGATION_LIMIT = "recent_irrigation_limit"
    HEALTH_PROTECTION_LIMIT = "health_protection_limit"
    NO_CONCERN = "no_concern"

    @property
    def text(self) -> str:
        return _TEXT[self]

    @property
    def severity(self) -> Severity:
        return _SEVERITY[self]


_TEXT = {
    SafetyMessage.SATURATION_BLOCK: (
        "SAFETY OVERRIDE: Soil is saturated - irrigation blocked to prevent plant death!"
    ),
    SafetyMessage.RECENT_IRRIGATION_LIMIT: (
        "SAFETY LIMIT: Recent heavy irrigation detected - limiting water to prevent root rot!"
    ),
    SafetyMessage.HEALTH_PROTECTION_LIMIT: (
        "HEALTH PROTECTION: Plant health is poor - reducing irrigation to prevent further stress!"
    ),
    SafetyMessage.NO_CONCERN: "No safety concerns detected",
}

_SEVERITY = {
    SafetyMessage.SATURATION_BLOCK: Severity.CRITICAL,
    SafetyMessage.RECENT_IRRIGATION_LIMIT: Severity.WARNING,
    SafetyMessage.HEALTH_PROTECTION_LIMIT: Severity.CRITICAL,
    SafetyMessage.NO_CONCERN: Severity.OK,
}


@dataclass(frozen=True)
class SafetyResult:
    level: float
    message: SafetyMessage

    @property
    def overridden(self) -> bool:
        return self.message is not SafetyMessage.NO_CONCERN


def apply_overrides(
    raw_level: float,
    soil_moisture: float,
    recent_irrigation_score: float,
    health_score: float,
) -> SafetyResult:
    """Return the capped irrigation level and the safety message.

    Conditions are checked in priority order and only the first match
    applies. The level is never raised above ``raw_level``.
    """

    if soil_moisture > SATURATION_SOIL:
        level, message = 0.0, SafetyMessage.SATURATION_BLOCK
    elif soil_moisture > RECENT_LIMIT_SOIL and recent_irrigation_score > RECENT_LIMIT_IRRIGATION:
        level, message = min(raw_level, RECENT_LIMIT_CAP), SafetyMessage.RECENT_IRRIGATION_LIMIT
    elif health_score < HEALTH_LIMIT_SCORE and soil_moisture > HEALTH_LIMIT_SOIL:
        level, message = min(raw_level, HEALTH_LIMIT_CAP), SafetyMessage.HEALTH_PROTECTION_LIMIT
    else:
        level, message = raw_level, SafetyMessage.NO_CONCERN

    if message is not SafetyMessage.NO_CONCERN:
        _LOGGER.info(
            "Safety override %s: level %.1f -> %.1f", message.value, raw_level, level
        )
    return SafetyResult(level=clamp_pct(level), message=message)

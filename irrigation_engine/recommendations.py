"""Practical advice to accompany an irrigation decision."""

from __future__ import annotations

from typing import List

from .safety import SafetyMessage

__all__ = ["recommend_actions"]

WET_SOIL = 80.0
DRY_SOIL = 25.0
FREQUENT_IRRIGATION = 70.0
LOW_HEALTH = 60.0
GOOD_HEALTH = 70.0


def recommend_actions(
    *,
    soil: float,
    recent_irrigation: float,
    health_score: float,
    safety: SafetyMessage,
) -> List[str]:
    """Return advice strings ordered by the condition that triggered them.

    Physical inspection is always suggested last.
    """

    advice: List[str] = []
    if soil > WET_SOIL:
        advice += [
            "Improve drainage to prevent waterlogging",
            "Monitor for root rot or fungal diseases",
        ]
    if soil < DRY_SOIL:
        advice += [
            "Verify irrigation system delivery",
            "Apply mulch to retain moisture",
        ]
    if recent_irrigation > FREQUENT_IRRIGATION:
        advice += [
            "Reduce frequency for 2-3 days",
            "Watch for over-watering symptoms",
        ]
    if health_score < LOW_HEALTH:
        advice += [
            "Inspect for pests and diseases",
            "Adjust schedule based on observation",
        ]
    if safety is SafetyMessage.NO_CONCERN and health_score >= GOOD_HEALTH:
        advice.append("Optimal conditions - maintain current plan")
    advice.append("Cross-reference with physical inspection")
    return advice

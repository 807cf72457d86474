"""Score plant condition from soil moisture, watering load and crop traits."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from .utils import clamp_pct, load_dataset, normalize_key

TOLERANCE_FILE = "crop_tolerance.yaml"

_LOGGER = logging.getLogger(__name__)

BASE_SCORE = 70.0
YOUNG_PLANT_DAYS = 14
YOUNG_PLANT_FACTOR = 0.9
OVER_IRRIGATION_THRESHOLD = 80.0
OVER_IRRIGATION_PENALTY = 20.0

# Recency weights for today, yesterday and two days ago.
HISTORY_WEIGHTS: Tuple[float, ...] = (1.0, 0.7, 0.4)

# (threshold, penalty, issues) checked from the wettest band down, then
# from the driest band up. The first match in each direction wins and
# only one band applies overall.
_WET_BANDS: Tuple[Tuple[float, float, Tuple[str, ...]], ...] = (
    (90.0, 40.0, ("Root rot risk", "Oxygen deficiency")),
    (80.0, 25.0, ("Potential root damage", "Fungal risk")),
)
_DRY_BANDS: Tuple[Tuple[float, float, Tuple[str, ...]], ...] = (
    (15.0, 30.0, ("Drought stress", "Wilting risk")),
    (30.0, 15.0, ("Water stress",)),
)

_TOLERANCE: Dict[str, float] = {
    normalize_key(k): float(v) for k, v in load_dataset(TOLERANCE_FILE).items()
}

__all__ = [
    "HealthStatus",
    "PlantHealthAssessment",
    "get_crop_tolerance",
    "health_status",
    "assess_plant_health",
    "calculate_recent_irrigation_score",
]


class HealthStatus:
    CRITICAL = "Critical"
    POOR = "Poor"
    HEALTHY = "Healthy"
    EXCELLENT = "Excellent"


@dataclass(frozen=True)
class PlantHealthAssessment:
    """Health score with qualitative status and discovered issues."""

    score: float
    status: str
    issues: Tuple[str, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, object]:
        return {"score": self.score, "status": self.status, "issues": list(self.issues)}


def get_crop_tolerance(crop: str) -> float:
    """Return the health multiplier for ``crop`` (``1.0`` when unlisted)."""
    value = getattr(crop, "value", crop)
    return _TOLERANCE.get(normalize_key(value), 1.0)


def health_status(score: float) -> str:
    """Return the status label for a clamped health ``score``."""
    if score >= 80:
        return HealthStatus.EXCELLENT
    if score >= 60:
        return HealthStatus.HEALTHY
    if score >= 40:
        return HealthStatus.POOR
    return HealthStatus.CRITICAL


def _add_issues(issues: List[str], tags: Iterable[str]) -> None:
    for tag in tags:
        if tag not in issues:
            issues.append(tag)


def _soil_band(soil_moisture: float) -> Tuple[float, Tuple[str, ...]]:
    for threshold, penalty, tags in _WET_BANDS:
        if soil_moisture > threshold:
            return penalty, tags
    for threshold, penalty, tags in _DRY_BANDS:
        if soil_moisture < threshold:
            return penalty, tags
    return 0.0, ()


def assess_plant_health(
    soil_moisture: float,
    recent_irrigation_score: float,
    crop: str,
    days_since_planting: float = 30,
) -> PlantHealthAssessment:
    """Return a :class:`PlantHealthAssessment` for the planting.

    The score starts at :data:`BASE_SCORE`, loses points for a soil moisture
    band and for heavy recent irrigation, is scaled by the crop tolerance and
    by :data:`YOUNG_PLANT_FACTOR` for plants younger than
    :data:`YOUNG_PLANT_DAYS`, and is finally clamped to 0-100.
    """

    score = BASE_SCORE
    issues: List[str] = []

    penalty, tags = _soil_band(soil_moisture)
    score -= penalty
    _add_issues(issues, tags)

    if recent_irrigation_score > OVER_IRRIGATION_THRESHOLD:
        score -= OVER_IRRIGATION_PENALTY
        _add_issues(issues, ("Over-irrigation stress",))

    score *= get_crop_tolerance(crop)

    if days_since_planting < YOUNG_PLANT_DAYS:
        score *= YOUNG_PLANT_FACTOR

    score = clamp_pct(score)
    status = health_status(score)
    _LOGGER.debug("Health score %.1f (%s) issues=%s", score, status, issues)
    return PlantHealthAssessment(score=score, status=status, issues=tuple(issues))


def calculate_recent_irrigation_score(history: Iterable[float | None] | None) -> float:
    """Return a recency weighted average of up to three daily applications.

    ``history`` lists percentages starting with today. Days without a
    recorded application (``None`` or ``0``) contribute no weight, so the
    result averages only the days that were actually watered. Entries past
    the third are ignored and values are clamped to 0-100.
    """

    if not history:
        return 0.0

    total = 0.0
    total_weight = 0.0
    for weight, value in zip(HISTORY_WEIGHTS, history):
        if value is None:
            continue
        pct = clamp_pct(value)
        if pct <= 0:
            continue
        total += pct * weight
        total_weight += weight

    if total_weight <= 0:
        return 0.0
    return clamp_pct(total / total_weight)

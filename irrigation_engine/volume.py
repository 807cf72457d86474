"""Convert an irrigation level into a physical water volume."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict

from .growth_stage import CropType, GrowthStage, stage_bounds
from .utils import clamp_pct

# Planting layout: one 50 x 150 cm row with 50 x 50 cm per plant.
PLANT_SPACING_CM = 50.0
ROW_LENGTH_CM = 150.0
ROW_WIDTH_CM = 50.0
PLANTS_PER_UNIT = int(ROW_LENGTH_CM // PLANT_SPACING_CM)
UNIT_AREA_M2 = (ROW_LENGTH_CM * ROW_WIDTH_CM) / 10_000

# Realism factor applied to the stage maximum.
SCALING_FACTOR = 0.8

# Fallback when no stage bounds are known for the crop.
FALLBACK_ML_PER_PCT_PER_M2 = 10.0

__all__ = [
    "PLANTS_PER_UNIT",
    "UNIT_AREA_M2",
    "SCALING_FACTOR",
    "FALLBACK_ML_PER_PCT_PER_M2",
    "VolumeEstimate",
    "estimate_volume",
]


@dataclass(frozen=True)
class VolumeEstimate:
    """Water volume for one planting unit.

    ``ml_per_plant`` and ``total_ml`` are unrounded; use :meth:`as_dict` for
    display values.
    """

    ml_per_plant: float
    total_ml: float
    area_based: bool = False

    @property
    def total_liters(self) -> float:
        return self.total_ml / 1000

    def as_dict(self) -> Dict[str, float]:
        data = asdict(self)
        data["ml_per_plant"] = round(self.ml_per_plant)
        data["total_ml"] = round(self.total_ml)
        data["total_liters"] = round(self.total_liters, 2)
        return data


def estimate_volume(
    level: float,
    crop: CropType | str,
    stage: GrowthStage | str | None,
) -> VolumeEstimate:
    """Return the water volume for ``level`` percent irrigation.

    The per-plant volume scales the stage maximum by ``level`` and
    :data:`SCALING_FACTOR`. Without stage bounds the total falls back to
    :data:`FALLBACK_ML_PER_PCT_PER_M2` over :data:`UNIT_AREA_M2`, split evenly
    across the plants of the unit.
    """

    pct = clamp_pct(level)
    bounds = stage_bounds(crop, stage)
    if bounds is None:
        total = pct * FALLBACK_ML_PER_PCT_PER_M2 * UNIT_AREA_M2
        return VolumeEstimate(
            ml_per_plant=total / PLANTS_PER_UNIT, total_ml=total, area_based=True
        )

    ml_per_plant = (pct / 100) * bounds.max_ml * SCALING_FACTOR
    return VolumeEstimate(ml_per_plant=ml_per_plant, total_ml=ml_per_plant * PLANTS_PER_UNIT)

"""Resolve crop growth stages and their per-plant water bounds."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

import pandas as pd

from .utils import load_dataset, normalize_key

DATA_FILE = "growth_stages.yaml"

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "CropType",
    "GrowthStage",
    "StageBounds",
    "list_supported_crops",
    "list_growth_stages",
    "resolve_stage",
    "stage_bounds",
    "stage_end_days",
    "generate_stage_schedule",
    "stage_schedule_df",
]


class CropType(str, Enum):
    """Crops with growth stage and water volume tables."""

    LETTUCE = "lettuce"
    OKRA = "okra"
    TOMATO = "tomato"

    @classmethod
    def parse(cls, value: "CropType | str | None") -> "CropType | None":
        """Return the matching member or ``None`` for unknown identifiers."""
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        try:
            return cls(normalize_key(value))
        except ValueError:
            return None


class GrowthStage(str, Enum):
    SEEDLING = "seedling"
    VEGETATIVE = "vegetative"
    FLOWERING = "flowering"
    MATURE = "mature"


@dataclass(frozen=True)
class StageBounds:
    """Per-plant water volume bounds for a growth stage in milliliters."""

    base_ml: float
    max_ml: float


@dataclass(frozen=True)
class _StageEntry:
    stage: GrowthStage
    end_day: int | None
    bounds: StageBounds


def _parse_bounds(crop: CropType, raw: Mapping[str, Any]) -> Mapping[GrowthStage, StageBounds]:
    bounds: Dict[GrowthStage, StageBounds] = {}
    for name, row in (raw or {}).items():
        bounds[GrowthStage(normalize_key(name))] = StageBounds(
            float(row["base_ml"]), float(row["max_ml"])
        )
    if not bounds:
        raise ValueError(f"{DATA_FILE} has no water bounds for {crop.value}")
    return MappingProxyType(bounds)


def _build_tables() -> Tuple[
    Mapping[CropType, Tuple[_StageEntry, ...]],
    Mapping[CropType, Mapping[GrowthStage, StageBounds]],
]:
    raw = load_dataset(DATA_FILE)
    tables: Dict[CropType, Tuple[_StageEntry, ...]] = {}
    all_bounds: Dict[CropType, Mapping[GrowthStage, StageBounds]] = {}
    for crop in CropType:
        crop_data = raw.get(crop.value) or {}
        rows = crop_data.get("stages")
        if not rows:
            raise ValueError(f"{DATA_FILE} has no stages for {crop.value}")
        bounds = _parse_bounds(crop, crop_data.get("bounds"))
        entries: List[_StageEntry] = []
        previous_end = -1
        for index, row in enumerate(rows):
            stage = GrowthStage(row["stage"])
            end_day = row.get("end_day")
            is_last = index == len(rows) - 1
            if is_last and end_day is not None:
                raise ValueError(f"final {crop.value} stage must be open ended")
            if not is_last:
                if end_day is None or int(end_day) <= previous_end:
                    raise ValueError(f"{crop.value} stage end days must increase")
                previous_end = int(end_day)
            if stage not in bounds:
                raise ValueError(f"no water bounds for {crop.value} {stage.value}")
            entries.append(
                _StageEntry(
                    stage=stage,
                    end_day=None if end_day is None else int(end_day),
                    bounds=bounds[stage],
                )
            )
        tables[crop] = tuple(entries)
        all_bounds[crop] = bounds
    return MappingProxyType(tables), MappingProxyType(all_bounds)


# ``_BOUNDS`` may hold stages that ``_TABLES`` never resolves to.
_TABLES, _BOUNDS = _build_tables()


def list_supported_crops() -> list[str]:
    """Return identifiers of crops with stage tables."""
    return [crop.value for crop in CropType]


def list_growth_stages(crop: CropType | str) -> list[GrowthStage]:
    """Return the ordered growth stages for ``crop`` or an empty list."""
    crop_type = CropType.parse(crop)
    if crop_type is None:
        return []
    return [entry.stage for entry in _TABLES[crop_type]]


def stage_end_days(crop: CropType | str) -> list[Tuple[GrowthStage, int | None]]:
    """Return ``(stage, last_day)`` pairs; the final stage has no last day."""
    crop_type = CropType.parse(crop)
    if crop_type is None:
        return []
    return [(entry.stage, entry.end_day) for entry in _TABLES[crop_type]]


def resolve_stage(crop: CropType | str, days_since_planting: float) -> GrowthStage | None:
    """Return the growth stage of ``crop`` after ``days_since_planting`` days.

    A day equal to a stage's last day still belongs to that stage. Negative
    ages count as day zero. ``None`` is returned only for crops without a
    stage table.
    """

    crop_type = CropType.parse(crop)
    if crop_type is None:
        _LOGGER.warning("No growth stage table for crop %r", crop)
        return None

    days = max(0.0, float(days_since_planting))
    for entry in _TABLES[crop_type]:
        if entry.end_day is None or days <= entry.end_day:
            return entry.stage
    # Unreachable: the final stage is open ended.
    return _TABLES[crop_type][-1].stage


def stage_bounds(crop: CropType | str, stage: GrowthStage | str | None) -> StageBounds | None:
    """Return water bounds for ``stage`` of ``crop`` if the pair is known."""

    crop_type = CropType.parse(crop)
    if crop_type is None or stage is None:
        return None
    if isinstance(stage, GrowthStage):
        stage_key = stage
    else:
        try:
            stage_key = GrowthStage(normalize_key(stage))
        except ValueError:
            return None
    return _BOUNDS[crop_type].get(stage_key)


def generate_stage_schedule(crop: CropType | str) -> list[Dict[str, object]]:
    """Return ordered stage rows with first/last day and water bounds.

    The final stage has ``end_day`` set to ``None`` since it lasts until
    harvest.
    """

    crop_type = CropType.parse(crop)
    if crop_type is None:
        return []

    schedule: list[Dict[str, object]] = []
    start = 0
    for entry in _TABLES[crop_type]:
        schedule.append(
            {
                "stage": entry.stage.value,
                "start_day": start,
                "end_day": entry.end_day,
                "base_ml": entry.bounds.base_ml,
                "max_ml": entry.bounds.max_ml,
            }
        )
        if entry.end_day is not None:
            start = entry.end_day + 1
    return schedule


def stage_schedule_df(crop: CropType | str) -> "pd.DataFrame":
    """Return the stage schedule as a :class:`pandas.DataFrame`."""

    schedule = generate_stage_schedule(crop)
    if not schedule:
        return pd.DataFrame()
    df = pd.DataFrame(schedule)
    df["end_day"] = df["end_day"].astype("Int64")
    return df

"""Helpers for the bundled reference tables and percentage inputs."""

from __future__ import annotations

import json
import math
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Union
from os import PathLike

import yaml

__all__ = [
    "load_data",
    "load_dataset",
    "get_data_dir",
    "normalize_key",
    "clamp_pct",
    "parse_breakpoints",
]


PathType = Union[str, PathLike]

YAML_SUFFIXES = frozenset({".yaml", ".yml"})

# Reference tables ship inside the package; nothing outside it is searched.
DATA_DIR = Path(__file__).resolve().parent / "data"


def load_data(path: PathType) -> Any:
    """Parse a scenario, settings or table file.

    Files ending in ``.yaml``/``.yml`` are read as YAML (an empty document
    becomes ``{}``), anything else as JSON. Decoding problems surface as
    :class:`ValueError` naming the file; a missing file raises
    :class:`FileNotFoundError`.
    """

    source = Path(path)
    text = source.read_text(encoding="utf-8")
    if source.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"{source}: not valid YAML ({exc})") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{source}: not valid JSON ({exc})") from exc


def get_data_dir() -> Path:
    """Return the directory holding the bundled reference tables."""

    return DATA_DIR


@lru_cache(maxsize=None)
def load_dataset(filename: str) -> Dict[str, Any]:
    """Return bundled dataset ``filename``.

    Results are cached, so callers must treat the returned mapping as
    read-only.
    """

    path = get_data_dir() / filename
    data = load_data(path)
    if not isinstance(data, dict):
        raise ValueError(f"Dataset {filename} must contain a mapping")
    return data


def normalize_key(key: str) -> str:
    """Return ``key`` normalized for case-insensitive dataset lookups.

    Whitespace, hyphens and underscores collapse to a single underscore so
    ``"Cherry Tomato"``, ``"cherry-tomato"`` and ``"CHERRY_TOMATO"`` all
    match the same entry.
    """

    value = str(key).casefold()
    for sep in ("_", "-"):
        value = value.replace(sep, " ")
    parts = [p for p in value.strip().split() if p]
    return "_".join(parts)


def clamp_pct(value: float) -> float:
    """Return ``value`` as a float clamped to the 0-100 range.

    Non-finite values never propagate: ``NaN`` maps to ``0`` and infinities
    saturate at the nearest bound.
    """

    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return max(0.0, min(number, 100.0))


def parse_breakpoints(value: Iterable[float]) -> tuple[float, float, float]:
    """Return ``(a, b, c)`` from a three element sequence.

    ``ValueError`` is raised when the sequence does not hold exactly three
    finite numbers in non-decreasing order.
    """

    try:
        a, b, c = (float(v) for v in value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid breakpoints {value!r}") from exc
    if not all(math.isfinite(v) for v in (a, b, c)):
        raise ValueError(f"Breakpoints must be finite: {value!r}")
    if not a <= b <= c:
        raise ValueError(f"Breakpoints must satisfy a <= b <= c: {value!r}")
    return a, b, c

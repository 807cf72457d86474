"""Triangular membership functions for the irrigation input dimensions."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping

import numpy as np
import skfuzzy as fuzz

from .utils import load_dataset, parse_breakpoints

DATA_FILE = "membership_functions.yaml"

__all__ = [
    "Dimension",
    "TriangularShape",
    "trimf",
    "get_shape",
    "list_dimensions",
    "list_categories",
    "degree_of",
    "memberships",
]


class Dimension:
    """Names of the six fuzzy input dimensions."""

    SOIL = "soil"
    HUMIDITY = "humidity"
    TEMPERATURE = "temperature"
    FORECAST = "forecast"
    HEALTH = "health"
    RECENT_IRRIGATION = "recent_irrigation"


@dataclass(frozen=True)
class TriangularShape:
    """Breakpoints ``a <= b <= c`` of a triangular membership function."""

    a: float
    b: float
    c: float

    def degree(self, x: float) -> float:
        return trimf(x, (self.a, self.b, self.c))


def trimf(x: float, points: tuple[float, float, float]) -> float:
    """Return the degree of ``x`` for the triangle defined by ``points``.

    The result is ``0`` at or outside ``[a, c]`` and ``1`` exactly at ``b``.
    The outer bound check runs first, so a shoulder shape such as
    ``(0, 0, 40)`` evaluates to ``0`` at ``x == 0``. ``NaN`` is outside
    every shape. Interior points are evaluated with :func:`skfuzzy.trimf`.
    """

    a, b, c = points
    if not a < x < c:
        return 0.0
    return float(fuzz.trimf(np.array([x], dtype=float), [a, b, c])[0])


def _build_shapes() -> Mapping[str, Mapping[str, TriangularShape]]:
    raw = load_dataset(DATA_FILE)
    shapes: Dict[str, Mapping[str, TriangularShape]] = {}
    for dimension, categories in raw.items():
        shapes[str(dimension)] = MappingProxyType(
            {
                str(name): TriangularShape(*parse_breakpoints(points))
                for name, points in categories.items()
            }
        )
    return MappingProxyType(shapes)


# Loaded once; the tables never change at runtime.
_SHAPES = _build_shapes()


def list_dimensions() -> list[str]:
    """Return the names of all input dimensions."""
    return list(_SHAPES)


def list_categories(dimension: str) -> list[str]:
    """Return category names of ``dimension`` in table order."""
    return list(_SHAPES[dimension])


def get_shape(dimension: str, category: str) -> TriangularShape:
    """Return the shape for ``category`` of ``dimension``.

    Unknown names raise :class:`KeyError`.
    """
    return _SHAPES[dimension][category]


def degree_of(dimension: str, category: str, x: float) -> float:
    """Return the membership degree of ``x`` in ``category``."""
    return get_shape(dimension, category).degree(x)


def memberships(dimension: str, x: float) -> Dict[str, float]:
    """Return degrees of ``x`` for every category of ``dimension``."""
    return {name: shape.degree(x) for name, shape in _SHAPES[dimension].items()}

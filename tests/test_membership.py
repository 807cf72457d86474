import math

import numpy as np
import pytest
import skfuzzy as fuzz

from irrigation_engine.membership import (
    Dimension,
    TriangularShape,
    degree_of,
    get_shape,
    list_categories,
    list_dimensions,
    memberships,
    trimf,
)


def test_trimf_peak_and_edges():
    assert trimf(50, (30, 50, 70)) == 1.0
    assert trimf(30, (30, 50, 70)) == 0.0
    assert trimf(70, (30, 50, 70)) == 0.0
    assert trimf(40, (30, 50, 70)) == pytest.approx(0.5)
    assert trimf(65, (30, 50, 70)) == pytest.approx(0.25)


def test_trimf_outside_range_is_zero():
    assert trimf(-10, (0, 0, 40)) == 0.0
    assert trimf(1000, (60, 100, 100)) == 0.0


def test_trimf_shoulder_boundary_is_zero():
    # The outer bound check wins over the peak on degenerate shapes.
    assert trimf(0, (0, 0, 40)) == 0.0
    assert trimf(100, (85, 100, 100)) == 0.0
    assert trimf(20, (0, 0, 40)) == pytest.approx(0.5)


def test_trimf_interior_matches_skfuzzy():
    universe = np.arange(0, 101, 5, dtype=float)
    for points in ([30, 50, 70], [0, 0, 40], [60, 85, 100], [85, 100, 100]):
        expected = fuzz.trimf(universe, points)
        for x, degree in zip(universe, expected):
            if points[0] < x < points[2]:
                assert trimf(float(x), tuple(points)) == pytest.approx(degree)
    # skfuzzy peaks at a left shoulder; the outer bound check returns 0 there.
    assert fuzz.trimf(np.array([0.0]), [0, 0, 40])[0] == 1.0
    assert trimf(0, (0, 0, 40)) == 0.0


def test_trimf_nan_is_zero():
    assert trimf(math.nan, (30, 50, 70)) == 0.0


def test_shape_degree_matches_trimf():
    shape = TriangularShape(10, 15, 20)
    assert shape.degree(12.5) == pytest.approx(0.5)


def test_dimensions_and_categories():
    assert set(list_dimensions()) == {
        Dimension.SOIL,
        Dimension.HUMIDITY,
        Dimension.TEMPERATURE,
        Dimension.FORECAST,
        Dimension.HEALTH,
        Dimension.RECENT_IRRIGATION,
    }
    assert list_categories("soil") == ["dry", "moist", "wet", "saturated"]
    assert list_categories("recent_irrigation") == ["none", "light", "moderate", "heavy"]
    assert list_categories("health") == ["critical", "poor", "healthy", "excellent"]


def test_degree_of_named_category():
    assert degree_of("soil", "moist", 60) == pytest.approx(0.5)
    assert degree_of("temperature", "high", 35) == pytest.approx(0.5)
    assert degree_of("forecast", "dry", 5) == pytest.approx(0.875)


def test_memberships_returns_every_category():
    values = memberships("soil", 65)
    assert values == pytest.approx(
        {"dry": 0.0, "moist": 0.25, "wet": 0.2, "saturated": 0.0}
    )


def test_unknown_category_raises_key_error():
    with pytest.raises(KeyError):
        get_shape("soil", "muddy")
    with pytest.raises(KeyError):
        memberships("wind", 3)


def test_every_shape_is_monotonic_around_peak():
    for dimension in list_dimensions():
        for category in list_categories(dimension):
            shape = get_shape(dimension, category)
            assert shape.a <= shape.b <= shape.c
            rising = [shape.a + (shape.b - shape.a) * i / 20 for i in range(21)]
            falling = [shape.b + (shape.c - shape.b) * i / 20 for i in range(21)]
            up = [shape.degree(x) for x in rising]
            down = [shape.degree(x) for x in falling]
            assert all(0.0 <= d <= 1.0 for d in up + down)

            # Shoulders peak at an outer bound, where the degree is 0.
            if shape.b == shape.c:
                assert up[-1] == 0.0
                up = up[:-1]
            if shape.a == shape.b:
                assert down[0] == 0.0
                down = down[1:]
            assert all(x <= y for x, y in zip(up, up[1:]))
            assert all(x >= y for x, y in zip(down, down[1:]))
            if shape.a < shape.b < shape.c:
                assert up[-1] == 1.0
                assert down[0] == 1.0
                assert shape.degree(shape.b) == 1.0

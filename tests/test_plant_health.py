import pytest

from irrigation_engine.growth_stage import CropType
from irrigation_engine.plant_health import (
    HealthStatus,
    assess_plant_health,
    calculate_recent_irrigation_score,
    get_crop_tolerance,
    health_status,
)


def test_neutral_conditions():
    result = assess_plant_health(50, 0, "tomato", 30)
    assert result.score == pytest.approx(70.0)
    assert result.status == HealthStatus.HEALTHY
    assert result.issues == ()


def test_crop_tolerance_table():
    assert get_crop_tolerance("lettuce") == 0.8
    assert get_crop_tolerance("Eggplant") == 1.2
    assert get_crop_tolerance("cabbage") == 1.0
    assert get_crop_tolerance("cactus") == 1.0
    assert get_crop_tolerance(CropType.LETTUCE) == 0.8


def test_water_sensitive_and_tolerant_crops():
    assert assess_plant_health(50, 0, "lettuce", 30).score == pytest.approx(56.0)
    tolerant = assess_plant_health(50, 0, "eggplant", 30)
    assert tolerant.score == pytest.approx(84.0)
    assert tolerant.status == HealthStatus.EXCELLENT


def test_unknown_crop_is_neutral():
    assert assess_plant_health(50, 0, "cactus", 30).score == pytest.approx(70.0)


def test_waterlogged_and_over_irrigated():
    result = assess_plant_health(95, 90, "tomato", 30)
    assert result.score == pytest.approx(10.0)
    assert result.status == HealthStatus.CRITICAL
    assert result.issues == ("Root rot risk", "Oxygen deficiency", "Over-irrigation stress")


@pytest.mark.parametrize(
    "soil, score, issues",
    [
        (90, 45.0, ("Potential root damage", "Fungal risk")),
        (85, 45.0, ("Potential root damage", "Fungal risk")),
        (80, 70.0, ()),
        (30, 70.0, ()),
        (20, 55.0, ("Water stress",)),
        (15, 55.0, ("Water stress",)),
        (10, 40.0, ("Drought stress", "Wilting risk")),
    ],
)
def test_soil_bands(soil, score, issues):
    result = assess_plant_health(soil, 0, "tomato", 30)
    assert result.score == pytest.approx(score)
    assert result.issues == issues


def test_young_plant_penalty():
    assert assess_plant_health(50, 0, "tomato", 10).score == pytest.approx(63.0)
    assert assess_plant_health(50, 0, "tomato", 14).score == pytest.approx(70.0)


def test_young_drought_stressed_eggplant():
    result = assess_plant_health(10, 0, "eggplant", 10)
    assert result.score == pytest.approx(43.2)
    assert result.status == HealthStatus.POOR


def test_recent_irrigation_threshold_is_strict():
    assert assess_plant_health(50, 80, "tomato", 30).issues == ()
    assert assess_plant_health(50, 80.1, "tomato", 30).issues == ("Over-irrigation stress",)


def test_health_status_thresholds():
    assert health_status(80) == HealthStatus.EXCELLENT
    assert health_status(79.9) == HealthStatus.HEALTHY
    assert health_status(60) == HealthStatus.HEALTHY
    assert health_status(40) == HealthStatus.POOR
    assert health_status(39.9) == HealthStatus.CRITICAL


def test_issues_only_when_condition_holds():
    conditions = {
        "Root rot risk": lambda soil, recent: soil > 90,
        "Oxygen deficiency": lambda soil, recent: soil > 90,
        "Potential root damage": lambda soil, recent: 80 < soil <= 90,
        "Fungal risk": lambda soil, recent: 80 < soil <= 90,
        "Drought stress": lambda soil, recent: soil < 15,
        "Wilting risk": lambda soil, recent: soil < 15,
        "Water stress": lambda soil, recent: 15 <= soil < 30,
        "Over-irrigation stress": lambda soil, recent: recent > 80,
    }
    for soil in range(0, 101, 5):
        for recent in (0, 50, 80, 81, 100):
            for crop in ("lettuce", "okra", "eggplant", "unknown"):
                result = assess_plant_health(soil, recent, crop, 7)
                assert len(set(result.issues)) == len(result.issues)
                assert 0.0 <= result.score <= 100.0
                for tag, condition in conditions.items():
                    assert (tag in result.issues) == condition(soil, recent)


def test_as_dict():
    data = assess_plant_health(20, 0, "tomato", 30).as_dict()
    assert data == {"score": 55.0, "status": "Poor", "issues": ["Water stress"]}


def test_recent_score_examples():
    assert calculate_recent_irrigation_score([80, 0, 0]) == 80.0
    assert calculate_recent_irrigation_score([]) == 0
    assert calculate_recent_irrigation_score(None) == 0
    assert calculate_recent_irrigation_score([0, 0, 0]) == 0
    assert calculate_recent_irrigation_score([100, 100, 100]) == pytest.approx(100.0)


def test_recent_score_weights_by_recency():
    assert calculate_recent_irrigation_score([100, 50]) == pytest.approx(135 / 1.7)
    assert calculate_recent_irrigation_score([None, 60, 30]) == pytest.approx(54 / 1.1)
    assert calculate_recent_irrigation_score([0, 0, 90]) == pytest.approx(90.0)


def test_recent_score_clamps_and_truncates():
    assert calculate_recent_irrigation_score([150]) == 100.0
    assert calculate_recent_irrigation_score([-5, 50]) == pytest.approx(50.0)
    assert calculate_recent_irrigation_score([80, 0, 0, 100]) == 80.0


def test_recent_score_within_range():
    values = (0, 10, 55, 100)
    for a in values:
        for b in values:
            for c in values:
                assert 0.0 <= calculate_recent_irrigation_score([a, b, c]) <= 100.0

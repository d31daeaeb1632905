from datetime import date, datetime

import pytest

from src.models.growth.nutrition_status import (
    AnthropometricSample,
    NutritionStatus,
    age_in_months,
    arm_circumference_ok,
    assess_growth,
    classify_nutrition_status,
    height_for_age_z,
    median_height_for_age,
    median_weight_for_age,
    normalize_sex,
    weight_for_age_z,
)


NORMAL = NutritionStatus.NORMAL
AT_RISK = NutritionStatus.AT_RISK_STUNTING


def test_linear_medians():
    assert median_weight_for_age(24, "M") == pytest.approx(11.7)
    assert median_weight_for_age(24, "F") == pytest.approx(11.12)
    assert median_height_for_age(24, "M") == pytest.approx(85.9)
    assert median_height_for_age(24, "F") == pytest.approx(83.9)


def test_z_scores():
    assert weight_for_age_z(12, 24, "M") == pytest.approx(0.2)
    assert height_for_age_z(85, 24, "M") == pytest.approx(-0.9 / 3.5)


def test_reference_sample_is_normal():
    assert classify_nutrition_status(12, 85, 13.5, 24, "M") == NORMAL


def test_missing_weight_defaults_to_normal():
    assert classify_nutrition_status(None, 85, 13.5, 24, "M") == NORMAL


@pytest.mark.parametrize(
    "weight,height,age,sex",
    [(None, None, None, None), (12, None, 24, "M"), (12, 85, None, "M"), (12, 85, 24, None)],
)
def test_incomplete_samples_default_to_normal(weight, height, age, sex):
    a = assess_growth(AnthropometricSample(weight, height, 10.0, age, sex))
    assert a.status == NORMAL
    assert a.complete is False


def test_age_zero_is_not_missing():
    # a newborn is still screened: 40 cm is z=-2.83 at birth
    assert classify_nutrition_status(3.0, 40, None, 0, "M") == AT_RISK


def test_underweight_flags():
    # median 12.05 at 25 months -> z = -2.03
    assert classify_nutrition_status(9, 87.4, None, 25, "M") == AT_RISK


def test_overweight_flags():
    # z = (14 - 11.7) / 1.5 = 1.53 > 1
    assert classify_nutrition_status(14, 85, None, 24, "M") == AT_RISK


def test_short_for_age_flags():
    a = assess_growth(AnthropometricSample(12, 75, None, 24, "M"))
    assert a.weight_for_age_ok is True
    assert a.height_for_age_ok is False
    assert a.height_for_age_z == pytest.approx(-10.9 / 3.5)
    assert a.status == AT_RISK


def test_tall_for_age_never_flags():
    assert classify_nutrition_status(12, 110, None, 24, "M") == NORMAL


def test_low_arm_circumference_flags():
    assert classify_nutrition_status(12, 85, 12.4, 24, "M") == AT_RISK
    assert classify_nutrition_status(12, 85, 12.5, 24, "M") == NORMAL


@pytest.mark.parametrize("arm", [0, 0.0, None])
def test_zero_or_missing_arm_is_ignored(arm):
    assert arm_circumference_ok(arm) is True
    assert classify_nutrition_status(12, 85, arm, 24, "M") == NORMAL
    # rule is skipped entirely: the outcome follows the other two rules
    assert classify_nutrition_status(12, 75, arm, 24, "M") == AT_RISK


def test_female_uses_own_curve():
    # 11.12 median for girls at 24 months; 9.0 is z=-1.41 for girls
    assert classify_nutrition_status(9.0, 84, None, 24, "F") == NORMAL
    assert classify_nutrition_status(9.0, 84, None, 24, "Perempuan") == NORMAL


@pytest.mark.parametrize(
    "value,expected",
    [("M", "M"), ("f", "F"), ("Laki-laki", "M"), ("perempuan", "F"), ("male", "M"), ("x", None), (None, None)],
)
def test_normalize_sex(value, expected):
    assert normalize_sex(value) == expected


def test_status_labels():
    assert NORMAL.value == "Normal"
    assert AT_RISK.value == "Resiko Stunting"


def test_age_in_months_day_not_reached():
    assert age_in_months("2024-01-15", "2025-01-14") == 11


def test_age_in_months_exact():
    assert age_in_months("2024-01-15", "2025-01-15") == 12


def test_age_in_months_accepts_dates_and_datetimes():
    assert age_in_months(date(2024, 1, 31), datetime(2024, 3, 1, 9, 0)) == 1
    assert age_in_months(date(2024, 1, 31), date(2024, 2, 29)) == 0


def test_age_in_months_clamped_at_zero():
    assert age_in_months("2025-06-01", "2025-01-01") == 0


def test_age_in_months_defaults_to_today():
    assert age_in_months(date.today()) == 0

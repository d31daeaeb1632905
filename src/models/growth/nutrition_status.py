from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Literal, Optional, Union

import numpy as np


Sex = Literal["M", "F"]

DateLike = Union[date, datetime, str]

# Linear approximation of the median growth curves (not WHO LMS tables).
# median = intercept + slope * age_months
WEIGHT_FOR_AGE = {
    "M": (3.3, 0.35),
    "F": (3.2, 0.33),
}
HEIGHT_FOR_AGE = {
    "M": (49.9, 1.5),
    "F": (49.1, 1.45),
}
WEIGHT_SD = 1.5
HEIGHT_SD = 3.5

WEIGHT_Z_MIN = -2.0
WEIGHT_Z_MAX = 1.0
HEIGHT_Z_MIN = -2.0
ARM_CIRCUMFERENCE_MIN_CM = 12.5

_SEX_ALIASES = {
    "m": "M",
    "male": "M",
    "l": "M",
    "laki-laki": "M",
    "laki laki": "M",
    "f": "F",
    "female": "F",
    "p": "F",
    "perempuan": "F",
}


class NutritionStatus(str, Enum):
    NORMAL = "Normal"
    AT_RISK_STUNTING = "Resiko Stunting"


@dataclass(frozen=True)
class AnthropometricSample:
    weight_kg: Optional[float]
    height_cm: Optional[float]
    arm_circumference_cm: Optional[float]
    age_months: Optional[int]
    sex: Optional[Sex]


@dataclass(frozen=True)
class GrowthAssessment:
    complete: bool
    weight_for_age_z: Optional[float]
    height_for_age_z: Optional[float]
    weight_for_age_ok: bool
    height_for_age_ok: bool
    arm_circumference_ok: bool
    status: NutritionStatus


def normalize_sex(value: Optional[str]) -> Optional[Sex]:
    """Map form spellings ("Laki-laki", "Perempuan", "male", "F", ...) to "M"/"F"."""
    if value is None:
        return None
    return _SEX_ALIASES.get(str(value).strip().lower())


def _present(x: Optional[float]) -> bool:
    return x is not None and bool(np.isfinite(float(x)))


def median_weight_for_age(age_months: float, sex: Sex) -> float:
    intercept, slope = WEIGHT_FOR_AGE[sex]
    return intercept + slope * float(age_months)


def median_height_for_age(age_months: float, sex: Sex) -> float:
    intercept, slope = HEIGHT_FOR_AGE[sex]
    return intercept + slope * float(age_months)


def weight_for_age_z(weight_kg: float, age_months: float, sex: Sex) -> float:
    """BB/U z-score against the linear median, fixed sd=1.5."""
    return (float(weight_kg) - median_weight_for_age(age_months, sex)) / WEIGHT_SD


def height_for_age_z(height_cm: float, age_months: float, sex: Sex) -> float:
    """TB/U z-score against the linear median, fixed sd=3.5."""
    return (float(height_cm) - median_height_for_age(age_months, sex)) / HEIGHT_SD


def weight_for_age_ok(weight_kg: float, age_months: float, sex: Sex) -> bool:
    z = weight_for_age_z(weight_kg, age_months, sex)
    return WEIGHT_Z_MIN <= z <= WEIGHT_Z_MAX


def height_for_age_ok(height_cm: float, age_months: float, sex: Sex) -> bool:
    # tall-for-age is never flagged
    return height_for_age_z(height_cm, age_months, sex) >= HEIGHT_Z_MIN


def arm_circumference_ok(arm_circumference_cm: Optional[float]) -> bool:
    """LILA check. No measurement (None or 0) counts as normal."""
    if not _present(arm_circumference_cm) or float(arm_circumference_cm) == 0.0:
        return True
    return float(arm_circumference_cm) >= ARM_CIRCUMFERENCE_MIN_CM


def assess_growth(sample: AnthropometricSample) -> GrowthAssessment:
    """
    Evaluate the three screening rules for one sample.

    Missing weight, height, age or sex short-circuits to Normal with
    complete=False; the individual rule flags are then reported as passing.
    """
    sex = normalize_sex(sample.sex)
    complete = (
        _present(sample.weight_kg)
        and _present(sample.height_cm)
        and _present(sample.age_months)
        and sex is not None
    )
    if not complete:
        return GrowthAssessment(
            complete=False,
            weight_for_age_z=None,
            height_for_age_z=None,
            weight_for_age_ok=True,
            height_for_age_ok=True,
            arm_circumference_ok=True,
            status=NutritionStatus.NORMAL,
        )

    waz = weight_for_age_z(sample.weight_kg, sample.age_months, sex)
    haz = height_for_age_z(sample.height_cm, sample.age_months, sex)
    w_ok = WEIGHT_Z_MIN <= waz <= WEIGHT_Z_MAX
    h_ok = haz >= HEIGHT_Z_MIN
    a_ok = arm_circumference_ok(sample.arm_circumference_cm)

    status = NutritionStatus.NORMAL if (w_ok and h_ok and a_ok) else NutritionStatus.AT_RISK_STUNTING
    return GrowthAssessment(
        complete=True,
        weight_for_age_z=float(waz),
        height_for_age_z=float(haz),
        weight_for_age_ok=w_ok,
        height_for_age_ok=h_ok,
        arm_circumference_ok=a_ok,
        status=status,
    )


def classify_nutrition_status(
    weight_kg: Optional[float],
    height_cm: Optional[float],
    arm_circumference_cm: Optional[float],
    age_months: Optional[int],
    sex: Optional[str],
) -> NutritionStatus:
    """
    Normal only when BB/U, TB/U and LILA all pass; otherwise Resiko Stunting.
    Incomplete input defaults to Normal.
    """
    sample = AnthropometricSample(
        weight_kg=weight_kg,
        height_cm=height_cm,
        arm_circumference_cm=arm_circumference_cm,
        age_months=age_months,
        sex=sex,
    )
    return assess_growth(sample).status


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def age_in_months(birth_date: DateLike, as_of: Optional[DateLike] = None) -> int:
    """
    Whole completed months between birth_date and as_of, never negative.

    as_of defaults to the local calendar date; the API always passes its UTC date.
    """
    birth = _as_date(birth_date)
    ref = _as_date(as_of) if as_of is not None else date.today()

    months = (ref.year - birth.year) * 12 + (ref.month - birth.month)
    if ref.day < birth.day:
        months -= 1
    return max(0, months)

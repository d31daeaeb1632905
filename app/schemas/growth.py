from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.models.growth.nutrition_status import normalize_sex


class GrowthInput(BaseModel):
    """Raw form values for one screening. Any missing measurement yields "Normal"."""

    sex: Optional[str] = Field(None, description="M/F, or Laki-laki/Perempuan")
    weight_kg: Optional[float] = Field(None, gt=0)
    height_cm: Optional[float] = Field(None, gt=0)
    arm_circumference_cm: Optional[float] = Field(None, ge=0, description="LILA; 0 means not measured")
    age_months: Optional[int] = Field(None, ge=0)
    birth_date: Optional[date] = Field(None, description="Used when age_months is not given")
    as_of: Optional[date] = None

    @field_validator("sex")
    @classmethod
    def known_sex(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        sex = normalize_sex(v)
        if sex is None:
            raise ValueError(f"unknown sex: {v!r}")
        return sex


class GrowthOutput(BaseModel):
    status: str
    age_months: Optional[int]
    complete: bool
    weight_for_age_z: Optional[float]
    height_for_age_z: Optional[float]
    weight_for_age_ok: bool
    height_for_age_ok: bool
    arm_circumference_ok: bool


class AgeInput(BaseModel):
    birth_date: date
    as_of: Optional[date] = None


class AgeOutput(BaseModel):
    birth_date: date
    as_of: date
    age_months: int

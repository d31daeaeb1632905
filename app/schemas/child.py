from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import reject_null
from src.models.growth.nutrition_status import normalize_sex


def _sex(v):
    if v is None:
        return v
    return normalize_sex(v) or v


class ChildBase(BaseModel):
    name: str = Field(..., min_length=1)
    sex: Literal["M", "F"]
    birth_date: date
    nik: Optional[str] = None
    birth_weight_kg: Optional[float] = Field(None, gt=0)
    birth_height_cm: Optional[float] = Field(None, gt=0)
    mother_name: Optional[str] = None
    father_name: Optional[str] = None
    address: Optional[str] = None
    posyandu: Optional[str] = None

    normalize_sex_field = field_validator("sex", mode="before")(_sex)


class ChildCreate(ChildBase):
    pass


class ChildUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    sex: Optional[Literal["M", "F"]] = None
    birth_date: Optional[date] = None
    nik: Optional[str] = None
    birth_weight_kg: Optional[float] = Field(None, gt=0)
    birth_height_cm: Optional[float] = Field(None, gt=0)
    mother_name: Optional[str] = None
    father_name: Optional[str] = None
    address: Optional[str] = None
    posyandu: Optional[str] = None

    normalize_sex_field = field_validator("sex", mode="before")(_sex)
    required_not_null = field_validator("name", "sex", "birth_date", mode="before")(reject_null)


class RiskLevelUpdate(BaseModel):
    stunting_risk_level: Optional[str] = Field(None, description='e.g. "Risiko Tinggi" / "Risiko Sedang"')


class ChildOut(ChildBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    nutrition_status: str
    stunting_risk_level: Optional[str] = None
    created_at: datetime
    updated_at: datetime

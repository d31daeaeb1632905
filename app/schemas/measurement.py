from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import reject_null


class MeasurementCreate(BaseModel):
    measured_on: date
    weight_kg: Optional[float] = Field(None, gt=0)
    height_cm: Optional[float] = Field(None, gt=0)
    arm_circumference_cm: Optional[float] = Field(None, ge=0)
    head_circumference_cm: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class MeasurementUpdate(BaseModel):
    measured_on: Optional[date] = None
    weight_kg: Optional[float] = Field(None, gt=0)
    height_cm: Optional[float] = Field(None, gt=0)
    arm_circumference_cm: Optional[float] = Field(None, ge=0)
    head_circumference_cm: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None

    required_not_null = field_validator("measured_on", mode="before")(reject_null)


class MeasurementOut(MeasurementCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    child_id: int
    age_months: Optional[int]
    nutrition_status: str
    created_at: datetime

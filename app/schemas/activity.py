from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import reject_null


ActivityCategory = Literal[
    "imunisasi",
    "edukasi",
    "pemeriksaan",
    "posyandu",
    "penyuluhan",
    "konseling",
    "pemantauan",
]
ActivityStatus = Literal["Terjadwal", "Berlangsung", "Selesai"]


class ActivityCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: ActivityCategory = "posyandu"
    location: Optional[str] = None
    posyandu: Optional[str] = None
    scheduled_at: datetime
    status: ActivityStatus = "Terjadwal"


class ActivityUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[ActivityCategory] = None
    location: Optional[str] = None
    posyandu: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    status: Optional[ActivityStatus] = None

    required_not_null = field_validator("title", "category", "scheduled_at", "status", mode="before")(reject_null)


class ActivityOut(ActivityCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime

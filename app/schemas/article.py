from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import reject_null


ArticleStatus = Literal["draft", "published", "archived"]


class ArticleCreate(BaseModel):
    title: str = Field(..., min_length=1)
    body: str = ""
    category: Optional[str] = None
    status: ArticleStatus = "draft"
    published_on: Optional[date] = None


class ArticleUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    body: Optional[str] = None
    category: Optional[str] = None
    status: Optional[ArticleStatus] = None
    published_on: Optional[date] = None

    required_not_null = field_validator("title", "body", "status", mode="before")(reject_null)


class ArticleOut(ArticleCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime

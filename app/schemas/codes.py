from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class CodeGenerateInput(BaseModel):
    # kept as plain strings: unreadable values degrade to sentinels instead of failing
    name: Optional[str] = None
    birth_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    sequence_number: int = Field(1, description="Usually existing children with this birth date + 1")


class CodeOutput(BaseModel):
    code: str


class ParsedCode(BaseModel):
    code: str
    birth_date: Optional[date]
    initials: str
    sequence: int

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.schemas.codes import CodeGenerateInput, CodeOutput, ParsedCode
from src.models.growth.child_code import generate_child_code, parse_child_code


router = APIRouter(prefix="/codes", tags=["codes"])


@router.post("/generate", response_model=CodeOutput)
def generate(inp: CodeGenerateInput) -> CodeOutput:
    """Preview the code a child would get; nothing is reserved."""
    return CodeOutput(code=generate_child_code(inp.name, inp.birth_date, inp.sequence_number))


@router.get("/parse/{code}", response_model=ParsedCode)
def parse(code: str) -> ParsedCode:
    parsed = parse_child_code(code)
    if parsed is None:
        raise HTTPException(status_code=422, detail=f"Malformed child code: {code!r}")
    return ParsedCode(
        code=code,
        birth_date=parsed.birth_date,
        initials=parsed.initials,
        sequence=parsed.sequence,
    )

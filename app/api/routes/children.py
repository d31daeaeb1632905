from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, Response

from app.schemas.child import ChildCreate, ChildOut, ChildUpdate, RiskLevelUpdate
from app.services import child_service
from app.services.errors import ChildCodeConflict, RecordNotFound


router = APIRouter(prefix="/children", tags=["children"])


@router.get("", response_model=List[ChildOut])
def list_children(status: Optional[str] = None, limit: Optional[int] = Query(None, ge=1)):
    """All registered children, newest first. `status` filters on nutrition status."""
    return child_service.list_children(status=status, limit=limit)


@router.get("/search", response_model=List[ChildOut])
def search_children(q: str = Query(..., min_length=1)):
    return child_service.search_children(q)


@router.get("/counts")
def counts_by_status() -> Dict[str, int]:
    return child_service.count_by_status()


@router.get("/by-code/{code}", response_model=ChildOut)
def get_by_code(code: str):
    """Public growth lookup: find a child by the code printed on its card."""
    try:
        return child_service.get_child_by_code(code)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=ChildOut, status_code=201)
def create_child(inp: ChildCreate):
    try:
        return child_service.create_child(inp)
    except ChildCodeConflict as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{child_id}", response_model=ChildOut)
def get_child(child_id: int):
    try:
        return child_service.get_child(child_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{child_id}", response_model=ChildOut)
def update_child(child_id: int, inp: ChildUpdate):
    try:
        return child_service.update_child(child_id, inp)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{child_id}/risk-level", response_model=ChildOut)
def set_risk_level(child_id: int, inp: RiskLevelUpdate):
    try:
        return child_service.set_stunting_risk_level(child_id, inp.stunting_risk_level)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{child_id}", status_code=204)
def delete_child(child_id: int) -> Response:
    try:
        child_service.delete_child(child_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)

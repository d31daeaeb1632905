from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response

from app.config import load_config
from app.schemas.activity import ActivityCreate, ActivityOut, ActivityUpdate
from app.services import activity_service
from app.services.errors import RecordNotFound


router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("", response_model=List[ActivityOut])
def list_activities(
    status: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1),
):
    return activity_service.list_activities(status=status, category=category, limit=limit)


@router.get("/upcoming", response_model=List[ActivityOut])
def upcoming(limit: Optional[int] = Query(None, ge=1)):
    """Public listing of scheduled posyandu activities."""
    limit = limit or int(load_config().get("activities", {}).get("upcoming_limit", 5))
    return activity_service.upcoming_activities(limit=limit)


@router.get("/search", response_model=List[ActivityOut])
def search(q: str = Query(..., min_length=1)):
    return activity_service.search_activities(q)


@router.post("", response_model=ActivityOut, status_code=201)
def create_activity(inp: ActivityCreate):
    return activity_service.create_activity(inp)


@router.get("/{activity_id}", response_model=ActivityOut)
def get_activity(activity_id: int):
    try:
        return activity_service.get_activity(activity_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{activity_id}", response_model=ActivityOut)
def update_activity(activity_id: int, inp: ActivityUpdate):
    try:
        return activity_service.update_activity(activity_id, inp)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{activity_id}", status_code=204)
def delete_activity(activity_id: int) -> Response:
    try:
        activity_service.delete_activity(activity_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Response

from app.schemas.measurement import MeasurementCreate, MeasurementOut, MeasurementUpdate
from app.services import measurement_service
from app.services.errors import RecordNotFound


router = APIRouter(tags=["measurements"])


@router.get("/children/{child_id}/measurements", response_model=List[MeasurementOut])
def list_measurements(child_id: int):
    try:
        return measurement_service.list_measurements(child_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/children/{child_id}/measurements/latest", response_model=MeasurementOut)
def latest_measurement(child_id: int):
    try:
        return measurement_service.latest_measurement(child_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/children/{child_id}/measurements", response_model=MeasurementOut, status_code=201)
def create_measurement(child_id: int, inp: MeasurementCreate):
    """Record weight/height/LILA; the response carries the computed nutrition status."""
    try:
        return measurement_service.create_measurement(child_id, inp)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/measurements/{measurement_id}", response_model=MeasurementOut)
def get_measurement(measurement_id: int):
    try:
        return measurement_service.get_measurement(measurement_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/measurements/{measurement_id}", response_model=MeasurementOut)
def update_measurement(measurement_id: int, inp: MeasurementUpdate):
    try:
        return measurement_service.update_measurement(measurement_id, inp)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/measurements/{measurement_id}", status_code=204)
def delete_measurement(measurement_id: int) -> Response:
    try:
        measurement_service.delete_measurement(measurement_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)

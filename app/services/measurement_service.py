from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from app.db.models import Child, Measurement
from app.db.session import SessionLocal
from app.schemas.measurement import MeasurementCreate, MeasurementOut, MeasurementUpdate
from app.services.classification import (
    classify_measurement,
    latest_measurement_row,
    refresh_child_status,
)
from app.services.errors import RecordNotFound


logger = logging.getLogger(__name__)


def _get_child(db: Session, child_id: int) -> Child:
    child = db.get(Child, child_id)
    if child is None:
        raise RecordNotFound("child", child_id)
    return child


def _get(db: Session, measurement_id: int) -> Measurement:
    row = db.get(Measurement, measurement_id)
    if row is None:
        raise RecordNotFound("measurement", measurement_id)
    return row


def list_measurements(child_id: int) -> List[MeasurementOut]:
    """Measurement history for a child, newest first."""
    db = SessionLocal()
    try:
        _get_child(db, child_id)
        rows = (
            db.query(Measurement)
            .filter(Measurement.child_id == child_id)
            .order_by(Measurement.measured_on.desc(), Measurement.id.desc())
            .all()
        )
        return [MeasurementOut.model_validate(r) for r in rows]
    finally:
        db.close()


def latest_measurement(child_id: int) -> MeasurementOut:
    db = SessionLocal()
    try:
        _get_child(db, child_id)
        row = latest_measurement_row(db, child_id)
        if row is None:
            raise RecordNotFound("measurement for child", child_id)
        return MeasurementOut.model_validate(row)
    finally:
        db.close()


def get_measurement(measurement_id: int) -> MeasurementOut:
    db = SessionLocal()
    try:
        return MeasurementOut.model_validate(_get(db, measurement_id))
    finally:
        db.close()


def create_measurement(child_id: int, data: MeasurementCreate) -> MeasurementOut:
    """Record a measurement, classify it, and refresh the child's status."""
    db = SessionLocal()
    try:
        child = _get_child(db, child_id)
        row = Measurement(child_id=child_id, **data.model_dump())
        classify_measurement(row, child)
        db.add(row)
        refresh_child_status(db, child)
        db.commit()
        db.refresh(row)
        logger.info(
            "Created measurement id=%s child=%s age=%sm status=%s",
            row.id,
            child_id,
            row.age_months,
            row.nutrition_status,
        )
        return MeasurementOut.model_validate(row)
    finally:
        db.close()


def update_measurement(measurement_id: int, data: MeasurementUpdate) -> MeasurementOut:
    fields = data.model_dump(exclude_unset=True)
    db = SessionLocal()
    try:
        row = _get(db, measurement_id)
        for k, v in fields.items():
            setattr(row, k, v)
        child = _get_child(db, row.child_id)
        classify_measurement(row, child)
        refresh_child_status(db, child)
        db.commit()
        db.refresh(row)
        logger.info("Updated measurement id=%s status=%s", measurement_id, row.nutrition_status)
        return MeasurementOut.model_validate(row)
    finally:
        db.close()


def delete_measurement(measurement_id: int) -> None:
    db = SessionLocal()
    try:
        row = _get(db, measurement_id)
        child = _get_child(db, row.child_id)
        db.delete(row)
        refresh_child_status(db, child)
        db.commit()
        logger.info("Deleted measurement id=%s", measurement_id)
    finally:
        db.close()

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.db.models import Child, Measurement
from src.models.growth.nutrition_status import (
    NutritionStatus,
    age_in_months,
    classify_nutrition_status,
)


def classify_measurement(m: Measurement, child: Child) -> None:
    """Stamp age (at measurement date) and nutrition status onto a measurement row."""
    m.age_months = age_in_months(child.birth_date, m.measured_on)
    m.nutrition_status = classify_nutrition_status(
        weight_kg=m.weight_kg,
        height_cm=m.height_cm,
        arm_circumference_cm=m.arm_circumference_cm,
        age_months=m.age_months,
        sex=child.sex,
    ).value


def latest_measurement_row(db: Session, child_id: int) -> Optional[Measurement]:
    return (
        db.query(Measurement)
        .filter(Measurement.child_id == child_id)
        .order_by(Measurement.measured_on.desc(), Measurement.id.desc())
        .first()
    )


def refresh_child_status(db: Session, child: Child) -> None:
    """A child's status mirrors its most recent measurement; no measurements means Normal."""
    db.flush()
    latest = latest_measurement_row(db, child.id)
    child.nutrition_status = latest.nutrition_status if latest else NutritionStatus.NORMAL.value


def reclassify_child(db: Session, child: Child) -> int:
    """Recompute every measurement of a child, then the child itself. Returns rows touched."""
    rows = db.query(Measurement).filter(Measurement.child_id == child.id).all()
    for m in rows:
        classify_measurement(m, child)
    refresh_child_status(db, child)
    return len(rows)

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.db.models import Activity
from app.db.session import SessionLocal
from app.schemas.activity import ActivityCreate, ActivityOut, ActivityUpdate
from app.services.errors import RecordNotFound
from app.utils.time import now_utc, to_naive_utc


logger = logging.getLogger(__name__)

SCHEDULED = "Terjadwal"


def _get(db: Session, activity_id: int) -> Activity:
    row = db.get(Activity, activity_id)
    if row is None:
        raise RecordNotFound("activity", activity_id)
    return row


def list_activities(
    status: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[ActivityOut]:
    db = SessionLocal()
    try:
        q = db.query(Activity)
        if status:
            q = q.filter(Activity.status == status)
        if category:
            q = q.filter(Activity.category == category)
        q = q.order_by(Activity.scheduled_at.desc(), Activity.id.desc())
        if limit:
            q = q.limit(limit)
        return [ActivityOut.model_validate(r) for r in q.all()]
    finally:
        db.close()


def upcoming_activities(limit: int = 5) -> List[ActivityOut]:
    """Scheduled activities from now on, soonest first."""
    db = SessionLocal()
    try:
        rows = (
            db.query(Activity)
            .filter(Activity.status == SCHEDULED, Activity.scheduled_at >= now_utc())
            .order_by(Activity.scheduled_at.asc())
            .limit(limit)
            .all()
        )
        return [ActivityOut.model_validate(r) for r in rows]
    finally:
        db.close()


def search_activities(query: str) -> List[ActivityOut]:
    db = SessionLocal()
    try:
        rows = (
            db.query(Activity)
            .filter(Activity.title.ilike(f"%{query.strip()}%"))
            .order_by(Activity.scheduled_at.desc())
            .all()
        )
        return [ActivityOut.model_validate(r) for r in rows]
    finally:
        db.close()


def get_activity(activity_id: int) -> ActivityOut:
    db = SessionLocal()
    try:
        return ActivityOut.model_validate(_get(db, activity_id))
    finally:
        db.close()


def create_activity(data: ActivityCreate) -> ActivityOut:
    fields = data.model_dump()
    fields["scheduled_at"] = to_naive_utc(fields["scheduled_at"])
    db = SessionLocal()
    try:
        row = Activity(**fields)
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("Created activity id=%s %r", row.id, row.title)
        return ActivityOut.model_validate(row)
    finally:
        db.close()


def update_activity(activity_id: int, data: ActivityUpdate) -> ActivityOut:
    fields = data.model_dump(exclude_unset=True)
    if "scheduled_at" in fields:
        fields["scheduled_at"] = to_naive_utc(fields["scheduled_at"])
    db = SessionLocal()
    try:
        row = _get(db, activity_id)
        for k, v in fields.items():
            setattr(row, k, v)
        db.commit()
        db.refresh(row)
        logger.info("Updated activity id=%s", activity_id)
        return ActivityOut.model_validate(row)
    finally:
        db.close()


def delete_activity(activity_id: int) -> None:
    db = SessionLocal()
    try:
        db.delete(_get(db, activity_id))
        db.commit()
        logger.info("Deleted activity id=%s", activity_id)
    finally:
        db.close()

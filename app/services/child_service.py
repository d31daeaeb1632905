from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import func, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import load_config
from app.db.models import Child, ChildCodeSequence
from app.db.session import SessionLocal
from app.schemas.child import ChildCreate, ChildOut, ChildUpdate
from app.services.classification import reclassify_child
from app.services.errors import ChildCodeConflict, RecordNotFound
from src.models.growth.child_code import generate_child_code, parse_child_code
from src.models.growth.nutrition_status import NutritionStatus


logger = logging.getLogger(__name__)


def _highest_used_sequence(db: Session, birth_date: date) -> int:
    codes = [r[0] for r in db.query(Child.code).filter(Child.birth_date == birth_date).all() if r[0]]
    seqs = [p.sequence for p in (parse_child_code(c) for c in codes) if p is not None]
    return max([len(codes), *seqs])


def allocate_sequence(db: Session, birth_date: date) -> int:
    """Reserve the next code sequence number for a birth date.

    Runs inside the caller's transaction. The per-date counter is bumped with a
    single UPDATE so concurrent writers serialize on that row; a date seen for
    the first time is seeded from the children already registered on it.
    """
    res = db.execute(
        update(ChildCodeSequence)
        .where(ChildCodeSequence.birth_date == birth_date)
        .values(last_value=ChildCodeSequence.last_value + 1)
        .execution_options(synchronize_session=False)
    )
    if res.rowcount:
        return int(
            db.query(ChildCodeSequence.last_value)
            .filter(ChildCodeSequence.birth_date == birth_date)
            .scalar()
        )

    seq = _highest_used_sequence(db, birth_date) + 1
    db.add(ChildCodeSequence(birth_date=birth_date, last_value=seq))
    db.flush()
    return seq


def next_free_code(db: Session, name: str, birth_date: date) -> str:
    while True:
        code = generate_child_code(name, birth_date, allocate_sequence(db, birth_date))
        if db.query(Child.id).filter(Child.code == code).first() is None:
            return code


def _get(db: Session, child_id: int) -> Child:
    row = db.get(Child, child_id)
    if row is None:
        raise RecordNotFound("child", child_id)
    return row


def create_child(data: ChildCreate) -> ChildOut:
    """Insert a child and assign its code in the same transaction.

    A unique-index violation (another writer took the code or seeded the
    counter first) rolls back and retries with a fresh sequence.
    """
    retries = int(load_config().get("children", {}).get("code_max_retries", 5))
    for attempt in range(1, retries + 1):
        db = SessionLocal()
        try:
            code = next_free_code(db, data.name, data.birth_date)
            row = Child(
                **data.model_dump(),
                code=code,
                nutrition_status=NutritionStatus.NORMAL.value,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            logger.info("Created child id=%s code=%s", row.id, row.code)
            return ChildOut.model_validate(row)
        except IntegrityError:
            db.rollback()
            logger.warning(
                "Child code collision for birth date %s (attempt %d/%d)",
                data.birth_date,
                attempt,
                retries,
            )
        finally:
            db.close()

    raise ChildCodeConflict(f"could not allocate a child code for {data.birth_date} after {retries} attempts")


def get_child(child_id: int) -> ChildOut:
    db = SessionLocal()
    try:
        return ChildOut.model_validate(_get(db, child_id))
    finally:
        db.close()


def get_child_by_code(code: str) -> ChildOut:
    db = SessionLocal()
    try:
        row = db.query(Child).filter(Child.code == code.strip()).first()
        if row is None:
            raise RecordNotFound("child", code)
        return ChildOut.model_validate(row)
    finally:
        db.close()


def list_children(status: Optional[str] = None, limit: Optional[int] = None) -> List[ChildOut]:
    """Newest registrations first, optionally filtered by nutrition status."""
    db = SessionLocal()
    try:
        q = db.query(Child)
        if status:
            q = q.filter(Child.nutrition_status == status)
        q = q.order_by(Child.created_at.desc(), Child.id.desc())
        if limit:
            q = q.limit(limit)
        return [ChildOut.model_validate(r) for r in q.all()]
    finally:
        db.close()


def children_by_status(status: str) -> List[ChildOut]:
    return list_children(status=status)


def search_children(query: str) -> List[ChildOut]:
    """Case-insensitive substring match on name or code."""
    pattern = f"%{query.strip()}%"
    db = SessionLocal()
    try:
        rows = (
            db.query(Child)
            .filter(or_(Child.name.ilike(pattern), Child.code.ilike(pattern)))
            .order_by(Child.created_at.desc(), Child.id.desc())
            .all()
        )
        return [ChildOut.model_validate(r) for r in rows]
    finally:
        db.close()


def count_by_status() -> Dict[str, int]:
    db = SessionLocal()
    try:
        rows = (
            db.query(Child.nutrition_status, func.count(Child.id))
            .group_by(Child.nutrition_status)
            .all()
        )
        return {status: int(n) for status, n in rows}
    finally:
        db.close()


def update_child(child_id: int, data: ChildUpdate) -> ChildOut:
    """Apply a partial update. The code is never regenerated."""
    fields = data.model_dump(exclude_unset=True)
    db = SessionLocal()
    try:
        row = _get(db, child_id)
        for k, v in fields.items():
            setattr(row, k, v)

        # age and sex feed every stored classification
        if "birth_date" in fields or "sex" in fields:
            reclassify_child(db, row)

        db.commit()
        db.refresh(row)
        logger.info("Updated child id=%s fields=%s", child_id, sorted(fields))
        return ChildOut.model_validate(row)
    finally:
        db.close()


def set_stunting_risk_level(child_id: int, level: Optional[str]) -> ChildOut:
    db = SessionLocal()
    try:
        row = _get(db, child_id)
        row.stunting_risk_level = level
        db.commit()
        db.refresh(row)
        logger.info("Child id=%s risk level -> %s", child_id, level)
        return ChildOut.model_validate(row)
    finally:
        db.close()


def delete_child(child_id: int) -> None:
    db = SessionLocal()
    try:
        row = _get(db, child_id)
        db.delete(row)
        db.commit()
        logger.info("Deleted child id=%s", child_id)
    finally:
        db.close()

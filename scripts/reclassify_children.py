"""One-off maintenance script: recompute stored nutrition statuses.

Run manually after changing the growth model or importing legacy rows:

    python -m scripts.reclassify_children

Every measurement gets its age and status recomputed, every child takes the
status of its latest measurement, and children without a code get one.
"""

from __future__ import annotations

import logging

from app.config import setup_logging
from app.db.models import Child
from app.db.session import SessionLocal, init_db
from app.services.child_service import next_free_code
from app.services.classification import reclassify_child


logger = logging.getLogger(__name__)


def reclassify() -> dict:
    init_db()
    db = SessionLocal()
    try:
        children = db.query(Child).order_by(Child.id.asc()).all()
        measurements = 0
        coded = 0
        for child in children:
            if not child.code:
                child.code = next_free_code(db, child.name, child.birth_date)
                db.flush()
                coded += 1
            measurements += reclassify_child(db, child)

        db.commit()
        summary = {"children": len(children), "measurements": measurements, "codes_assigned": coded}
        logger.info("Reclassification complete: %s", summary)
        return summary
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    reclassify()

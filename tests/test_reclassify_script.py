from datetime import date

from app.db.models import Child, Measurement
from app.db.session import SessionLocal
from scripts.reclassify_children import reclassify


def test_reclassify_repairs_stale_rows():
    db = SessionLocal()
    try:
        child = Child(code="", name="Rina Wati", sex="F", birth_date=date(2023, 1, 15))
        db.add(child)
        db.flush()
        # stale row: wrong age and status from an older model
        db.add(
            Measurement(
                child_id=child.id,
                measured_on=date(2025, 1, 15),
                weight_kg=11.0,
                height_cm=70.0,
                age_months=0,
                nutrition_status="Normal",
            )
        )
        db.commit()
        child_id = child.id
    finally:
        db.close()

    assert reclassify() == {"children": 1, "measurements": 1, "codes_assigned": 1}

    db = SessionLocal()
    try:
        child = db.get(Child, child_id)
        assert child.code == "20230115-RW-001"
        assert child.nutrition_status == "Resiko Stunting"
        m = db.query(Measurement).filter(Measurement.child_id == child_id).one()
        assert m.age_months == 24
        assert m.nutrition_status == "Resiko Stunting"
    finally:
        db.close()


def test_reclassify_is_idempotent(client, make_child):
    child = make_child()
    client.post(
        f"/children/{child['id']}/measurements",
        json={"measured_on": "2025-01-15", "weight_kg": 12, "height_cm": 85},
    )
    assert reclassify() == {"children": 1, "measurements": 1, "codes_assigned": 0}
    assert reclassify()["codes_assigned"] == 0
    assert client.get(f"/children/{child['id']}").json()["nutrition_status"] == "Normal"

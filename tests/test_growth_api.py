from datetime import date

import app.api.main as api_main


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_classify_normal(client):
    r = client.post(
        "/growth/classify",
        json={"sex": "M", "weight_kg": 12, "height_cm": 85, "arm_circumference_cm": 13.5, "age_months": 24},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "Normal"
    assert body["complete"] is True
    assert abs(body["weight_for_age_z"] - 0.2) < 1e-9


def test_classify_uses_birth_date_when_age_missing(client):
    r = client.post(
        "/growth/classify",
        json={
            "sex": "Laki-laki",
            "weight_kg": 12,
            "height_cm": 75,
            "birth_date": "2023-01-15",
            "as_of": "2025-01-15",
        },
    )
    body = r.json()
    assert body["age_months"] == 24
    assert body["height_for_age_ok"] is False
    assert body["status"] == "Resiko Stunting"


def test_classify_incomplete_defaults_to_normal(client):
    body = client.post("/growth/classify", json={"sex": "F", "height_cm": 80, "age_months": 20}).json()
    assert body["status"] == "Normal"
    assert body["complete"] is False
    assert body["weight_for_age_z"] is None


def test_classify_rejects_unknown_sex(client):
    r = client.post("/growth/classify", json={"sex": "unknown", "weight_kg": 10})
    assert r.status_code == 422


def test_classify_rejects_negative_weight(client):
    r = client.post("/growth/classify", json={"sex": "M", "weight_kg": -1})
    assert r.status_code == 422


def test_age_endpoint(client):
    r = client.post("/growth/age", json={"birth_date": "2024-01-15", "as_of": "2025-01-14"})
    assert r.json()["age_months"] == 11


def test_generate_code(client):
    r = client.post("/codes/generate", json={"name": "Ari Ramadhan", "birth_date": "2025-01-13", "sequence_number": 1})
    assert r.json() == {"code": "20250113-AR-001"}


def test_generate_code_degrades_to_sentinels(client):
    r = client.post("/codes/generate", json={"name": "", "birth_date": "garbage"})
    assert r.json() == {"code": "00000000-XX-001"}


def test_parse_code(client):
    body = client.get("/codes/parse/20250113-AR-001").json()
    assert body == {"code": "20250113-AR-001", "birth_date": "2025-01-13", "initials": "AR", "sequence": 1}


def test_parse_malformed_code(client):
    assert client.get("/codes/parse/not-a-valid-code-at-all").status_code == 422


def test_age_defaults_to_utc_today(client, monkeypatch):
    monkeypatch.setattr(api_main, "today", lambda: date(2025, 1, 15))
    body = client.post("/growth/age", json={"birth_date": "2024-01-15"}).json()
    assert body["as_of"] == "2025-01-15"
    assert body["age_months"] == 12

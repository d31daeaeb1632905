from datetime import date

import pytest

from app.services import statistics_service
from app.utils.time import today


def _measure(client, child_id, measured_on, **fields):
    payload = {"measured_on": measured_on, "weight_kg": 12, "height_cm": 85}
    payload.update(fields)
    r = client.post(f"/children/{child_id}/measurements", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_dashboard_percentages(client, make_child):
    a = make_child()
    make_child(name="Siti")
    _measure(client, a["id"], "2025-01-15", height_cm=75)
    client.post("/articles", json={"title": "Gizi seimbang", "status": "published"})

    body = client.get("/stats/dashboard").json()
    assert body["total_children"] == 2
    assert body["at_risk"] == 1
    assert body["normal"] == 1
    assert body["at_risk_pct"] == 50.0
    assert body["normal_pct"] == 50.0
    assert body["total_measurements"] == 1
    assert body["published_articles"] == 1


def test_dashboard_empty(client):
    body = client.get("/stats/dashboard").json()
    assert body["total_children"] == 0
    assert body["at_risk_pct"] == 0.0


def test_growth_trend_oldest_first(client, make_child):
    child = make_child()
    _measure(client, child["id"], "2025-02-20", weight_kg=12.2)
    _measure(client, child["id"], "2025-01-15")
    points = client.get(f"/stats/growth/{child['id']}").json()
    assert [p["measured_on"] for p in points] == ["2025-01-15", "2025-02-20"]
    assert client.get("/stats/growth/999").status_code == 404


def test_monthly_stats(client, make_child):
    child = make_child()
    _measure(client, child["id"], "2025-01-15")
    _measure(client, child["id"], "2025-02-20")
    _measure(client, child["id"], "2024-12-15")
    client.post("/activities", json={"title": "Posyandu Februari", "scheduled_at": "2025-02-10T08:00:00"})

    body = client.get("/stats/monthly/2025").json()
    assert body["months"][0] == "Januari"
    assert body["measurements"] == [1, 1] + [0] * 10
    assert body["activities"] == [0, 1] + [0] * 10


def test_average_growth_ignores_missing_values(client, make_child):
    a = make_child()
    b = make_child(name="Siti", sex="F")
    _measure(client, a["id"], "2025-01-15", weight_kg=12, height_cm=85)
    _measure(client, b["id"], "2025-01-20", weight_kg=10, height_cm=80)
    _measure(client, a["id"], "2025-03-15", weight_kg=None, height_cm=88)

    body = client.get("/stats/average-growth/2025").json()
    assert body["months"][2] == "Mar"
    assert body["average_weight_kg"][0] == 11.0
    assert body["average_height_cm"][0] == 82.5
    assert body["average_weight_kg"][2] == 0.0
    assert body["average_height_cm"][2] == 88.0
    assert body["average_weight_kg"][1] == 0.0


def test_average_growth_empty_year(client):
    body = client.get("/stats/average-growth/2020").json()
    assert body["average_weight_kg"] == [0.0] * 12


def test_stunting_distribution(client, make_child):
    a = make_child()
    b = make_child(name="Bayu", birth_date="2024-12-01")
    make_child(name="Siti")
    _measure(client, a["id"], "2025-01-15", height_cm=75)
    _measure(client, b["id"], "2025-02-01", weight_kg=9)

    body = client.get("/stats/stunting-distribution", params={"as_of": "2025-03-01"}).json()
    assert body["groups"] == {
        "0-6 bulan": 1,
        "7-12 bulan": 0,
        "13-24 bulan": 0,
        "25-36 bulan": 1,
        "37-60 bulan": 0,
    }


def test_recent_activity(client, make_child):
    child = make_child()
    _measure(client, child["id"], today().isoformat())
    _measure(client, child["id"], "2020-01-01")
    client.post("/activities", json={"title": "Posyandu", "scheduled_at": "2099-01-01T08:00:00"})

    body = client.get("/stats/recent").json()
    assert body["days"] == 7
    assert body["summary"] == {"measurements": 1, "activities": 1, "articles": 0}


def test_registration_trend_current_year(make_child):
    make_child()
    make_child(name="Siti")
    ref = today()

    trend = statistics_service.registration_trend(ref.year, ref=ref)
    month = ref.month - 1
    assert trend.monthly_count[month] == 2
    assert trend.cumulative_count[month] == 2
    assert all(c == 0 for c in trend.cumulative_count[ref.month:])


def test_registration_trend_past_year_runs_to_december(make_child):
    make_child()
    # a past year is never cut off at the reference month
    trend = statistics_service.registration_trend(2020, ref=date(2021, 3, 1))
    assert trend.monthly_count == [0] * 12
    assert len(trend.cumulative_count) == 12


@pytest.mark.parametrize("part,total,expected", [(1, 3, 33.33), (0, 0, 0.0), (2, 2, 100.0)])
def test_pct(part, total, expected):
    assert statistics_service._pct(part, total) == expected

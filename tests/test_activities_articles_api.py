import pytest

from app.utils.time import today


def _activity(client, **fields):
    payload = {"title": "Imunisasi Campak", "category": "imunisasi", "scheduled_at": "2099-03-01T09:00:00"}
    payload.update(fields)
    r = client.post("/activities", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def _article(client, **fields):
    payload = {"title": "MPASI untuk bayi 6 bulan", "body": "Mulai dengan bubur halus.", "category": "gizi"}
    payload.update(fields)
    r = client.post("/articles", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_activity_defaults(client):
    a = _activity(client)
    assert a["status"] == "Terjadwal"
    assert a["scheduled_at"] == "2099-03-01T09:00:00"


def test_activity_time_stored_as_utc(client):
    a = _activity(client, scheduled_at="2099-03-01T09:00:00+07:00")
    assert a["scheduled_at"] == "2099-03-01T02:00:00"


def test_upcoming_only_future_scheduled(client):
    later = _activity(client, title="Penimbangan", scheduled_at="2099-05-01T08:00:00")
    soon = _activity(client, title="Imunisasi", scheduled_at="2099-04-01T08:00:00")
    _activity(client, title="Sudah lewat", scheduled_at="2000-01-01T08:00:00")
    _activity(client, title="Selesai", status="Selesai", scheduled_at="2099-06-01T08:00:00")

    ids = [a["id"] for a in client.get("/activities/upcoming").json()]
    assert ids == [soon["id"], later["id"]]
    assert len(client.get("/activities/upcoming", params={"limit": 1}).json()) == 1


def test_activity_filters_and_search(client):
    _activity(client, title="Kelas Ibu Balita", category="edukasi")
    _activity(client, title="Imunisasi Polio", category="imunisasi", status="Selesai")
    assert [a["title"] for a in client.get("/activities", params={"category": "edukasi"}).json()] == ["Kelas Ibu Balita"]
    assert [a["title"] for a in client.get("/activities", params={"status": "Selesai"}).json()] == ["Imunisasi Polio"]
    assert [a["title"] for a in client.get("/activities/search", params={"q": "polio"}).json()] == ["Imunisasi Polio"]


def test_activity_update_and_delete(client):
    a = _activity(client)
    r = client.put(f"/activities/{a['id']}", json={"status": "Selesai", "location": "Balai RW 05"})
    assert r.json()["status"] == "Selesai"
    assert r.json()["location"] == "Balai RW 05"
    assert client.delete(f"/activities/{a['id']}").status_code == 204
    assert client.get(f"/activities/{a['id']}").status_code == 404


def test_activity_validation(client):
    r = client.post("/activities", json={"title": "X", "category": "olahraga", "scheduled_at": "2099-01-01T00:00:00"})
    assert r.status_code == 422


def test_publishing_stamps_date(client):
    draft = _article(client)
    assert draft["status"] == "draft"
    assert draft["published_on"] is None

    r = client.put(f"/articles/{draft['id']}", json={"status": "published"})
    assert r.json()["published_on"] == today().isoformat()


def test_explicit_publication_date_is_kept(client):
    a = _article(client, status="published", published_on="2024-08-17")
    assert a["published_on"] == "2024-08-17"


def test_latest_and_search_only_published(client):
    _article(client, title="Draf stunting", body="stunting")
    old = _article(client, title="Cegah stunting", status="published", published_on="2024-01-01")
    new = _article(client, title="ASI eksklusif", status="published", published_on="2024-06-01")

    assert [a["id"] for a in client.get("/articles/latest").json()] == [new["id"], old["id"]]
    assert [a["id"] for a in client.get("/articles/search", params={"q": "STUNTING"}).json()] == [old["id"]]
    assert len(client.get("/articles", params={"status": "draft"}).json()) == 1


def test_article_delete(client):
    a = _article(client)
    assert client.delete(f"/articles/{a['id']}").status_code == 204
    assert client.get(f"/articles/{a['id']}").status_code == 404
    assert client.put(f"/articles/{a['id']}", json={"title": "x"}).status_code == 404


@pytest.mark.parametrize("field", ["title", "category", "scheduled_at", "status"])
def test_activity_update_rejects_null_required_field(client, field):
    a = _activity(client)
    assert client.put(f"/activities/{a['id']}", json={field: None}).status_code == 422
    assert client.get(f"/activities/{a['id']}").json()[field] == a[field]


@pytest.mark.parametrize("field", ["title", "body", "status"])
def test_article_update_rejects_null_required_field(client, field):
    a = _article(client)
    assert client.put(f"/articles/{a['id']}", json={field: None}).status_code == 422
    assert client.get(f"/articles/{a['id']}").json()[field] == a[field]


def test_article_update_can_clear_category(client):
    a = _article(client)
    r = client.put(f"/articles/{a['id']}", json={"category": None})
    assert r.status_code == 200
    assert r.json()["category"] is None

import os
import tempfile
from pathlib import Path

# must be set before app.config is first loaded
_TMP_DIR = tempfile.mkdtemp(prefix="posyandu-tests-")
os.environ["POSYANDU_DB_URL"] = f"sqlite:///{Path(_TMP_DIR) / 'test.db'}"

import pytest
from fastapi.testclient import TestClient

from app.db.session import drop_db, init_db


@pytest.fixture(autouse=True)
def fresh_db():
    drop_db()
    init_db()
    yield


@pytest.fixture
def client():
    from app.api.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_child(client):
    def _make(**overrides):
        payload = {
            "name": "Ari Ramadhan",
            "sex": "M",
            "birth_date": "2023-01-15",
            "mother_name": "Siti Aminah",
            "posyandu": "Melati",
        }
        payload.update(overrides)
        r = client.post("/children", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _make

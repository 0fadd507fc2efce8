# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import os
import sys
import tempfile

# Configure the test environment before the app is imported / Testumgebung konfigurieren, bevor die App importiert wird
_TMP_DIR = tempfile.mkdtemp(prefix="router-dashboard-tests-")
os.environ["ENV"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["STORAGE_BACKEND"] = "sql"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["DATA_DIR"] = os.path.join(_TMP_DIR, "data")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENFORCE_PERMISSIONS"] = "False"

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

import pytest
from fastapi.testclient import TestClient

from main import app
from app.core import settings
from app.core.throttle import login_throttle
from app.db import set_store
from app.db.json_store import JsonStore
from app.db.sql_store import SqlStore
from app.services.auth_service import create_user
from app.services.seed import create_default_user, seed_demo_data


# Run every test against both backends / Jeden Test gegen beide Backends ausführen
@pytest.fixture(params=["sql", "json"], autouse=True)
def store(request, tmp_path):
    if request.param == "sql":
        backend = SqlStore()
    else:
        backend = JsonStore(str(tmp_path / "data"))
    set_store(backend)
    backend.reset()
    login_throttle.reset()
    create_default_user()
    seed_demo_data()
    yield backend
    set_store(None)


@pytest.fixture
def client():
    return TestClient(app)


def login(client, username, password):
    res = client.post("/api/login", json={"username": username, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["token"]


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_token(client):
    return login(client, settings.FIRST_SUPERUSER, settings.FIRST_SUPERUSER_PASSWORD)


@pytest.fixture
def make_user():
    def _make(username="operator", password="secret-pass", **kwargs):
        return create_user(username, password, email=f"{username}@example.com", **kwargs)
    return _make


@pytest.fixture
def user_token(client, make_user):
    make_user("operator", "secret-pass")
    return login(client, "operator", "secret-pass")

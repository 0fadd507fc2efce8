# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import pytest

from app.core import settings
from conftest import auth, login


def test_default_theme(client, user_token):
    res = client.get("/api/user/settings", headers=auth(user_token))
    assert res.status_code == 200
    assert res.json() == {"status": True, "settings": {"theme": "system"}}


@pytest.mark.parametrize("theme", ["system", "dark", "light"])
def test_theme_round_trip(client, user_token, theme):
    res = client.post("/api/user/settings", headers=auth(user_token), json={"theme": theme})
    assert res.status_code == 200
    assert res.json()["settings"]["theme"] == theme

    # Reload from the store / Erneut aus dem Speicher laden
    res = client.get("/api/user/settings", headers=auth(user_token))
    assert res.json()["settings"]["theme"] == theme
    assert client.get("/api/dash", headers=auth(user_token)).json()["user"]["settings"]["theme"] == theme


@pytest.mark.parametrize("payload", [{"theme": "blue"}, {"theme": "Dark"}, {"theme": ""}, {}])
def test_invalid_theme_rejected(client, user_token, payload):
    client.post("/api/user/settings", headers=auth(user_token), json={"theme": "dark"})
    res = client.post("/api/user/settings", headers=auth(user_token), json=payload)
    assert res.status_code == 400
    assert res.json() == {"status": False, "message": "Invalid theme"}
    assert client.get("/api/user/settings", headers=auth(user_token)).json()["settings"]["theme"] == "dark"


def test_settings_require_token(client):
    assert client.get("/api/user/settings").status_code == 401
    assert client.post("/api/user/settings", json={"theme": "dark"}).status_code == 401


def test_settings_open_to_any_user_by_default(client, user_token):
    # canConfigure is not enforced unless configured / canConfigure wird standardmäßig nicht erzwungen
    res = client.post("/api/user/settings", headers=auth(user_token), json={"theme": "light"})
    assert res.status_code == 200


def test_enforced_configure_permission(client, user_token, admin_token, monkeypatch):
    monkeypatch.setattr(settings, "ENFORCE_PERMISSIONS", True)
    res = client.post("/api/user/settings", headers=auth(user_token), json={"theme": "light"})
    assert res.status_code == 403
    assert client.get("/api/user/settings", headers=auth(user_token)).status_code == 200
    assert client.post("/api/user/settings", headers=auth(admin_token), json={"theme": "light"}).status_code == 200


def test_enforced_configure_permission_granted(client, make_user, monkeypatch):
    monkeypatch.setattr(settings, "ENFORCE_PERMISSIONS", True)
    make_user("xena", "xena-pass", permissions={"canMonitor": False, "canConfigure": True})
    token = login(client, "xena", "xena-pass")
    assert client.post("/api/user/settings", headers=auth(token), json={"theme": "dark"}).status_code == 200

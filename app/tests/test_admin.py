# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import pytest

from conftest import auth, login


def admin_id(client, admin_token):
    return client.get("/api/me", headers=auth(admin_token)).json()["user"]["id"]


def test_non_admin_cannot_list_users(client, user_token):
    res = client.get("/api/admin/users", headers=auth(user_token))
    assert res.status_code == 403
    assert res.json()["status"] is False
    assert "users" not in res.json()


@pytest.mark.parametrize("method,path", [
    ("get", "/api/admin/resources"),
    ("post", "/api/admin/create-user"),
    ("put", "/api/admin/update-user/1"),
    ("delete", "/api/admin/delete-user/1"),
])
def test_non_admin_blocked_on_every_admin_route(client, user_token, method, path):
    kwargs = {"json": {}} if method in ("post", "put") else {}
    res = getattr(client, method)(path, headers=auth(user_token), **kwargs)
    assert res.status_code == 403


def test_admin_routes_require_token(client):
    assert client.get("/api/admin/users").status_code == 401


def test_list_users_expands_resources(client, admin_token, store):
    device = store.list_devices()[0]
    router = store.list_routers()[0]
    client.post("/api/admin/create-user", headers=auth(admin_token), json={
        "username": "mia", "password": "mia-pass", "devices": [device["id"]], "routers": [router["id"]],
    })
    res = client.get("/api/admin/users", headers=auth(admin_token))
    assert res.status_code == 200
    users = {u["username"]: u for u in res.json()["users"]}
    assert set(users) == {"admin", "mia"}
    assert users["mia"]["devices"][0]["deviceName"] == device["deviceName"]
    assert users["mia"]["routers"][0]["routerName"] == router["routerName"]
    assert all("hashedPassword" not in u for u in users.values())


def test_resources(client, admin_token):
    body = client.get("/api/admin/resources", headers=auth(admin_token)).json()
    assert body["status"] is True
    assert len(body["devices"]) == 3
    assert len(body["routers"]) == 2


def test_create_user(client, admin_token):
    res = client.post("/api/admin/create-user", headers=auth(admin_token), json={
        "username": "noah", "password": "noah-pass", "permissions": {"canMonitor": True},
    })
    assert res.status_code == 200
    user = res.json()["user"]
    assert user["email"] == "noah@local.com"
    assert user["permissions"] == {"canMonitor": True, "canConfigure": False}
    assert user["isAdmin"] is False
    assert login(client, "noah", "noah-pass")


def test_create_user_duplicate(client, admin_token):
    payload = {"username": "olga", "password": "pw"}
    client.post("/api/admin/create-user", headers=auth(admin_token), json=payload)
    res = client.post("/api/admin/create-user", headers=auth(admin_token), json=payload)
    assert res.status_code == 409


def test_create_user_missing_data(client, admin_token):
    res = client.post("/api/admin/create-user", headers=auth(admin_token), json={"username": "pete"})
    assert res.status_code == 400
    assert res.json()["message"] == "Missing data"


def test_admin_cannot_be_renamed(client, admin_token):
    res = client.put(f"/api/admin/update-user/{admin_id(client, admin_token)}",
                     headers=auth(admin_token), json={"username": "root"})
    assert res.status_code == 400
    assert res.json()["message"] == "Admin username cannot be changed"
    assert login(client, "admin", "password123")


def test_admin_update_keeping_name_is_allowed(client, admin_token):
    res = client.put(f"/api/admin/update-user/{admin_id(client, admin_token)}",
                     headers=auth(admin_token), json={"username": "admin", "password": "new-admin-pass"})
    assert res.status_code == 200
    assert login(client, "admin", "new-admin-pass")


def test_admin_cannot_be_deleted(client, admin_token):
    res = client.delete(f"/api/admin/delete-user/{admin_id(client, admin_token)}", headers=auth(admin_token))
    assert res.status_code == 400
    assert res.json()["message"] == "Admin account cannot be deleted"
    assert client.get("/api/me", headers=auth(admin_token)).status_code == 200


def test_rename_user(client, admin_token, make_user):
    user = make_user("quinn", "quinn-pass")
    res = client.put(f"/api/admin/update-user/{user['id']}", headers=auth(admin_token), json={"username": "quincy"})
    assert res.status_code == 200
    updated = res.json()["user"]
    assert updated["username"] == "quincy"
    assert updated["email"] == "quincy@local.com"
    assert login(client, "quincy", "quinn-pass")


def test_rename_to_taken_username(client, admin_token, make_user):
    make_user("rita", "pw")
    user = make_user("sam", "pw")
    res = client.put(f"/api/admin/update-user/{user['id']}", headers=auth(admin_token), json={"username": "rita"})
    assert res.status_code == 409


def test_update_password_and_permissions(client, admin_token, make_user):
    user = make_user("tara", "old-pass")
    res = client.put(f"/api/admin/update-user/{user['id']}", headers=auth(admin_token), json={
        "password": "  new-pass  ",
        "permissions": {"canMonitor": True, "canConfigure": True},
    })
    assert res.status_code == 200
    assert res.json()["user"]["permissions"] == {"canMonitor": True, "canConfigure": True}
    assert client.post("/api/login", json={"username": "tara", "password": "old-pass"}).status_code == 401
    assert login(client, "tara", "new-pass")


def test_blank_password_keeps_old_one(client, admin_token, make_user):
    user = make_user("uma", "uma-pass")
    client.put(f"/api/admin/update-user/{user['id']}", headers=auth(admin_token), json={"password": "   "})
    assert login(client, "uma", "uma-pass")


def test_update_unknown_user(client, admin_token):
    res = client.put("/api/admin/update-user/9999", headers=auth(admin_token), json={"username": "x"})
    assert res.status_code == 404


def test_delete_user(client, admin_token, make_user):
    user = make_user("vera", "vera-pass")
    res = client.delete(f"/api/admin/delete-user/{user['id']}", headers=auth(admin_token))
    assert res.status_code == 200
    assert res.json()["message"] == "User deleted successfully"
    assert client.post("/api/login", json={"username": "vera", "password": "vera-pass"}).status_code == 401
    assert client.delete(f"/api/admin/delete-user/{user['id']}", headers=auth(admin_token)).status_code == 404


def test_admin_role_is_a_field_not_a_name(client, admin_token, make_user):
    make_user("walt", "walt-pass", is_admin=True)
    token = login(client, "walt", "walt-pass")
    assert client.get("/api/admin/users", headers=auth(token)).status_code == 200


def test_deleted_user_id_is_not_reused(client, admin_token, make_user):
    user = make_user("xena", "xena-pass")
    client.delete(f"/api/admin/delete-user/{user['id']}", headers=auth(admin_token))
    assert make_user("yara", "yara-pass")["id"] > user["id"]

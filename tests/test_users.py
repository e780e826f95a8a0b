from __future__ import annotations

from conftest import login_headers

BASE = "/api/users/"


def test_user_management_is_admin_only(client, users) -> None:
    assert client.get(BASE).status_code == 401
    resp = client.get(BASE, headers=login_headers(client, "referee"))
    assert resp.status_code == 403
    assert resp.json() == {"success": False, "message": "需要管理员权限"}


def test_list_users_never_exposes_password(client, users) -> None:
    body = client.get(BASE, headers=login_headers(client, "admin")).json()
    assert body["count"] == len(users)
    assert all("password" not in u for u in body["data"])
    roles = {u["username"]: u["role"] for u in body["data"]}
    assert roles["eng2"] == "engineer2"
    assert roles["recovery"] == "data_recovery_engineer"


def test_create_user_and_login(client, users) -> None:
    headers = login_headers(client, "admin")
    resp = client.post(
        BASE,
        json={"username": "eng3", "password": "secret", "real_name": "王工", "permissions": 1, "engineer_slot": 3},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["role"] == "engineer3"
    assert "password" not in resp.json()["data"]

    login = client.post("/api/auth/login", json={"username": "eng3", "password": "secret"})
    assert login.json()["user"]["role"] == "engineer3"


def test_create_duplicate_username_conflicts(client, users) -> None:
    resp = client.post(BASE, json={"username": "eng1", "password": "x"}, headers=login_headers(client, "admin"))
    assert resp.status_code == 409
    assert resp.json()["success"] is False


def test_create_user_validates_permission_range(client, users) -> None:
    resp = client.post(BASE, json={"username": "x", "password": "x", "permissions": 9}, headers=login_headers(client, "admin"))
    assert resp.status_code == 400


def test_update_user_password_and_status(client, users) -> None:
    headers = login_headers(client, "admin")
    resp = client.put(f"/api/users/{users['eng1']}", json={"password": "new-pass", "real_name": "张工"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["real_name"] == "张工"

    assert client.post("/api/auth/login", json={"username": "eng1", "password": "new-pass"}).status_code == 200

    client.put(f"/api/users/{users['eng1']}", json={"status": 0}, headers=headers)
    assert client.post("/api/auth/login", json={"username": "eng1", "password": "new-pass"}).status_code == 400


def test_delete_user(client, users) -> None:
    headers = login_headers(client, "admin")
    assert client.delete(f"/api/users/{users['eng2']}", headers=headers).status_code == 200
    assert client.get(f"/api/users/{users['eng2']}", headers=headers).status_code == 404
    assert client.delete(f"/api/users/{users['eng2']}", headers=headers).status_code == 404


def test_admin_cannot_delete_own_account(client, users) -> None:
    resp = client.delete(f"/api/users/{users['admin']}", headers=login_headers(client, "admin"))
    assert resp.status_code == 400

from __future__ import annotations

from conftest import login_headers

BASE = "/api/seven-s-evaluations/"


def test_total_score_counts_checked_items_and_ignores_input(client, users) -> None:
    headers = login_headers(client, "eng1")
    resp = client.post(
        BASE,
        json={
            "user": "eng1",
            "evaluation_date": "2025-06-18",
            "arrange": True,
            "clean": True,
            "save": True,
            "total_score": 7,
        },
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["action"] == "created"
    assert resp.json()["data"]["total_score"] == 3

    again = client.post(
        BASE,
        json={"user": "eng1", "evaluation_date": "2025-06-18", "arrange": True},
        headers=headers,
    )
    assert again.json()["action"] == "updated"
    assert again.json()["data"]["total_score"] == 1
    assert again.json()["data"]["clean"] is False


def test_referee_and_admin_can_evaluate_anyone(client, users) -> None:
    for evaluator in ("referee", "admin"):
        resp = client.post(
            BASE,
            json={"user": "eng2", "evaluation_date": "2025-06-18", "quality": True},
            headers=login_headers(client, evaluator),
        )
        assert resp.status_code == 200
    rows = client.get(BASE, params={"user": "eng2"}).json()["data"]
    assert len(rows) == 1


def test_engineer_can_only_evaluate_self(client, users) -> None:
    headers = login_headers(client, "eng1")
    assert client.post(BASE, json={"user": "eng1"}, headers=headers).status_code == 200
    assert client.post(BASE, json={"user": "eng2"}, headers=headers).status_code == 403


def test_list_query_info_uses_evaluation_date(client, users) -> None:
    client.post(BASE, json={"user": "eng1", "evaluation_date": "2025-06-18"}, headers=login_headers(client, "eng1"))
    body = client.get(BASE, params={"evaluation_date": "2025-06-18"}).json()
    assert body["query_info"] == {"evaluation_date": "2025-06-18", "user": None, "total_records": 1}


def test_update_by_id_is_owner_only(client, users) -> None:
    created = client.post(
        BASE,
        json={"user": "eng1", "evaluation_date": "2025-06-18", "arrange": True},
        headers=login_headers(client, "eng1"),
    ).json()["data"]
    url = f"/api/seven-s-evaluations/{created['id']}"

    for other in ("eng2", "referee", "admin"):
        resp = client.put(url, json={"arrange": True, "clean": True}, headers=login_headers(client, other))
        assert resp.status_code == 403
        assert resp.json() == {"success": False, "message": "无权限修改其他用户的评估记录"}

    assert client.get(url).json()["data"]["total_score"] == 1


def test_update_by_id_rejects_mismatched_current_user(client, users) -> None:
    headers = login_headers(client, "eng1")
    created = client.post(BASE, json={"user": "eng1", "evaluation_date": "2025-06-18"}, headers=headers).json()["data"]
    url = f"/api/seven-s-evaluations/{created['id']}"

    denied = client.put(url, json={"current_user": "eng2", "secure": True}, headers=headers)
    assert denied.status_code == 403

    ok = client.put(url, json={"current_user": "eng1", "secure": True, "quality": True}, headers=headers)
    assert ok.status_code == 200
    assert ok.json()["message"] == "7S管理评估记录更新成功"
    assert ok.json()["data"]["total_score"] == 2


def test_referee_can_delete_any_evaluation(client, users) -> None:
    created = client.post(BASE, json={"user": "eng1"}, headers=login_headers(client, "eng1")).json()["data"]
    url = f"/api/seven-s-evaluations/{created['id']}"
    assert client.delete(url, headers=login_headers(client, "eng2")).status_code == 403
    assert client.delete(url, headers=login_headers(client, "referee")).status_code == 200
    assert client.get(url).status_code == 404


def test_update_by_id_requires_current_user(client, users) -> None:
    headers = login_headers(client, "eng1")
    created = client.post(
        BASE,
        json={"user": "eng1", "evaluation_date": "2025-06-18", "clean": True},
        headers=headers,
    ).json()["data"]
    url = f"/api/seven-s-evaluations/{created['id']}"

    for body in ({"arrange": True}, {"current_user": "  ", "arrange": True}):
        resp = client.put(url, json=body, headers=headers)
        assert resp.status_code == 403
        assert resp.json() == {"success": False, "message": "无权限修改其他用户的评估记录"}

    row = client.get(url).json()["data"]
    assert row["arrange"] is False
    assert row["total_score"] == 1

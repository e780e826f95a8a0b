from __future__ import annotations

import json
from urllib.parse import quote

from conftest import login_headers

FAULT = "/api/fault-work-orders/"
SEVEN_S = "/api/seven-s-evaluations/"
RECOVERY = "/api/data-recovery-records/"


def _seed_records(client) -> None:
    eng1 = login_headers(client, "eng1")
    client.post(FAULT, json={"user": "eng1", "work_date": "2025-06-17", "discovered_malfunction": "无输出"}, headers=eng1)
    client.post(FAULT, json={"user": "eng1", "work_date": "2025-06-18", "repair_results": "已修复"}, headers=eng1)
    client.post(SEVEN_S, json={"user": "eng1", "evaluation_date": "2025-06-18", "arrange": True, "save": True}, headers=eng1)
    client.post(
        RECOVERY,
        json={"user": "recovery", "work_date": "2025-06-18", "repair_method": "开盘"},
        headers=login_headers(client, "recovery"),
    )


def _snapshot(client):
    return {url: client.get(url).json()["data"] for url in (FAULT, SEVEN_S, RECOVERY)}


def _upload(client, headers, content: bytes, filename: str = "backup.json"):
    return client.post(
        "/api/admin/import",
        files={"import_file": (filename, content, "application/json")},
        headers=headers,
    )


def test_admin_endpoints_require_admin(client, users) -> None:
    headers = login_headers(client, "eng1")
    assert client.get("/api/admin/export", headers=headers).status_code == 403
    assert client.post("/api/admin/clear", headers=headers).status_code == 403
    assert client.post("/api/admin/clear").status_code == 401


def test_export_contains_all_tables_and_info(client, users) -> None:
    _seed_records(client)
    resp = client.get("/api/admin/export", headers=login_headers(client, "admin"))
    assert resp.status_code == 200

    disposition = resp.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="workorder_system_data_')
    assert "filename*=UTF-8''" + quote("工单系统数据_") in disposition

    assert "无输出" in resp.text
    data = resp.json()
    assert data["export_info"]["version"] == "1.0"
    assert data["export_info"]["total_records"] == {
        "fault_work_orders": 2,
        "seven_s_evaluations": 1,
        "data_recovery_records": 1,
    }
    assert [r["id"] for r in data["fault_work_orders"]] == [1, 2]
    assert data["seven_s_evaluations"][0]["total_score"] == 2


def test_export_clear_import_round_trip(client, users) -> None:
    _seed_records(client)
    headers = login_headers(client, "admin")
    before = _snapshot(client)
    exported = client.get("/api/admin/export", headers=headers).content

    cleared = client.post("/api/admin/clear", headers=headers).json()
    assert cleared["results"] == {"fault_work_orders": 2, "seven_s_evaluations": 1, "data_recovery_records": 1}
    assert all(rows == [] for rows in _snapshot(client).values())

    resp = _upload(client, headers, exported)
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "数据导入成功"
    assert body["results"]["fault_work_orders"] == {"inserted": 2, "updated": 0}
    assert body["import_info"]["version"] == "1.0"

    assert _snapshot(client) == before


def test_clear_resets_auto_increment(client, users) -> None:
    _seed_records(client)
    headers = login_headers(client, "admin")
    client.post("/api/admin/clear", headers=headers)

    resp = client.post(FAULT, json={"user": "eng1", "work_date": "2025-07-01"}, headers=login_headers(client, "eng1"))
    assert resp.json()["data"]["id"] == 1


def test_import_upserts_on_user_and_date(client, users) -> None:
    _seed_records(client)
    headers = login_headers(client, "admin")
    payload = {
        "fault_work_orders": [
            {"id": 99, "user": "eng1", "work_date": "2025-06-18", "repair_results": "导入覆盖", "unknown": "x"},
            {"user": "eng2", "work_date": "2025-06-18", "repair_results": "新增"},
        ],
        "seven_s_evaluations": [
            {"user": "eng1", "evaluation_date": "2025-06-18", "arrange": 1, "clean": 1, "quality": 1, "total_score": 0},
        ],
    }
    resp = _upload(client, headers, json.dumps(payload, ensure_ascii=False).encode("utf-8"))
    assert resp.status_code == 200
    body = resp.json()
    assert body["results"] == {
        "fault_work_orders": {"inserted": 1, "updated": 1},
        "seven_s_evaluations": {"inserted": 0, "updated": 1},
    }
    assert body["import_info"] is None

    eng1_rows = client.get(FAULT, params={"user": "eng1", "work_date": "2025-06-18"}).json()["data"]
    assert len(eng1_rows) == 1
    assert eng1_rows[0]["repair_results"] == "导入覆盖"
    assert eng1_rows[0]["id"] != 99
    assert eng1_rows[0]["user_id"] == users["eng1"]

    evaluation = client.get(SEVEN_S, params={"user": "eng1"}).json()["data"][0]
    assert evaluation["total_score"] == 4
    assert evaluation["save"] is True


def test_import_failure_rolls_back_everything(client, users) -> None:
    headers = login_headers(client, "admin")
    payload = {
        "fault_work_orders": [{"user": "eng1", "work_date": "2025-06-18"}],
        "seven_s_evaluations": [{"user": "eng1", "evaluation_date": "not-a-date"}],
    }
    resp = _upload(client, headers, json.dumps(payload).encode("utf-8"))
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("导入失败: ")
    assert client.get(FAULT).json()["data"] == []


def test_import_rejects_bad_files(client, users) -> None:
    headers = login_headers(client, "admin")

    wrong_type = _upload(client, headers, b"{}", filename="backup.csv")
    assert wrong_type.status_code == 400
    assert wrong_type.json()["message"] == "导入失败: 只支持JSON格式的文件"

    broken = _upload(client, headers, b"{not json")
    assert broken.status_code == 400
    assert broken.json()["message"].startswith("导入失败: JSON格式错误")

    missing = client.post("/api/admin/import", headers=headers)
    assert missing.status_code == 400
    assert missing.json()["message"] == "导入失败: 请选择要导入的JSON文件"


def test_import_resolves_user_id_from_username(client, users) -> None:
    headers = login_headers(client, "admin")
    payload = {
        "fault_work_orders": [
            {"user": "eng1", "user_id": 999, "work_date": "2025-06-18", "repair_results": "新库"},
            {"user": "nobody", "user_id": users["eng2"], "work_date": "2025-06-18"},
        ],
    }
    resp = _upload(client, headers, json.dumps(payload, ensure_ascii=False).encode("utf-8"))
    assert resp.status_code == 200

    rows = {r["user"]: r for r in client.get(FAULT).json()["data"]}
    assert rows["eng1"]["user_id"] == users["eng1"]
    assert rows["nobody"]["user_id"] is None


def test_import_keeps_updated_at_from_file(client, users) -> None:
    _seed_records(client)
    headers = login_headers(client, "admin")
    payload = {
        "fault_work_orders": [
            {"user": "eng1", "work_date": "2025-06-18", "repair_results": "旧备份", "updated_at": "2020-01-01T00:00:00"},
        ],
    }
    resp = _upload(client, headers, json.dumps(payload, ensure_ascii=False).encode("utf-8"))
    assert resp.json()["results"]["fault_work_orders"] == {"inserted": 0, "updated": 1}

    row = client.get(FAULT, params={"user": "eng1", "work_date": "2025-06-18"}).json()["data"][0]
    assert row["repair_results"] == "旧备份"
    assert row["updated_at"] == "2020-01-01T00:00:00"

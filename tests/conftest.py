from __future__ import annotations

from typing import Dict

import pytest
from fastapi.testclient import TestClient

from repair_workorder_project.app.core import config, security
from repair_workorder_project.app.core.constants import PermissionLevel, UserStatus
from repair_workorder_project.app.models import User
from repair_workorder_project.app.service import database_service

DEFAULT_PASSWORD = "pass123"


def _clear_caches() -> None:
    if database_service.get_engine.cache_info().currsize:
        database_service.get_engine().dispose()
    database_service.get_engine.cache_clear()
    config.get_settings.cache_clear()
    security._secret.cache_clear()


@pytest.fixture()
def app_env(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    db_path = tmp_path / "workorder_test.db"
    (config_dir / "mysql.ini").write_text(f"[database]\nurl = sqlite:///{db_path}\n", encoding="utf-8")

    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("WORKORDER_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("WORKORDER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("WORKORDER_SESSION_SECRET", "S" * 32)
    monkeypatch.setenv("WORKORDER_ADMIN_PASSWORD", "admin-init-pass")

    _clear_caches()
    yield tmp_path
    _clear_caches()


@pytest.fixture()
def client(app_env):
    from repair_workorder_project.app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def users(app_env) -> Dict[str, int]:
    """admin / eng1 / eng2 / recovery / referee / disabled，密码均为 DEFAULT_PASSWORD"""
    accounts = [
        ("admin", PermissionLevel.ADMIN, None, UserStatus.ACTIVE),
        ("eng1", PermissionLevel.ENGINEER, 1, UserStatus.ACTIVE),
        ("eng2", PermissionLevel.ENGINEER, 2, UserStatus.ACTIVE),
        ("recovery", PermissionLevel.DATA_RECOVERY_ENGINEER, None, UserStatus.ACTIVE),
        ("referee", PermissionLevel.REFEREE, None, UserStatus.ACTIVE),
        ("disabled", PermissionLevel.ENGINEER, 3, UserStatus.DISABLED),
    ]
    ids: Dict[str, int] = {}
    with database_service.get_session() as session:
        for username, permissions, slot, status in accounts:
            user = User(
                username=username,
                password=security.hash_password(DEFAULT_PASSWORD),
                real_name=username.upper(),
                permissions=int(permissions),
                engineer_slot=slot,
                status=int(status),
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            ids[username] = user.id
    return ids


def login_headers(client: TestClient, username: str, password: str = DEFAULT_PASSWORD) -> Dict[str, str]:
    resp = client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}

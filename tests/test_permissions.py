from __future__ import annotations

import pytest

from repair_workorder_project.app.core.constants import ResourceType, Role, derive_role
from repair_workorder_project.app.core.exceptions import AuthenticationError
from repair_workorder_project.app.core.permissions import can_write
from repair_workorder_project.app.core.security import (
    create_session_token,
    hash_password,
    verify_password,
    verify_session_token,
)
from repair_workorder_project.app.models import SessionUser


def _actor(username: str, permissions: int, engineer_slot=None) -> SessionUser:
    return SessionUser(id=1, username=username, permissions=permissions, engineer_slot=engineer_slot)


@pytest.mark.parametrize(
    "permissions, slot, expected",
    [
        (1, None, Role.ENGINEER1),
        (1, 2, Role.ENGINEER2),
        (1, 3, Role.ENGINEER3),
        (2, None, Role.DATA_RECOVERY_ENGINEER),
        (3, 1, Role.REFEREE),
        (4, None, Role.ADMIN),
        (0, None, Role.ENGINEER1),
        (9, 2, Role.ENGINEER2),
    ],
)
def test_derive_role(permissions, slot, expected) -> None:
    assert derive_role(permissions, slot) == expected


def test_role_does_not_depend_on_username() -> None:
    assert _actor("worker3", 1).role == Role.ENGINEER1
    assert _actor("worker", 1, engineer_slot=3).role == Role.ENGINEER3


def test_fault_work_order_policy() -> None:
    assert can_write(ResourceType.FAULT_WORK_ORDER, _actor("a", 1), "a")
    assert not can_write(ResourceType.FAULT_WORK_ORDER, _actor("a", 1), "b")
    assert not can_write(ResourceType.FAULT_WORK_ORDER, _actor("a", 2), "a")
    assert not can_write(ResourceType.FAULT_WORK_ORDER, _actor("a", 3), "b")
    assert can_write(ResourceType.FAULT_WORK_ORDER, _actor("a", 4), "b")


def test_data_recovery_policy() -> None:
    assert can_write(ResourceType.DATA_RECOVERY_RECORD, _actor("a", 2), "a")
    assert not can_write(ResourceType.DATA_RECOVERY_RECORD, _actor("a", 2), "b")
    assert not can_write(ResourceType.DATA_RECOVERY_RECORD, _actor("a", 1), "a")
    assert can_write(ResourceType.DATA_RECOVERY_RECORD, _actor("a", 4), "b")


def test_seven_s_policy() -> None:
    for permissions in (1, 2):
        assert can_write(ResourceType.SEVEN_S_EVALUATION, _actor("a", permissions), "a")
        assert not can_write(ResourceType.SEVEN_S_EVALUATION, _actor("a", permissions), "b")
    for permissions in (3, 4):
        assert can_write(ResourceType.SEVEN_S_EVALUATION, _actor("a", permissions), "b")


def test_password_digest_matches_stored_md5() -> None:
    assert hash_password("admin123") == "0192023a7bbd73250516f069df18b500"
    assert verify_password("admin123", "0192023A7BBD73250516F069DF18B500")
    assert not verify_password("admin124", hash_password("admin123"))


def test_session_token_round_trip_and_tampering(app_env) -> None:
    token = create_session_token(7, "eng1")
    payload = verify_session_token(token)
    assert payload == {"uid": 7, "username": "eng1"}

    body, rest = token.split(".", 1)
    tampered = body[:-1] + ("A" if body[-1] != "A" else "B") + "." + rest
    with pytest.raises(AuthenticationError):
        verify_session_token(tampered)
    with pytest.raises(AuthenticationError):
        verify_session_token("")


def test_session_token_expiry_and_garbage(app_env) -> None:
    token = create_session_token(7, "eng1")
    with pytest.raises(AuthenticationError, match="会话已过期"):
        verify_session_token(token, max_age=-1)
    for garbage in ("abc\xe9.def", "no-separator", "a.b.c"):
        with pytest.raises(AuthenticationError, match="会话无效"):
            verify_session_token(garbage)

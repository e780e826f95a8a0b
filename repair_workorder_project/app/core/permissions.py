"""
写权限策略

所有写接口都根据服务端会话中的用户角色判断，不信任客户端提交的角色。
"""
from dataclasses import dataclass
from typing import FrozenSet

from repair_workorder_project.app.core.constants import ENGINEER_ROLES, ResourceType, Role
from repair_workorder_project.app.core.exceptions import PermissionDeniedError


@dataclass(frozen=True)
class WritePolicy:
    # 可以写自己记录的角色
    owner_roles: FrozenSet[Role]
    # 可以写任何人记录的角色
    any_roles: FrozenSet[Role]


WRITE_POLICIES = {
    ResourceType.FAULT_WORK_ORDER: WritePolicy(
        owner_roles=ENGINEER_ROLES,
        any_roles=frozenset({Role.ADMIN}),
    ),
    ResourceType.DATA_RECOVERY_RECORD: WritePolicy(
        owner_roles=frozenset({Role.DATA_RECOVERY_ENGINEER}),
        any_roles=frozenset({Role.ADMIN}),
    ),
    ResourceType.SEVEN_S_EVALUATION: WritePolicy(
        owner_roles=frozenset(Role),
        any_roles=frozenset({Role.REFEREE, Role.ADMIN}),
    ),
}


def can_write(resource: ResourceType, actor, owner: str) -> bool:
    """判断 actor 能否写入属于 owner 的记录"""
    policy = WRITE_POLICIES[resource]
    if actor.role in policy.any_roles:
        return True
    return actor.role in policy.owner_roles and actor.username == owner


def ensure_can_write(resource: ResourceType, actor, owner: str) -> None:
    if not can_write(resource, actor, owner):
        raise PermissionDeniedError("无权限修改该用户的记录")


def ensure_admin(actor) -> None:
    if actor.role != Role.ADMIN:
        raise PermissionDeniedError("需要管理员权限")

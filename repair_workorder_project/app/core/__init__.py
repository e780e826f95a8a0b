from repair_workorder_project.app.core.constants import (
    PermissionLevel,
    ResourceType,
    Role,
    TableName,
    UserStatus,
    WorkOrderOperation,
    derive_role,
)

__all__ = [
    "PermissionLevel",
    "ResourceType",
    "Role",
    "TableName",
    "UserStatus",
    "WorkOrderOperation",
    "derive_role",
]

"""
常量定义
"""
from enum import Enum, IntEnum
from typing import Optional


class PermissionLevel(IntEnum):
    """
    用户权限级别

    数据库 users.permissions 字段的取值。
    """

    ENGINEER = 1
    DATA_RECOVERY_ENGINEER = 2
    REFEREE = 3
    ADMIN = 4


class UserStatus(IntEnum):
    """用户状态"""

    DISABLED = 0
    ACTIVE = 1


class Role(str, Enum):
    """
    角色枚举

    由权限级别（以及工程师编号）推导，不做持久化。
    """

    ENGINEER1 = "engineer1"
    ENGINEER2 = "engineer2"
    ENGINEER3 = "engineer3"
    DATA_RECOVERY_ENGINEER = "data_recovery_engineer"
    REFEREE = "referee"
    ADMIN = "admin"

    def __str__(self) -> str:
        """返回枚举值的字符串表示"""
        return self.value

    @property
    def description(self) -> str:
        """返回角色的中文描述"""
        descriptions = {
            Role.ENGINEER1: "1号工程师",
            Role.ENGINEER2: "2号工程师",
            Role.ENGINEER3: "3号工程师",
            Role.DATA_RECOVERY_ENGINEER: "数据恢复工程师",
            Role.REFEREE: "裁判",
            Role.ADMIN: "管理员",
        }
        return descriptions.get(self, "未知")


ENGINEER_ROLES = frozenset({Role.ENGINEER1, Role.ENGINEER2, Role.ENGINEER3})

ENGINEER_SLOTS = {
    1: Role.ENGINEER1,
    2: Role.ENGINEER2,
    3: Role.ENGINEER3,
}


def derive_role(permissions: int, engineer_slot: Optional[int] = None) -> Role:
    """
    根据权限级别推导角色

    权限 1 的工程师按显式分配的工程师编号区分，未分配时视为 1 号工程师；
    未知的权限级别同样按 1 号工程师处理。
    """
    if permissions == PermissionLevel.DATA_RECOVERY_ENGINEER:
        return Role.DATA_RECOVERY_ENGINEER
    if permissions == PermissionLevel.REFEREE:
        return Role.REFEREE
    if permissions == PermissionLevel.ADMIN:
        return Role.ADMIN
    return ENGINEER_SLOTS.get(engineer_slot or 1, Role.ENGINEER1)


class ResourceType(str, Enum):
    """受写权限控制的日常记录资源"""

    FAULT_WORK_ORDER = "fault_work_order"
    SEVEN_S_EVALUATION = "seven_s_evaluation"
    DATA_RECOVERY_RECORD = "data_recovery_record"

    def __str__(self) -> str:
        return self.value


class WorkOrderOperation(str, Enum):
    """工单日志操作类型"""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    def __str__(self) -> str:
        return self.value


class TableName:
    """数据表名"""

    USERS = "users"
    FAULT_WORK_ORDERS = "fault_work_orders"
    SEVEN_S_EVALUATIONS = "seven_s_evaluations"
    DATA_RECOVERY_RECORDS = "data_recovery_records"
    WORK_ORDERS = "work_orders"
    WORK_ORDER_DETAILS = "work_order_details"
    WORK_ORDER_LOGS = "work_order_logs"


# 管理员导出/导入/清空操作涉及的表（顺序即导出顺序）
TRACKED_TABLES = (
    TableName.FAULT_WORK_ORDERS,
    TableName.SEVEN_S_EVALUATIONS,
    TableName.DATA_RECOVERY_RECORDS,
)

# 数据库初始化后必须存在的表
REQUIRED_TABLES = (
    TableName.USERS,
    TableName.FAULT_WORK_ORDERS,
    TableName.SEVEN_S_EVALUATIONS,
    TableName.DATA_RECOVERY_RECORDS,
    TableName.WORK_ORDERS,
    TableName.WORK_ORDER_DETAILS,
    TableName.WORK_ORDER_LOGS,
)

EXPORT_FORMAT_VERSION = "1.0"

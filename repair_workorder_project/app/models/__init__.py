"""
数据模型

包含 Pydantic 模型（API 请求/响应）和 SQLModel 模型（数据库表）
"""

from repair_workorder_project.app.models.daily_record import (
    DataRecoveryRecordSave,
    FaultWorkOrderSave,
    SevenSEvaluationSave,
)
from repair_workorder_project.app.models.work_order import WorkOrderCreate, WorkOrderDetailIn, WorkOrderUpdate
from repair_workorder_project.app.models.user import LoginRequest, SessionUser, UserCreate, UserUpdate, user_to_public
from repair_workorder_project.app.models.system import ConfigUpdate
from repair_workorder_project.app.models.database import (
    DataRecoveryRecord,
    FaultWorkOrder,
    SevenSEvaluation,
    User,
    WorkOrder,
    WorkOrderDetail,
    WorkOrderLog,
)

__all__ = [
    # Pydantic 模型
    "FaultWorkOrderSave",
    "SevenSEvaluationSave",
    "DataRecoveryRecordSave",
    "WorkOrderCreate",
    "WorkOrderDetailIn",
    "WorkOrderUpdate",
    "LoginRequest",
    "SessionUser",
    "UserCreate",
    "UserUpdate",
    "user_to_public",
    "ConfigUpdate",
    # SQLModel 数据库模型
    "User",
    "FaultWorkOrder",
    "SevenSEvaluation",
    "DataRecoveryRecord",
    "WorkOrder",
    "WorkOrderDetail",
    "WorkOrderLog",
]

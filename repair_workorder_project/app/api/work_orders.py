"""
工单接口（表头 + 明细 + 操作日志）
"""
import logging

from fastapi import APIRouter, Depends

from repair_workorder_project.app.api.deps import get_current_user
from repair_workorder_project.app.core.responses import success_response
from repair_workorder_project.app.models import SessionUser, WorkOrderCreate, WorkOrderUpdate
from repair_workorder_project.app.service import work_order_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/work-orders", tags=["工单"])


@router.get("/")
def list_work_orders():
    """工单列表（含明细数量）"""
    work_orders = work_order_storage.list_work_orders()
    return success_response(data=work_orders, count=len(work_orders))


@router.get("/{work_order_id}")
def get_work_order(work_order_id: int):
    """工单详情（含明细）"""
    return success_response(data=work_order_storage.get_work_order(work_order_id))


@router.post("/")
def create_work_order(payload: WorkOrderCreate, current_user: SessionUser = Depends(get_current_user)):
    logger.info(f"收到创建工单请求: work_number={payload.work_number}, operator={current_user.username}")
    work_order_id = work_order_storage.create_work_order(payload, current_user)
    return success_response("工单创建成功", data={"id": work_order_id})


@router.put("/{work_order_id}")
def update_work_order(
    work_order_id: int,
    payload: WorkOrderUpdate,
    current_user: SessionUser = Depends(get_current_user),
):
    """更新工单，传入 details 时整体替换明细"""
    work_order_storage.update_work_order(work_order_id, payload, current_user)
    return success_response("工单更新成功")


@router.delete("/{work_order_id}")
def delete_work_order(work_order_id: int, current_user: SessionUser = Depends(get_current_user)):
    work_order_storage.delete_work_order(work_order_id, current_user)
    return success_response("工单删除成功")


@router.get("/{work_order_id}/logs")
def list_work_order_logs(work_order_id: int):
    """工单操作日志（工单删除后仍可查询）"""
    logs = work_order_storage.list_logs(work_order_id)
    return success_response(data=logs, count=len(logs))

"""
工单服务

工单表头、明细、操作日志。创建/更新/删除都会在同一事务中追加一条日志。
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlmodel import Session, delete, select

from repair_workorder_project.app.core.constants import WorkOrderOperation
from repair_workorder_project.app.core.exceptions import BadRequestError, NotFoundError
from repair_workorder_project.app.models import (
    SessionUser,
    WorkOrder,
    WorkOrderCreate,
    WorkOrderDetail,
    WorkOrderDetailIn,
    WorkOrderLog,
    WorkOrderUpdate,
)
from repair_workorder_project.app.service.database_service import get_session

logger = logging.getLogger(__name__)


class WorkOrderStorage:
    """工单存储服务"""

    def list_work_orders(self) -> List[dict]:
        """工单列表（含明细数量），按创建时间倒序"""
        with get_session() as session:
            statement = (
                select(WorkOrder, func.count(WorkOrderDetail.id).label("detail_count"))
                .outerjoin(WorkOrderDetail, WorkOrderDetail.work_order_id == WorkOrder.id)
                .group_by(WorkOrder.id)
                .order_by(WorkOrder.created_at.desc(), WorkOrder.id.desc())
            )
            results = []
            for work_order, detail_count in session.exec(statement).all():
                item = work_order.model_dump(mode="json")
                item["detail_count"] = detail_count
                results.append(item)
            return results

    def get_work_order(self, work_order_id: int) -> dict:
        """工单详情，明细按工程师、故障类型排序"""
        with get_session() as session:
            work_order = self._get_or_404(session, work_order_id)
            details = session.exec(
                select(WorkOrderDetail)
                .where(WorkOrderDetail.work_order_id == work_order_id)
                .order_by(WorkOrderDetail.engineer, WorkOrderDetail.fault_type)
            ).all()

            result = work_order.model_dump(mode="json")
            result["details"] = [d.model_dump(mode="json") for d in details]
            return result

    def create_work_order(self, payload: WorkOrderCreate, actor: SessionUser) -> int:
        work_number = (payload.work_number or "").strip()
        created_by = (payload.created_by or "").strip()
        if not work_number or not created_by:
            raise BadRequestError("工号和创建人不能为空")

        with get_session() as session:
            work_order = WorkOrder(
                work_number=work_number,
                created_by=created_by,
                status=payload.status or "draft",
            )
            session.add(work_order)
            # 先 flush 拿到 ID，明细和日志都要引用
            session.flush()

            self._add_details(session, work_order.id, payload.details or [])
            self._add_log(session, work_order.id, actor.username, WorkOrderOperation.CREATE, f"创建工单: {work_number}")
            session.commit()

            logger.info(f"工单创建成功: id={work_order.id}, work_number={work_number}, operator={actor.username}")
            return work_order.id

    def update_work_order(self, work_order_id: int, payload: WorkOrderUpdate, actor: SessionUser):
        """
        更新工单

        只修改传入的 work_number / status；传入 details 时整体替换原有明细。
        """
        with get_session() as session:
            work_order = self._get_or_404(session, work_order_id)

            if payload.work_number is not None:
                work_order.work_number = payload.work_number
            if payload.status is not None:
                work_order.status = payload.status
            work_order.updated_at = datetime.now()
            session.add(work_order)

            if payload.details is not None:
                session.exec(delete(WorkOrderDetail).where(WorkOrderDetail.work_order_id == work_order_id))
                self._add_details(session, work_order_id, payload.details)

            self._add_log(
                session,
                work_order_id,
                actor.username,
                WorkOrderOperation.UPDATE,
                f"更新工单: {work_order.work_number}",
            )
            session.commit()
            logger.info(f"工单更新成功: id={work_order_id}, operator={actor.username}")

    def delete_work_order(self, work_order_id: int, actor: SessionUser):
        """删除工单及其明细，日志保留"""
        with get_session() as session:
            work_order = self._get_or_404(session, work_order_id)

            self._add_log(
                session,
                work_order_id,
                actor.username,
                WorkOrderOperation.DELETE,
                f"删除工单: {work_order.work_number}",
            )
            session.exec(delete(WorkOrderDetail).where(WorkOrderDetail.work_order_id == work_order_id))
            session.delete(work_order)
            session.commit()
            logger.info(f"工单删除成功: id={work_order_id}, operator={actor.username}")

    def list_logs(self, work_order_id: int) -> List[dict]:
        """工单操作日志，按时间顺序"""
        with get_session() as session:
            logs = session.exec(
                select(WorkOrderLog)
                .where(WorkOrderLog.work_order_id == work_order_id)
                .order_by(WorkOrderLog.created_at, WorkOrderLog.id)
            ).all()
            return [log.model_dump(mode="json") for log in logs]

    @staticmethod
    def _get_or_404(session: Session, work_order_id: int) -> WorkOrder:
        work_order = session.get(WorkOrder, work_order_id)
        if not work_order:
            raise NotFoundError("工单不存在")
        return work_order

    @staticmethod
    def _add_details(session: Session, work_order_id: int, details: List[WorkOrderDetailIn]):
        for detail in details:
            session.add(WorkOrderDetail(work_order_id=work_order_id, **detail.model_dump()))

    @staticmethod
    def _add_log(
        session: Session,
        work_order_id: int,
        operator: str,
        operation: WorkOrderOperation,
        detail: Optional[str] = None,
    ):
        session.add(
            WorkOrderLog(
                work_order_id=work_order_id,
                operator=operator,
                operation_type=operation.value,
                operation_detail=detail or "",
            )
        )


work_order_storage = WorkOrderStorage()

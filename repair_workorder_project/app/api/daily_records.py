"""
日常记录路由工厂

故障维修工单、7S 评估、数据恢复记录的接口结构相同，只有模型、日期字段和提示文字不同。
"""
import logging
from datetime import date
from typing import Optional, Type

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from repair_workorder_project.app.api.deps import get_current_user
from repair_workorder_project.app.core.exceptions import BadRequestError
from repair_workorder_project.app.core.responses import success_response
from repair_workorder_project.app.models import SessionUser
from repair_workorder_project.app.service.daily_record_service import DailyRecordStorage

logger = logging.getLogger(__name__)


def create_daily_record_router(
    storage: DailyRecordStorage,
    prefix: str,
    tag: str,
    payload_model: Type[BaseModel],
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])
    date_field = storage.date_field
    label = storage.label

    @router.get("/")
    def list_records(
        user: Optional[str] = Query(None, description="用户名"),
        record_date: Optional[date] = Query(None, alias=date_field, description="日期（精确匹配）"),
        start_date: Optional[date] = Query(None, description="开始日期（含）"),
        end_date: Optional[date] = Query(None, description="结束日期（含）"),
    ):
        """查询记录列表，按日期、创建时间倒序"""
        if start_date and end_date and start_date > end_date:
            logger.warning(f"无效日期范围: start_date={start_date} > end_date={end_date}")
            raise BadRequestError("开始日期不能晚于结束日期")

        records = storage.list_records(user=user, record_date=record_date, start_date=start_date, end_date=end_date)
        logger.info(f"查询{label}: user={user}, {date_field}={record_date}, 共 {len(records)} 条")
        return success_response(
            data=records,
            query_info={
                date_field: record_date.isoformat() if record_date else None,
                "user": user,
                "total_records": len(records),
            },
        )

    @router.get("/{record_id}")
    def get_record(record_id: int):
        return success_response(data=storage.get_record(record_id))

    @router.post("/")
    def save_record(payload: payload_model, current_user: SessionUser = Depends(get_current_user)):
        """保存记录，同一用户同一天已存在时更新"""
        record, action = storage.save_record(payload, current_user)
        message = f"{label}创建成功" if action == "created" else f"{label}更新成功"
        return success_response(message, data=record, action=action)

    @router.put("/{record_id}")
    def update_record(
        record_id: int,
        payload: payload_model,
        current_user: SessionUser = Depends(get_current_user),
    ):
        """按 ID 更新记录内容，用户和日期不变"""
        record = storage.update_record(record_id, payload, current_user)
        return success_response(f"{label}更新成功", data=record)

    @router.delete("/{record_id}")
    def delete_record(record_id: int, current_user: SessionUser = Depends(get_current_user)):
        storage.delete_record(record_id, current_user)
        return success_response(f"{label}删除成功")

    return router

"""
日常记录服务

故障维修工单、7S 评估、数据恢复记录共用同一套按自然键 (user, 日期) 的
“存在则更新，否则新增”逻辑；管理员导入数据也走这里的 upsert。
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from repair_workorder_project.app.core.constants import ResourceType, TableName
from repair_workorder_project.app.core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from repair_workorder_project.app.core.permissions import ensure_can_write
from repair_workorder_project.app.models import (
    DataRecoveryRecord,
    FaultWorkOrder,
    SessionUser,
    SevenSEvaluation,
    User,
)
from repair_workorder_project.app.service.database_service import get_session

logger = logging.getLogger(__name__)


class DailyRecordStorage:
    """
    日常记录存储服务

    Args:
        model: SQLModel 表模型，需定义 DATE_FIELD 和 CONTENT_FIELDS
        resource: 写权限策略对应的资源类型
        label: 记录的中文名称，用于提示信息
    """

    def __init__(self, model: Type[SQLModel], resource: ResourceType, label: str):
        self.model = model
        self.resource = resource
        self.label = label
        self.date_field: str = model.DATE_FIELD
        self.content_fields: Tuple[str, ...] = model.CONTENT_FIELDS
        self.derived_fields: Tuple[str, ...] = getattr(model, "DERIVED_FIELDS", ())

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    # ==================== 查询 ====================

    def list_records(
        self,
        user: Optional[str] = None,
        record_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[dict]:
        """按用户、日期筛选记录，按日期、创建时间倒序"""
        date_column = getattr(self.model, self.date_field)
        with get_session() as session:
            statement = select(self.model)
            if user:
                statement = statement.where(self.model.user == user)
            if record_date:
                statement = statement.where(date_column == record_date)
            if start_date:
                statement = statement.where(date_column >= start_date)
            if end_date:
                statement = statement.where(date_column <= end_date)
            statement = statement.order_by(
                date_column.desc(),
                self.model.created_at.desc(),
                self.model.id.desc(),
            )
            records = session.exec(statement).all()
            return [self._to_dict(r) for r in records]

    def list_all(self, session: Session) -> List[dict]:
        """按 ID 顺序返回全部记录（导出用）"""
        records = session.exec(select(self.model).order_by(self.model.id)).all()
        return [self._to_dict(r) for r in records]

    def get_record(self, record_id: int) -> dict:
        with get_session() as session:
            record = session.get(self.model, record_id)
            if not record:
                raise NotFoundError(f"{self.label}不存在")
            return self._to_dict(record)

    # ==================== 写入 ====================

    def save_record(self, payload: BaseModel, actor: SessionUser) -> Tuple[dict, str]:
        """
        保存记录（同一用户同一天存在则更新）

        Returns:
            (记录, "created" 或 "updated")
        """
        data = payload.model_dump()
        owner = (data.get("user") or "").strip()
        if not owner:
            raise BadRequestError("用户字段不能为空")
        record_date = data.get(self.date_field) or date.today()

        ensure_can_write(self.resource, actor, owner)

        values = self._content_values(data)
        with get_session() as session:
            values["user_id"] = self._resolve_user_id(session, owner)
            try:
                record, action = self._apply(session, owner, record_date, values)
                session.commit()
            except IntegrityError:
                # 并发请求先插入了同一自然键的记录，回滚后走更新分支
                session.rollback()
                logger.warning(f"{self.label}并发写入冲突，重试更新: user={owner}, date={record_date}")
                record, action = self._apply(session, owner, record_date, values)
                session.commit()
            session.refresh(record)
            logger.info(f"{self.label}{'新增' if action == 'created' else '更新'}: user={owner}, date={record_date}")
            return self._to_dict(record), action

    def update_record(self, record_id: int, payload: BaseModel, actor: SessionUser) -> dict:
        """按 ID 更新记录内容（用户和日期不变）"""
        data = payload.model_dump()
        with get_session() as session:
            record = session.get(self.model, record_id)
            if not record:
                raise NotFoundError(f"{self.label}不存在")

            self._check_update_permission(record, data, actor)

            for name, value in self._content_values(data).items():
                setattr(record, name, value)
            record.updated_at = datetime.now()
            self._before_write(record)
            session.add(record)
            session.commit()
            session.refresh(record)
            logger.info(f"{self.label}更新: id={record_id}, operator={actor.username}")
            return self._to_dict(record)

    def delete_record(self, record_id: int, actor: SessionUser):
        with get_session() as session:
            record = session.get(self.model, record_id)
            if not record:
                raise NotFoundError(f"{self.label}不存在")

            ensure_can_write(self.resource, actor, record.user)

            session.delete(record)
            session.commit()
            logger.info(f"{self.label}删除: id={record_id}, operator={actor.username}")

    def import_record(self, session: Session, raw: Dict[str, Any]) -> str:
        """
        导入一条记录（不提交事务）

        去掉 id 和派生字段，忽略未知字段，按 (user, 日期) upsert；
        更新已有记录时只覆盖文件中出现的字段。

        Returns:
            "created" 或 "updated"
        """
        excluded = {"id", "user_id", *self.derived_fields}
        record = {k: v for k, v in raw.items() if k in self.model.model_fields and k not in excluded}
        if not record.get(self.date_field):
            record[self.date_field] = date.today()

        validated = self.model.model_validate(record)
        owner = (validated.user or "").strip()
        if not owner:
            raise BadRequestError(f"{self.table_name} 中存在用户字段为空的记录")

        values = {name: getattr(validated, name) for name in record if name not in ("user", self.date_field)}
        # 文件里的 user_id 来自导出库，按用户名在当前库重新查找
        values["user_id"] = self._resolve_user_id(session, owner)
        _, action = self._apply(session, owner, getattr(validated, self.date_field), values)
        session.flush()
        return action

    # ==================== 内部方法 ====================

    def _apply(self, session: Session, owner: str, record_date: date, values: Dict[str, Any]):
        date_column = getattr(self.model, self.date_field)
        statement = select(self.model).where(self.model.user == owner).where(date_column == record_date)
        existing = session.exec(statement).first()

        if existing:
            for name, value in values.items():
                setattr(existing, name, value)
            if "updated_at" not in values:
                existing.updated_at = datetime.now()
            self._before_write(existing)
            session.add(existing)
            return existing, "updated"

        record = self.model(user=owner, **{self.date_field: record_date}, **values)
        self._before_write(record)
        session.add(record)
        return record, "created"

    def _content_values(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = {}
        for name in self.content_fields:
            value = data.get(name)
            values[name] = self.model.model_fields[name].default if value is None else value
        return values

    def _check_update_permission(self, record, data: Dict[str, Any], actor: SessionUser):
        ensure_can_write(self.resource, actor, record.user)

    def _before_write(self, record):
        pass

    @staticmethod
    def _resolve_user_id(session: Session, username: str) -> Optional[int]:
        return session.exec(select(User.id).where(User.username == username)).first()

    @staticmethod
    def _to_dict(record: SQLModel) -> dict:
        return record.model_dump(mode="json")


class SevenSEvaluationStorage(DailyRecordStorage):
    """7S 评估：总分为派生字段；按 ID 更新只允许记录所属用户本人操作"""

    def _check_update_permission(self, record, data: Dict[str, Any], actor: SessionUser):
        claimed = (data.get("current_user") or "").strip()
        # 未提交 current_user 视为不匹配
        if claimed != record.user or record.user != actor.username:
            logger.warning(
                f"拒绝修改他人 7S 评估: id={record.id}, owner={record.user}, "
                f"operator={actor.username}, current_user={claimed}"
            )
            raise PermissionDeniedError("无权限修改其他用户的评估记录")

    def _before_write(self, record):
        record.refresh_total_score()


fault_work_order_storage = DailyRecordStorage(FaultWorkOrder, ResourceType.FAULT_WORK_ORDER, "故障维修工单")
seven_s_storage = SevenSEvaluationStorage(SevenSEvaluation, ResourceType.SEVEN_S_EVALUATION, "7S管理评估记录")
data_recovery_storage = DailyRecordStorage(DataRecoveryRecord, ResourceType.DATA_RECOVERY_RECORD, "数据恢复记录")

STORAGES_BY_TABLE = {
    TableName.FAULT_WORK_ORDERS: fault_work_order_storage,
    TableName.SEVEN_S_EVALUATIONS: seven_s_storage,
    TableName.DATA_RECOVERY_RECORDS: data_recovery_storage,
}

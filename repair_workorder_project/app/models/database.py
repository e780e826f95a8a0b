"""
SQLModel 数据库模型定义

日常记录表（故障维修工单、7S 评估、数据恢复记录）以 (user, 日期) 为自然键，
同一用户同一天只有一条记录。
"""
from datetime import date, datetime
from typing import ClassVar, Optional, Tuple

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from repair_workorder_project.app.core.constants import TableName, UserStatus


class User(SQLModel, table=True):
    """用户表"""
    __tablename__ = TableName.USERS
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(max_length=50, index=True, unique=True, description="登录账号")
    password: str = Field(max_length=64, description="密码 MD5 摘要")
    real_name: str = Field(default="", max_length=50, description="姓名")
    permissions: int = Field(default=1, description="权限级别 1-4")
    engineer_slot: Optional[int] = Field(default=None, description="工程师编号 1-3，仅权限 1 使用")
    status: int = Field(default=int(UserStatus.ACTIVE), description="1 启用 / 0 禁用")
    last_login: Optional[datetime] = Field(default=None, description="最后登录时间")
    created_at: datetime = Field(default_factory=datetime.now, description="创建时间")
    updated_at: datetime = Field(default_factory=datetime.now, description="更新时间")


class FaultWorkOrder(SQLModel, table=True):
    """飞控板故障维修工单（每个工程师每天一条）"""
    __tablename__ = TableName.FAULT_WORK_ORDERS
    __table_args__ = (
        UniqueConstraint("user", "work_date", name="uq_fault_work_orders_user_date"),
        {"sqlite_autoincrement": True},
    )

    DATE_FIELD: ClassVar[str] = "work_date"
    CONTENT_FIELDS: ClassVar[Tuple[str, ...]] = (
        "discovered_malfunction",
        "discovered_malfunction2",
        "discovered_malfunction3",
        "test_results",
        "test_results2",
        "test_results3",
        "locate_faulty_components",
        "locate_faulty_components2",
        "locate_faulty_components3",
        "repair_results",
        "repair_results2",
        "repair_results3",
        "optimization_effect",
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, description="用户ID")
    user: str = Field(max_length=50, index=True, description="用户名")
    work_date: date = Field(default_factory=date.today, index=True, description="工作日期")
    discovered_malfunction: str = Field(default="", description="发现故障")
    discovered_malfunction2: str = Field(default="", description="发现故障2")
    discovered_malfunction3: str = Field(default="", description="发现故障3")
    test_results: str = Field(default="", description="测试结果")
    test_results2: str = Field(default="", description="测试结果2")
    test_results3: str = Field(default="", description="测试结果3")
    locate_faulty_components: str = Field(default="", description="定位故障元件")
    locate_faulty_components2: str = Field(default="", description="定位故障元件2")
    locate_faulty_components3: str = Field(default="", description="定位故障元件3")
    repair_results: str = Field(default="", description="维修结果")
    repair_results2: str = Field(default="", description="维修结果2")
    repair_results3: str = Field(default="", description="维修结果3")
    optimization_effect: str = Field(default="", description="优化效果")
    created_at: datetime = Field(default_factory=datetime.now, description="创建时间")
    updated_at: datetime = Field(default_factory=datetime.now, description="更新时间")


class SevenSEvaluation(SQLModel, table=True):
    """7S 管理评估（每人每天一条）"""
    __tablename__ = TableName.SEVEN_S_EVALUATIONS
    __table_args__ = (
        UniqueConstraint("user", "evaluation_date", name="uq_seven_s_evaluations_user_date"),
        {"sqlite_autoincrement": True},
    )

    DATE_FIELD: ClassVar[str] = "evaluation_date"
    CONTENT_FIELDS: ClassVar[Tuple[str, ...]] = (
        "arrange",
        "reorganize",
        "clean",
        "cleanliness",
        "quality",
        "secure",
        "save",
    )
    DERIVED_FIELDS: ClassVar[Tuple[str, ...]] = ("total_score",)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, description="用户ID")
    user: str = Field(max_length=50, index=True, description="用户名")
    evaluation_date: date = Field(default_factory=date.today, index=True, description="评估日期")
    arrange: bool = Field(default=False, description="整理")
    reorganize: bool = Field(default=False, description="整顿")
    clean: bool = Field(default=False, description="清扫")
    cleanliness: bool = Field(default=False, description="清洁")
    quality: bool = Field(default=False, description="素养")
    secure: bool = Field(default=False, description="安全")
    save: bool = Field(default=False, description="节约")
    total_score: int = Field(default=0, description="总分（勾选项数量）")
    created_at: datetime = Field(default_factory=datetime.now, description="创建时间")
    updated_at: datetime = Field(default_factory=datetime.now, description="更新时间")

    def refresh_total_score(self):
        self.total_score = sum(1 for name in self.CONTENT_FIELDS if getattr(self, name))


class DataRecoveryRecord(SQLModel, table=True):
    """数据恢复工单（每个数据恢复工程师每天一条）"""
    __tablename__ = TableName.DATA_RECOVERY_RECORDS
    __table_args__ = (
        UniqueConstraint("user", "work_date", name="uq_data_recovery_records_user_date"),
        {"sqlite_autoincrement": True},
    )

    DATE_FIELD: ClassVar[str] = "work_date"
    CONTENT_FIELDS: ClassVar[Tuple[str, ...]] = (
        "discovered_malfunction",
        "reason_for_malfunction",
        "repair_method",
        "repair_results",
        "customer_satisfaction",
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, description="用户ID")
    user: str = Field(max_length=50, index=True, description="用户名")
    work_date: date = Field(default_factory=date.today, index=True, description="工作日期")
    discovered_malfunction: str = Field(default="", description="发现故障")
    reason_for_malfunction: str = Field(default="", description="故障原因")
    repair_method: str = Field(default="", description="修复方法")
    repair_results: str = Field(default="", description="修复结果")
    customer_satisfaction: str = Field(default="", description="客户满意度")
    created_at: datetime = Field(default_factory=datetime.now, description="创建时间")
    updated_at: datetime = Field(default_factory=datetime.now, description="更新时间")


class WorkOrder(SQLModel, table=True):
    """工单表头"""
    __tablename__ = TableName.WORK_ORDERS
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    work_number: str = Field(max_length=50, index=True, description="工单号")
    created_by: str = Field(max_length=50, description="创建人")
    status: str = Field(default="draft", max_length=20, description="状态")
    created_at: datetime = Field(default_factory=datetime.now, description="创建时间")
    updated_at: datetime = Field(default_factory=datetime.now, description="更新时间")


class WorkOrderDetail(SQLModel, table=True):
    """工单明细（属于一个工单表头）"""
    __tablename__ = TableName.WORK_ORDER_DETAILS
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    work_order_id: int = Field(foreign_key="work_orders.id", index=True, description="工单ID")
    engineer: str = Field(max_length=50, description="工程师")
    fault_type: str = Field(max_length=50, description="故障类型")
    fault_description: Optional[str] = Field(default=None, description="故障描述")
    test_result: Optional[str] = Field(default=None, description="测试结果")
    locate_component: Optional[str] = Field(default=None, description="定位元件")
    repair_result: Optional[str] = Field(default=None, description="维修结果")
    tuning_effect: Optional[str] = Field(default=None, description="调优效果")
    seven_s_evaluation: Optional[dict] = Field(default=None, sa_column=Column(JSON), description="7S 评估")
    created_at: datetime = Field(default_factory=datetime.now, description="创建时间")


class WorkOrderLog(SQLModel, table=True):
    """工单操作日志（只追加，工单删除后保留）"""
    __tablename__ = TableName.WORK_ORDER_LOGS
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    work_order_id: int = Field(index=True, description="工单ID")
    operator: str = Field(max_length=50, description="操作人")
    operation_type: str = Field(max_length=20, description="操作类型 create/update/delete")
    operation_detail: str = Field(default="", description="操作详情")
    created_at: datetime = Field(default_factory=datetime.now, description="操作时间")

"""
数据库初始化服务

建表、创建默认管理员、检查必需的表，并在配置文件中标记已初始化。
"""
import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, select

from repair_workorder_project.app.core.config import get_config_manager, get_settings
from repair_workorder_project.app.core.constants import REQUIRED_TABLES, PermissionLevel
from repair_workorder_project.app.core.security import hash_password
from repair_workorder_project.app.models import User
from repair_workorder_project.app.service.database_service import get_engine, get_session, list_existing_tables

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"


class DatabaseInitializer:
    """数据库初始化器，执行过程记录在 log 中返回给前端"""

    def __init__(self):
        self.log: List[str] = []

    def _step(self, message: str):
        self.log.append(message)
        logger.info(message)

    def initialize(self) -> Dict[str, Any]:
        self._step("开始数据库初始化检查")
        try:
            engine = get_engine()
            SQLModel.metadata.create_all(engine)
            self._step(f"数据表创建/检查完成: {', '.join(REQUIRED_TABLES)}")

            self._ensure_admin()

            missing = self._missing_tables()
            if missing:
                self._step(f"缺少表: {', '.join(missing)}")
                return {"success": False, "message": f"数据库结构不完整，缺少表: {', '.join(missing)}", "log": self.log}
            self._step("所有必需的表都存在")
        except SQLAlchemyError as e:
            self.log.append(f"初始化失败: {e.__class__.__name__}")
            logger.error(f"数据库初始化失败: {e}", exc_info=True)
            return {"success": False, "message": "数据库初始化失败", "log": self.log}

        if get_config_manager().set_database_initialized(True):
            self._step("配置文件已更新，数据库标记为已初始化")
        else:
            self._step("更新配置文件失败")

        self._step("数据库初始化成功完成")
        return {"success": True, "message": "数据库初始化成功", "log": self.log}

    def _ensure_admin(self):
        """用户表为空时创建默认管理员"""
        with get_session() as session:
            if session.exec(select(User.id)).first() is not None:
                self._step("用户表已有数据，跳过创建默认管理员")
                return

            session.add(
                User(
                    username=DEFAULT_ADMIN_USERNAME,
                    password=hash_password(get_settings().admin_password),
                    real_name="系统管理员",
                    permissions=int(PermissionLevel.ADMIN),
                )
            )
            session.commit()
            self._step(f"已创建默认管理员账户: {DEFAULT_ADMIN_USERNAME}")

    @staticmethod
    def _missing_tables() -> List[str]:
        existing = set(list_existing_tables())
        return [table for table in REQUIRED_TABLES if table not in existing]


def initialize_database() -> Dict[str, Any]:
    return DatabaseInitializer().initialize()

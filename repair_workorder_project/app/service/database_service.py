"""
数据库服务层

按配置创建 SQLModel 引擎（MySQL 或 SQLite），每个请求使用独立的会话。
"""
import logging
from functools import lru_cache
from typing import List

from sqlalchemy import event, inspect, text
from sqlalchemy.engine import Connection, Engine, make_url
from sqlmodel import Session, SQLModel, create_engine

# 导入表模型，确保 metadata 中包含所有表
from repair_workorder_project.app.models import database as _tables  # noqa: F401
from repair_workorder_project.app.core.config import get_settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache()
def get_engine() -> Engine:
    """获取数据库引擎（单例）"""
    database_url = get_settings().database_url
    url = make_url(database_url)
    logger.info(f"初始化数据库引擎: {url.render_as_string(hide_password=True)}")

    if url.get_backend_name() == "sqlite":
        engine = create_engine(
            database_url,
            echo=False,  # 设为 True 可查看 SQL 语句
            connect_args={"check_same_thread": False}  # SQLite 需要
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_engine(
            database_url,
            echo=False,
            pool_pre_ping=True,  # 连接前先 ping，避免 MySQL 连接超时
            pool_recycle=3600,
        )

    # 创建表
    SQLModel.metadata.create_all(engine)
    logger.info("数据库表创建/检查完成")

    return engine


def get_session() -> Session:
    """获取数据库会话"""
    return Session(get_engine())


def list_existing_tables() -> List[str]:
    """当前数据库中实际存在的表"""
    return inspect(get_engine()).get_table_names()


def reset_auto_increment(connection: Connection, table_name: str):
    """
    重置表的自增计数器，使下一条记录的 ID 从 1 开始

    MySQL 的 ALTER TABLE 会隐式提交事务，调用方应在删除数据的事务提交后再调用。
    """
    dialect = connection.dialect.name
    if dialect == "mysql":
        connection.execute(text(f"ALTER TABLE `{table_name}` AUTO_INCREMENT = 1"))
    elif dialect == "sqlite":
        connection.execute(text("DELETE FROM sqlite_sequence WHERE name = :name"), {"name": table_name})
    else:
        logger.warning(f"不支持重置 {dialect} 数据库的自增ID: {table_name}")

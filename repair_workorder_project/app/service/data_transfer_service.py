"""
管理员数据管理服务

导出、导入、清空故障维修工单 / 7S 评估 / 数据恢复记录三张表。
"""
import json
import logging
import os
from datetime import datetime
from typing import Any, Dict
from urllib.parse import quote

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import delete

from repair_workorder_project.app.core.constants import EXPORT_FORMAT_VERSION, TRACKED_TABLES
from repair_workorder_project.app.core.exceptions import AppError, BadRequestError
from repair_workorder_project.app.service.daily_record_service import STORAGES_BY_TABLE
from repair_workorder_project.app.service.database_service import get_engine, get_session, reset_auto_increment

logger = logging.getLogger(__name__)


class DataTransferService:
    """数据导出/导入/清空服务"""

    def export_all(self) -> Dict[str, Any]:
        """
        导出所有记录

        Returns:
            {表名: [记录...], "export_info": {timestamp, version, total_records}}
        """
        export_data: Dict[str, Any] = {}
        with get_session() as session:
            for table in TRACKED_TABLES:
                export_data[table] = STORAGES_BY_TABLE[table].list_all(session)

        export_data["export_info"] = {
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "version": EXPORT_FORMAT_VERSION,
            "total_records": {table: len(export_data[table]) for table in TRACKED_TABLES},
        }
        logger.info(f"导出数据: {export_data['export_info']['total_records']}")
        return export_data

    @staticmethod
    def export_filename_header() -> str:
        """导出文件的 Content-Disposition（ASCII 文件名 + UTF-8 中文文件名）"""
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        ascii_filename = f"workorder_system_data_{timestamp}.json"
        chinese_filename = f"工单系统数据_{timestamp}.json"
        return f"attachment; filename=\"{ascii_filename}\"; filename*=UTF-8''{quote(chinese_filename)}"

    @staticmethod
    def dumps(data: Dict[str, Any]) -> str:
        return json.dumps(data, ensure_ascii=False, indent=2)

    def import_file(self, filename: str, content: bytes) -> Dict[str, Any]:
        """
        导入 JSON 文件

        所有记录在同一事务中按 (user, 日期) upsert，任何一条失败则全部回滚。

        Returns:
            {"results": {表名: {inserted, updated}}, "import_info": 文件中的 export_info}
        """
        if not filename:
            raise BadRequestError("导入失败: 请选择要导入的JSON文件")
        if os.path.splitext(filename)[1].lower() != ".json":
            raise BadRequestError("导入失败: 只支持JSON格式的文件")

        try:
            import_data = json.loads(content.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise BadRequestError(f"导入失败: JSON格式错误: {e}")
        if not isinstance(import_data, dict):
            raise BadRequestError("导入失败: 导入数据格式错误")

        results: Dict[str, Dict[str, int]] = {}
        with get_session() as session:
            try:
                for table in TRACKED_TABLES:
                    records = import_data.get(table)
                    if not isinstance(records, list):
                        continue

                    storage = STORAGES_BY_TABLE[table]
                    counts = {"inserted": 0, "updated": 0}
                    for record in records:
                        if not isinstance(record, dict):
                            raise BadRequestError(f"{table} 中存在格式错误的记录")
                        if not {k for k in record if k != "id"}:
                            continue
                        action = storage.import_record(session, record)
                        counts["inserted" if action == "created" else "updated"] += 1
                    results[table] = counts

                session.commit()
            except (BadRequestError, ValidationError, SQLAlchemyError) as e:
                session.rollback()
                message = e.message if isinstance(e, BadRequestError) else str(e)
                logger.error(f"导入数据失败，已回滚: {message}", exc_info=True)
                raise BadRequestError(f"导入失败: {message}")

        logger.info(f"导入数据成功: {results}")
        return {"results": results, "import_info": import_data.get("export_info")}

    def clear_all(self) -> Dict[str, int]:
        """
        清空所有记录并重置自增 ID

        Returns:
            {表名: 删除的行数}
        """
        results: Dict[str, int] = {}
        with get_session() as session:
            try:
                for table in TRACKED_TABLES:
                    model = STORAGES_BY_TABLE[table].model
                    results[table] = session.exec(delete(model)).rowcount
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"清除数据失败，已回滚: {e}", exc_info=True)
                raise AppError(f"清除数据失败: {e.__class__.__name__}")

        # MySQL 的 ALTER TABLE 会隐式提交，放在删除事务之后执行
        with get_engine().begin() as connection:
            for table in TRACKED_TABLES:
                reset_auto_increment(connection, table)

        logger.info(f"所有数据已清除: {results}")
        return results


data_transfer_service = DataTransferService()

"""
自定义表头存储

前端修改的表头名称以 JSON 文件形式保存在数据目录下。
"""
import json
import logging
import os
from datetime import datetime
from typing import Any, Dict

from repair_workorder_project.app.core.config import get_settings
from repair_workorder_project.app.core.exceptions import AppError, BadRequestError

logger = logging.getLogger(__name__)


class HeaderStore:
    """表头配置文件读写"""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Dict[str, Any]:
        """读取表头配置，文件不存在时返回空字典"""
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                logger.error(f"表头配置文件格式错误: {self.path}, {e}")
                raise AppError("表头配置文件格式错误")

    def save(self, data: Any) -> Dict[str, Any]:
        if not data:
            raise BadRequestError("无效的JSON数据")

        content = json.dumps(data, ensure_ascii=False, indent=4).encode("utf-8")
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        try:
            with open(self.path, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"写入表头配置失败: {self.path}, {e}", exc_info=True)
            raise AppError("表头配置保存失败")

        logger.info(f"表头配置已保存: {self.path} ({len(content)} bytes)")
        return {
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "file_size": len(content),
        }


def get_header_store() -> HeaderStore:
    return HeaderStore(get_settings().headers_path)

"""
管理员数据管理接口：导出、导入、清空
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response

from repair_workorder_project.app.api.deps import require_admin
from repair_workorder_project.app.core.responses import success_response
from repair_workorder_project.app.models import SessionUser
from repair_workorder_project.app.service import data_transfer_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["数据管理"])


@router.get("/export")
def export_data(current_user: SessionUser = Depends(require_admin)):
    """导出所有记录为 JSON 文件下载"""
    logger.info(f"管理员导出数据: {current_user.username}")
    export_data = data_transfer_service.export_all()
    return Response(
        content=data_transfer_service.dumps(export_data),
        media_type="application/json; charset=utf-8",
        headers={"Content-Disposition": data_transfer_service.export_filename_header()},
    )


@router.post("/import")
async def import_data(
    import_file: Optional[UploadFile] = File(None),
    current_user: SessionUser = Depends(require_admin),
):
    """
    导入 JSON 文件

    按 (user, 日期) 存在则更新、不存在则新增，任何一条失败整体回滚。
    """
    logger.info(f"管理员导入数据: {current_user.username}, file={import_file.filename if import_file else None}")
    filename = import_file.filename if import_file else ""
    content = await import_file.read() if import_file else b""
    result = data_transfer_service.import_file(filename, content)
    return success_response("数据导入成功", **result)


@router.post("/clear")
def clear_data(current_user: SessionUser = Depends(require_admin)):
    """清空所有记录并重置自增 ID"""
    logger.warning(f"管理员清除所有数据: {current_user.username}")
    results = data_transfer_service.clear_all()
    return success_response("所有数据已成功清除", results=results)

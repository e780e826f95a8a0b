"""
系统接口：初始化状态配置、数据库初始化、自定义表头
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from repair_workorder_project.app.api.deps import get_current_user, get_optional_user
from repair_workorder_project.app.core.config import get_config_manager, parse_bool
from repair_workorder_project.app.core.exceptions import AuthenticationError, BadRequestError
from repair_workorder_project.app.core.permissions import ensure_admin
from repair_workorder_project.app.core.responses import success_response
from repair_workorder_project.app.models import ConfigUpdate, SessionUser
from repair_workorder_project.app.service import get_header_store, initialize_database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["系统"])

INITIALIZED_KEY = "database.initialized"


def _ensure_admin_once_initialized(user: Optional[SessionUser]):
    """数据库初始化之前允许匿名操作，之后只允许管理员"""
    if not get_config_manager().is_database_initialized():
        return
    if user is None:
        raise AuthenticationError("请先登录")
    ensure_admin(user)


@router.get("/config")
def get_config(key: Optional[str] = Query(None, description="配置项，如 database.initialized")):
    config_manager = get_config_manager()
    if key == INITIALIZED_KEY:
        return success_response(data=config_manager.is_database_initialized())
    return success_response(data=config_manager.get_all())


@router.post("/config")
def update_config(payload: ConfigUpdate, current_user: Optional[SessionUser] = Depends(get_optional_user)):
    if payload.key is None or payload.value is None:
        raise BadRequestError("请求参数错误")
    if payload.key != INITIALIZED_KEY:
        raise BadRequestError("不支持的配置项")

    _ensure_admin_once_initialized(current_user)

    result = get_config_manager().set_database_initialized(parse_bool(payload.value))
    if not result:
        return JSONResponse(status_code=500, content={"success": False, "message": "配置更新失败"})
    return success_response("配置更新成功")


@router.post("/database/init")
def init_database(current_user: Optional[SessionUser] = Depends(get_optional_user)):
    """建表、创建默认管理员并标记数据库已初始化"""
    _ensure_admin_once_initialized(current_user)

    result = initialize_database()
    if not result["success"]:
        return JSONResponse(status_code=500, content=result)
    return result


@router.get("/headers")
def get_headers():
    """自定义表头配置"""
    return success_response(data=get_header_store().load())


@router.api_route("/headers", methods=["POST", "PUT"])
def save_headers(data: Any = Body(None), current_user: SessionUser = Depends(get_current_user)):
    logger.info(f"保存表头配置: operator={current_user.username}")
    result = get_header_store().save(data)
    return success_response("表头配置保存成功", **result)

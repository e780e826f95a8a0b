"""
登录与会话接口
"""
from fastapi import APIRouter, Depends

from repair_workorder_project.app.api.deps import get_current_user
from repair_workorder_project.app.core.responses import success_response
from repair_workorder_project.app.models import LoginRequest, SessionUser
from repair_workorder_project.app.service import user_service

router = APIRouter(prefix="/api/auth", tags=["登录"])


@router.post("/login")
def login(request: LoginRequest):
    """
    用户登录

    成功时返回用户信息和会话令牌，之后的写请求需在 Authorization: Bearer <token> 中携带令牌。
    """
    user_info, token = user_service.login(request)
    return success_response("登录成功", user=user_info, token=token)


@router.get("/me")
def me(current_user: SessionUser = Depends(get_current_user)):
    """当前会话用户（角色按数据库中的权限实时推导）"""
    return success_response(
        data={
            "id": current_user.id,
            "username": current_user.username,
            "real_name": current_user.real_name,
            "role": current_user.role.value,
            "permissions": current_user.permissions,
            "last_login": current_user.last_login.isoformat() if current_user.last_login else None,
        }
    )

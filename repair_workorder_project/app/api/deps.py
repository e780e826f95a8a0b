"""
API 依赖项：从请求头解析当前会话用户
"""
import logging
from typing import Optional

from fastapi import Depends, Header

from repair_workorder_project.app.core.exceptions import AuthenticationError
from repair_workorder_project.app.core.permissions import ensure_admin
from repair_workorder_project.app.core.security import verify_session_token
from repair_workorder_project.app.models import SessionUser
from repair_workorder_project.app.service import user_service

logger = logging.getLogger(__name__)


def _extract_token(authorization: Optional[str], session_token: Optional[str]) -> Optional[str]:
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    if session_token and session_token.strip():
        return session_token.strip()
    return None


def get_optional_user(
    authorization: Optional[str] = Header(None),
    x_session_token: Optional[str] = Header(None),
) -> Optional[SessionUser]:
    """有会话令牌时解析当前用户，没有时返回 None"""
    token = _extract_token(authorization, x_session_token)
    if not token:
        return None
    payload = verify_session_token(token)
    return user_service.load_session_user(int(payload["uid"]), str(payload.get("username", "")))


def get_current_user(user: Optional[SessionUser] = Depends(get_optional_user)) -> SessionUser:
    """必须登录"""
    if user is None:
        raise AuthenticationError("请先登录")
    return user


def require_admin(user: SessionUser = Depends(get_current_user)) -> SessionUser:
    """必须是管理员"""
    ensure_admin(user)
    return user

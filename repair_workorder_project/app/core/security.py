"""
密码与会话令牌

密码沿用历史数据的 MD5 摘要格式；会话令牌由 itsdangerous 签名并带时间戳，
只携带用户 ID 和用户名，角色在每次请求时从数据库重新读取。
"""
import hashlib
import hmac
import logging
import os
from functools import lru_cache
from typing import Any, Dict, Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from repair_workorder_project.app.core.config import get_settings
from repair_workorder_project.app.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

SESSION_SALT = "workorder-session"


def hash_password(password: str) -> str:
    return hashlib.md5(password.encode("utf-8")).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(password), (password_hash or "").lower())


@lru_cache(maxsize=1)
def _secret() -> bytes:
    configured = get_settings().session_secret
    if configured:
        return configured.encode("utf-8")
    logger.warning("未配置 WORKORDER_SESSION_SECRET，使用进程内随机密钥，重启后会话失效")
    return os.urandom(48)


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(_secret(), salt=SESSION_SALT)


def create_session_token(user_id: int, username: str) -> str:
    """生成会话令牌"""
    return _serializer().dumps({"uid": user_id, "username": username})


def verify_session_token(token: str, max_age: Optional[int] = None) -> Dict[str, Any]:
    """
    校验会话令牌

    Args:
        token: 会话令牌
        max_age: 有效期（秒），默认取配置中的 session_ttl_seconds

    Returns:
        令牌载荷 {uid, username}

    Raises:
        AuthenticationError: 令牌格式、签名错误或已过期
    """
    if not token:
        raise AuthenticationError("会话无效，请重新登录")

    ttl = get_settings().session_ttl_seconds if max_age is None else max_age
    try:
        payload = _serializer().loads(token, max_age=ttl)
    except SignatureExpired:
        raise AuthenticationError("会话已过期，请重新登录")
    except BadSignature:
        raise AuthenticationError("会话无效，请重新登录")

    if not isinstance(payload, dict) or "uid" not in payload:
        raise AuthenticationError("会话无效，请重新登录")
    return payload

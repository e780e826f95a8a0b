"""
用户服务

登录校验、会话用户加载、用户管理。
"""
import logging
from datetime import datetime
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from repair_workorder_project.app.core.constants import UserStatus, derive_role
from repair_workorder_project.app.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    LoginFailedError,
    NotFoundError,
)
from repair_workorder_project.app.core.security import create_session_token, hash_password, verify_password
from repair_workorder_project.app.models import LoginRequest, SessionUser, User, UserCreate, UserUpdate, user_to_public
from repair_workorder_project.app.service.database_service import get_session

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "用户名或密码错误，或账户已被禁用"


class UserService:
    """用户服务"""

    def login(self, request: LoginRequest) -> Tuple[dict, str]:
        """
        用户登录

        用户不存在、已禁用、密码错误返回同一条提示，不更新最后登录时间。

        Returns:
            (用户信息, 会话令牌)，用户信息中的 last_login 为本次登录之前的时间
        """
        username = (request.username or "").strip()
        password = request.password or ""
        if not username or not password:
            raise BadRequestError("用户名和密码不能为空")

        with get_session() as session:
            user = session.exec(select(User).where(User.username == username)).first()
            if not user or user.status != UserStatus.ACTIVE or not verify_password(password, user.password):
                logger.warning(f"登录失败: {username}")
                raise LoginFailedError(LOGIN_FAILED_MESSAGE)

            previous_login = user.last_login
            user.last_login = datetime.now()
            session.add(user)
            session.commit()
            session.refresh(user)

            role = derive_role(user.permissions, user.engineer_slot)
            logger.info(f"用户登录成功: {username} ({role.description})")

            user_info = {
                "id": user.id,
                "username": user.username,
                "real_name": user.real_name,
                "role": role.value,
                "permissions": user.permissions,
                "last_login": previous_login.isoformat() if previous_login else None,
            }
            return user_info, create_session_token(user.id, user.username)

    def load_session_user(self, user_id: int, username: str) -> SessionUser:
        """按令牌中的用户加载当前会话用户，用户已删除、改名或被禁用时会话失效"""
        with get_session() as session:
            user = session.get(User, user_id)
            if not user or user.username != username or user.status != UserStatus.ACTIVE:
                raise AuthenticationError("会话无效，请重新登录")
            return SessionUser(
                id=user.id,
                username=user.username,
                real_name=user.real_name,
                permissions=user.permissions,
                engineer_slot=user.engineer_slot,
                last_login=user.last_login,
            )

    # ==================== 用户管理 ====================

    def list_users(self) -> List[dict]:
        with get_session() as session:
            users = session.exec(select(User).order_by(User.id)).all()
            return [user_to_public(u) for u in users]

    def get_user(self, user_id: int) -> dict:
        with get_session() as session:
            user = session.get(User, user_id)
            if not user:
                raise NotFoundError("用户不存在")
            return user_to_public(user)

    def create_user(self, payload: UserCreate) -> dict:
        username = payload.username.strip()
        if not username:
            raise BadRequestError("用户名不能为空")

        with get_session() as session:
            if session.exec(select(User.id).where(User.username == username)).first():
                raise ConflictError(f"用户名已存在: {username}")

            user = User(
                username=username,
                password=hash_password(payload.password),
                real_name=payload.real_name,
                permissions=payload.permissions,
                engineer_slot=payload.engineer_slot,
                status=payload.status,
            )
            session.add(user)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise ConflictError(f"用户名已存在: {username}")
            session.refresh(user)

            logger.info(f"创建用户: {username}, permissions={user.permissions}")
            return user_to_public(user)

    def update_user(self, user_id: int, payload: UserUpdate) -> dict:
        changes = payload.model_dump(exclude_none=True)
        with get_session() as session:
            user = session.get(User, user_id)
            if not user:
                raise NotFoundError("用户不存在")

            if "password" in changes:
                user.password = hash_password(changes.pop("password"))
            for name, value in changes.items():
                setattr(user, name, value)
            user.updated_at = datetime.now()

            session.add(user)
            session.commit()
            session.refresh(user)

            logger.info(f"更新用户: {user.username}, 字段={list(payload.model_dump(exclude_none=True))}")
            return user_to_public(user)

    def delete_user(self, user_id: int, actor: SessionUser):
        if user_id == actor.id:
            raise BadRequestError("不能删除当前登录的账户")

        with get_session() as session:
            user = session.get(User, user_id)
            if not user:
                raise NotFoundError("用户不存在")
            username = user.username
            session.delete(user)
            session.commit()
            logger.info(f"删除用户: {username}, operator={actor.username}")


user_service = UserService()

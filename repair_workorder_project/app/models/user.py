"""
用户相关模型
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from pydantic.fields import Field

from repair_workorder_project.app.core.constants import Role, derive_role


class LoginRequest(BaseModel):
    username: Optional[str] = Field(None, description="用户名")
    password: Optional[str] = Field(None, description="密码")


class UserCreate(BaseModel):
    """创建用户"""

    username: str = Field(..., min_length=1, max_length=50, description="用户名")
    password: str = Field(..., min_length=1, description="密码（明文，保存为摘要）")
    real_name: str = Field("", max_length=50, description="姓名")
    permissions: int = Field(1, ge=1, le=4, description="权限级别 1-4")
    engineer_slot: Optional[int] = Field(None, ge=1, le=3, description="工程师编号 1-3")
    status: int = Field(1, ge=0, le=1, description="1 启用 / 0 禁用")


class UserUpdate(BaseModel):
    """更新用户（只修改传入的字段）"""

    password: Optional[str] = Field(None, min_length=1, description="新密码")
    real_name: Optional[str] = Field(None, max_length=50, description="姓名")
    permissions: Optional[int] = Field(None, ge=1, le=4, description="权限级别 1-4")
    engineer_slot: Optional[int] = Field(None, ge=1, le=3, description="工程师编号 1-3")
    status: Optional[int] = Field(None, ge=0, le=1, description="1 启用 / 0 禁用")


class SessionUser(BaseModel):
    """当前会话用户（角色由数据库中的权限重新推导）"""

    id: int
    username: str
    real_name: str = ""
    permissions: int
    engineer_slot: Optional[int] = None
    last_login: Optional[datetime] = None

    @property
    def role(self) -> Role:
        return derive_role(self.permissions, self.engineer_slot)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def user_to_public(user) -> dict:
    """用户对外展示的字段（不含密码）"""
    return {
        "id": user.id,
        "username": user.username,
        "real_name": user.real_name,
        "role": derive_role(user.permissions, user.engineer_slot).value,
        "permissions": user.permissions,
        "engineer_slot": user.engineer_slot,
        "status": user.status,
        "last_login": user.last_login.isoformat() if user.last_login else None,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }

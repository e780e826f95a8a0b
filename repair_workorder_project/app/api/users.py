"""
用户管理接口（仅管理员）
"""
from fastapi import APIRouter, Depends

from repair_workorder_project.app.api.deps import require_admin
from repair_workorder_project.app.core.responses import success_response
from repair_workorder_project.app.models import SessionUser, UserCreate, UserUpdate
from repair_workorder_project.app.service import user_service

router = APIRouter(prefix="/api/users", tags=["用户管理"], dependencies=[Depends(require_admin)])


@router.get("/")
def list_users():
    users = user_service.list_users()
    return success_response(data=users, count=len(users))


@router.get("/{user_id}")
def get_user(user_id: int):
    return success_response(data=user_service.get_user(user_id))


@router.post("/")
def create_user(payload: UserCreate):
    return success_response("用户创建成功", data=user_service.create_user(payload))


@router.put("/{user_id}")
def update_user(user_id: int, payload: UserUpdate):
    """只修改传入的字段，密码会重新计算摘要"""
    return success_response("用户更新成功", data=user_service.update_user(user_id, payload))


@router.delete("/{user_id}")
def delete_user(user_id: int, current_user: SessionUser = Depends(require_admin)):
    user_service.delete_user(user_id, current_user)
    return success_response("用户删除成功")

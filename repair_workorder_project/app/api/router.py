"""
API 路由聚合器

这里统一管理所有的 API 路由，方便在 main.py 中一次性注册。
"""

from fastapi import APIRouter
from repair_workorder_project.app.api import (
    admin,
    auth,
    data_recovery,
    fault_work_orders,
    seven_s,
    system,
    users,
    work_orders,
)

# 创建总路由
api_router = APIRouter()

# 注册各个子路由
api_router.include_router(auth.router)
api_router.include_router(fault_work_orders.router)
api_router.include_router(seven_s.router)
api_router.include_router(data_recovery.router)
api_router.include_router(work_orders.router)
api_router.include_router(users.router)
api_router.include_router(admin.router)
api_router.include_router(system.router)

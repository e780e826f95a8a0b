"""
飞控板故障维修工单接口

工程师只能保存自己的工单，管理员可以保存任何人的工单。
"""
from repair_workorder_project.app.api.daily_records import create_daily_record_router
from repair_workorder_project.app.models import FaultWorkOrderSave
from repair_workorder_project.app.service import fault_work_order_storage

router = create_daily_record_router(
    fault_work_order_storage,
    prefix="/api/fault-work-orders",
    tag="故障维修工单",
    payload_model=FaultWorkOrderSave,
)

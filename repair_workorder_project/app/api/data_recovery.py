"""
数据恢复记录接口
"""
from repair_workorder_project.app.api.daily_records import create_daily_record_router
from repair_workorder_project.app.models import DataRecoveryRecordSave
from repair_workorder_project.app.service import data_recovery_storage

router = create_daily_record_router(
    data_recovery_storage,
    prefix="/api/data-recovery-records",
    tag="数据恢复记录",
    payload_model=DataRecoveryRecordSave,
)

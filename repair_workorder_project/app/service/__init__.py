from repair_workorder_project.app.service.daily_record_service import (
    STORAGES_BY_TABLE,
    data_recovery_storage,
    fault_work_order_storage,
    seven_s_storage,
)
from repair_workorder_project.app.service.work_order_service import work_order_storage
from repair_workorder_project.app.service.user_service import user_service
from repair_workorder_project.app.service.data_transfer_service import data_transfer_service
from repair_workorder_project.app.service.header_store import get_header_store
from repair_workorder_project.app.service.bootstrap_service import initialize_database

__all__ = [
    "STORAGES_BY_TABLE",
    "fault_work_order_storage",
    "seven_s_storage",
    "data_recovery_storage",
    "work_order_storage",
    "user_service",
    "data_transfer_service",
    "get_header_store",
    "initialize_database",
]

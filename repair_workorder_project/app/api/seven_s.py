"""
7S 管理评估接口

每人每天一条评估，总分由勾选项数量计算。裁判和管理员可以评估任何人；
按 ID 修改评估只允许记录所属用户本人操作。
"""
from repair_workorder_project.app.api.daily_records import create_daily_record_router
from repair_workorder_project.app.models import SevenSEvaluationSave
from repair_workorder_project.app.service import seven_s_storage

router = create_daily_record_router(
    seven_s_storage,
    prefix="/api/seven-s-evaluations",
    tag="7S管理评估",
    payload_model=SevenSEvaluationSave,
)

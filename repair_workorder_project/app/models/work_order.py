from typing import List, Optional

from pydantic import BaseModel
from pydantic.fields import Field


class WorkOrderDetailIn(BaseModel):
    """工单明细"""

    engineer: str = Field(..., min_length=1, description="工程师")
    fault_type: str = Field(..., min_length=1, description="故障类型")
    fault_description: Optional[str] = Field(None, description="故障描述")
    test_result: Optional[str] = Field(None, description="测试结果")
    locate_component: Optional[str] = Field(None, description="定位元件")
    repair_result: Optional[str] = Field(None, description="维修结果")
    tuning_effect: Optional[str] = Field(None, description="调优效果")
    seven_s_evaluation: Optional[dict] = Field(None, description="7S 评估")


class WorkOrderCreate(BaseModel):
    """创建工单"""

    work_number: Optional[str] = Field(None, description="工单号（必填）")
    created_by: Optional[str] = Field(None, description="创建人（必填）")
    status: Optional[str] = Field("draft", description="状态")
    details: Optional[List[WorkOrderDetailIn]] = Field(None, description="明细")

    class Config:
        json_schema_extra = {
            "example": {
                "work_number": "WO-20250618-001",
                "created_by": "zhangsan",
                "details": [
                    {"engineer": "engineer1", "fault_type": "电源", "fault_description": "上电无响应"}
                ],
            }
        }


class WorkOrderUpdate(BaseModel):
    """
    更新工单

    details 不为空时整体替换原有明细。
    """

    work_number: Optional[str] = Field(None, description="工单号")
    status: Optional[str] = Field(None, description="状态")
    details: Optional[List[WorkOrderDetailIn]] = Field(None, description="明细（整体替换）")

"""
日常记录请求模型

user 在服务层校验（为空时返回 400 “用户字段不能为空”），这里只做类型约束。
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel
from pydantic.fields import Field


class FaultWorkOrderSave(BaseModel):
    """保存故障维修工单"""

    user: Optional[str] = Field(None, description="用户名（必填）")
    work_date: Optional[date] = Field(None, description="工作日期，默认为当前日期")
    discovered_malfunction: Optional[str] = Field("", description="发现故障")
    discovered_malfunction2: Optional[str] = Field("", description="发现故障2")
    discovered_malfunction3: Optional[str] = Field("", description="发现故障3")
    test_results: Optional[str] = Field("", description="测试结果")
    test_results2: Optional[str] = Field("", description="测试结果2")
    test_results3: Optional[str] = Field("", description="测试结果3")
    locate_faulty_components: Optional[str] = Field("", description="定位故障元件")
    locate_faulty_components2: Optional[str] = Field("", description="定位故障元件2")
    locate_faulty_components3: Optional[str] = Field("", description="定位故障元件3")
    repair_results: Optional[str] = Field("", description="维修结果")
    repair_results2: Optional[str] = Field("", description="维修结果2")
    repair_results3: Optional[str] = Field("", description="维修结果3")
    optimization_effect: Optional[str] = Field("", description="优化效果")

    class Config:
        json_schema_extra = {
            "example": {
                "user": "zhangsan",
                "work_date": "2025-06-18",
                "discovered_malfunction": "飞控板上电无响应",
                "test_results": "3.3V 电源轨短路",
                "locate_faulty_components": "C12 电容击穿",
                "repair_results": "更换 C12 后恢复正常",
                "optimization_effect": "整机功耗下降 5%",
            }
        }


class SevenSEvaluationSave(BaseModel):
    """保存 7S 管理评估"""

    user: Optional[str] = Field(None, description="被评估人用户名（必填）")
    evaluation_date: Optional[date] = Field(None, description="评估日期，默认为当前日期")
    arrange: bool = Field(False, description="整理")
    reorganize: bool = Field(False, description="整顿")
    clean: bool = Field(False, description="清扫")
    cleanliness: bool = Field(False, description="清洁")
    quality: bool = Field(False, description="素养")
    secure: bool = Field(False, description="安全")
    save: bool = Field(False, description="节约")
    current_user: Optional[str] = Field(None, description="提交人用户名，按 ID 更新时必须与记录所属用户一致")


class DataRecoveryRecordSave(BaseModel):
    """保存数据恢复工单"""

    user: Optional[str] = Field(None, description="用户名（必填）")
    work_date: Optional[date] = Field(None, description="工作日期，默认为当前日期")
    discovered_malfunction: Optional[str] = Field("", description="发现故障")
    reason_for_malfunction: Optional[str] = Field("", description="故障原因")
    repair_method: Optional[str] = Field("", description="修复方法")
    repair_results: Optional[str] = Field("", description="修复结果")
    customer_satisfaction: Optional[str] = Field("", description="客户满意度")

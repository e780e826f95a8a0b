from typing import Any, Optional

from pydantic import BaseModel
from pydantic.fields import Field


class ConfigUpdate(BaseModel):
    """更新系统配置项"""

    key: Optional[str] = Field(None, description="配置项，目前只支持 database.initialized")
    value: Any = Field(None, description="配置值")

"""停机记录数据结构定义"""

from pydantic import BaseModel, field_validator
from typing import Optional, Union
from datetime import datetime


class DowntimeCreate(BaseModel):
    """上报停机时的模型"""
    machine: str
    reason: str
    reported_by: Optional[Union[str, int]] = None

    @field_validator("reported_by")
    @classmethod
    def _reporter_as_text(cls, value):
        # 操作员终端上报的是工号（整数）
        return None if value is None else str(value)


class DowntimeRead(BaseModel):
    """读取停机记录时的模型"""
    id: int
    machine: str
    reason: str
    reported_by: Optional[str] = None
    is_active: bool
    start_time: datetime
    end_time: Optional[datetime] = None
    version: int

    class Config:
        from_attributes = True

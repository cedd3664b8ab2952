"""工单数据结构定义"""

from pydantic import AliasChoices, BaseModel, Field
from typing import Optional
from datetime import datetime
from ..models.enums import Station, WorkOrderStatus
from .order import OrderRead


class WorkOrderCreate(BaseModel):
    """创建工单时的模型（计划员录入）"""
    # 兼容旧前端提交的 OrderId 字段
    order_id: int = Field(validation_alias=AliasChoices("order_id", "OrderId"))
    product: str
    quantity: int
    station: Station
    operator_id: Optional[int] = None


class WorkOrderStatusUpdate(BaseModel):
    """操作员更新工单状态/进度

    status 为空时只推进进度；expected_version 用于并发控制
    """
    status: Optional[WorkOrderStatus] = None
    progress: Optional[int] = None
    expected_version: Optional[int] = None


class WorkOrderRead(BaseModel):
    """读取工单时的模型，内嵌所属订单"""
    id: int
    order_id: int
    product: str
    quantity: int
    station: Station
    status: WorkOrderStatus
    progress: int
    operator_id: Optional[int] = None
    completed_at: Optional[datetime] = None
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    order: Optional[OrderRead] = None

    class Config:
        from_attributes = True

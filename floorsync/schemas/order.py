"""订单数据结构定义

定义订单相关的Pydantic模型
"""

from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
from ..models.enums import OrderStatus


class OrderBase(BaseModel):
    """订单基础模型"""
    customer: str
    delivery_date: Optional[date] = None


class OrderCreate(OrderBase):
    """创建订单时的模型"""
    status: OrderStatus = OrderStatus.NEW


class OrderRead(OrderBase):
    """读取订单时的模型"""
    id: int
    status: OrderStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

"""API数据模型模块

定义所有 Pydantic 模型（请求/响应结构体）
"""

from .order import OrderCreate, OrderRead
from .work_order import WorkOrderCreate, WorkOrderStatusUpdate, WorkOrderRead
from .downtime import DowntimeCreate, DowntimeRead
from .dashboard import DashboardStats

__all__ = [
    "OrderCreate",
    "OrderRead",
    "WorkOrderCreate",
    "WorkOrderStatusUpdate",
    "WorkOrderRead",
    "DowntimeCreate",
    "DowntimeRead",
    "DashboardStats",
]

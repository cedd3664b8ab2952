"""数据库模型模块

定义所有 SQLAlchemy ORM 模型
"""

from .enums import OrderStatus, WorkOrderStatus, Station, LineStatus
from .order import Order
from .work_order import WorkOrder
from .downtime_log import DowntimeLog

__all__ = [
    "Order",
    "WorkOrder",
    "DowntimeLog",
    "OrderStatus",
    "WorkOrderStatus",
    "Station",
    "LineStatus",
]

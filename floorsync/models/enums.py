"""枚举定义

订单状态、工单状态、工位与产线状态
"""

from enum import Enum


class OrderStatus(str, Enum):
    NEW = "new"
    PRODUCTION = "production"
    READY = "ready"


class WorkOrderStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Station(str, Enum):
    CUTTING = "cutting"
    COATING = "coating"
    ASSEMBLY = "assembly"


class LineStatus(str, Enum):
    """产线状态：存在未解除的停机即为 HALTED"""
    RUNNING = "RUNNING"
    HALTED = "HALTED"

"""工单模型定义"""

from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from ..database.connection import Base
from ..utils.helpers import utcnow
from .enums import Station, WorkOrderStatus


class WorkOrder(Base):
    """车间工单表"""
    __tablename__ = "work_orders"

    id = Column(Integer, primary_key=True, index=True)
    # 所属订单，创建后不可修改
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    station = Column(Enum(*[s.value for s in Station], name="station"), nullable=False)
    status = Column(
        Enum(*[s.value for s in WorkOrderStatus], name="workorderstatus"),
        nullable=False,
        default=WorkOrderStatus.PENDING.value,
        index=True,
    )
    progress = Column(Integer, nullable=False, default=0)  # 百分比
    operator_id = Column(Integer, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    # 每次更新递增，用于比较并交换
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, index=True)

    order = relationship("Order", back_populates="work_orders", lazy="joined")

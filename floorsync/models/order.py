"""订单模型定义"""

from sqlalchemy import Column, Integer, String, Date, DateTime, Enum
from sqlalchemy.orm import relationship
from ..database.connection import Base
from ..utils.helpers import utcnow
from .enums import OrderStatus


class Order(Base):
    """客户订单"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer = Column(String(255), nullable=False)
    delivery_date = Column(Date, nullable=True)
    # new, production, ready；核心逻辑只负责初始化
    status = Column(
        Enum(*[s.value for s in OrderStatus], name="orderstatus"),
        nullable=False,
        default=OrderStatus.NEW.value,
    )
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    work_orders = relationship("WorkOrder", back_populates="order")

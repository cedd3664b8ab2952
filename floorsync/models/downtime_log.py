"""停机记录模型定义"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, UniqueConstraint
from ..database.connection import Base
from ..utils.helpers import utcnow


class DowntimeLog(Base):
    """停机记录表

    只记录机台名称，不与订单或工单关联
    """
    __tablename__ = "downtime_logs"
    __table_args__ = (
        UniqueConstraint("active_machine", name="uq_downtime_logs_active_machine"),
    )

    id = Column(Integer, primary_key=True, index=True)
    machine = Column(String(255), nullable=False, index=True)
    # 未解除时等于 machine，解除后置空；唯一约束保证每台机台最多一条未解除停机
    active_machine = Column(String(255), nullable=True)
    reason = Column(String(500), nullable=False)
    reported_by = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    start_time = Column(DateTime, nullable=False, default=utcnow)
    end_time = Column(DateTime, nullable=True)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)

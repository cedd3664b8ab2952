"""看板统计数据结构"""

from pydantic import BaseModel
from ..models.enums import LineStatus


class DashboardStats(BaseModel):
    """看板统计，字段名与前端保持一致"""
    activeJobs: int
    activeDowntime: int
    completedToday: int
    completedTotal: int
    lineStatus: LineStatus

"""看板统计

每次调用都基于数据库当前状态同步计算，不做缓存
"""

from datetime import datetime

from sqlalchemy.orm import Session

from .. import models, schemas
from ..config.settings import settings
from ..crud import store
from ..utils.helpers import start_of_day_utc

COMPLETED = models.WorkOrderStatus.COMPLETED.value


def count_active_jobs(db: Session) -> int:
    return store.count(db, models.WorkOrder, filters={"status": models.WorkOrderStatus.IN_PROGRESS.value})


def count_active_downtime(db: Session) -> int:
    return store.count(db, models.DowntimeLog, filters={"is_active": True})


def count_completed(db: Session, since: datetime = None) -> int:
    """已完成工单数；since 不为空时只统计该时刻（UTC）之后完成的"""
    where = () if since is None else (models.WorkOrder.completed_at >= since,)
    return store.count(db, models.WorkOrder, filters={"status": COMPLETED}, where=where)


def dashboard_stats(db: Session, tz_name: str = None, now: datetime = None) -> schemas.DashboardStats:
    """计算看板统计

    completedToday 按车间时区（SHOP_TIMEZONE）的自然日统计，
    completedTotal 为历史累计完成数
    """
    since = start_of_day_utc(tz_name or settings.SHOP_TIMEZONE, now)
    active_downtime = count_active_downtime(db)
    return schemas.DashboardStats(
        activeJobs=count_active_jobs(db),
        activeDowntime=active_downtime,
        completedToday=count_completed(db, since),
        completedTotal=count_completed(db),
        lineStatus=models.LineStatus.HALTED if active_downtime > 0 else models.LineStatus.RUNNING,
    )

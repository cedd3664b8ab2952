from datetime import datetime, timedelta

from floorsync import models
from floorsync.core import dashboard, downtime, work_orders
from floorsync.utils.helpers import start_of_day_utc, utcnow


def _wo(db, order, status, progress, completed_at=None):
    wo = models.WorkOrder(order_id=order.id, product="Diffuser Type B", quantity=100, station="coating",
                          status=status, progress=progress, completed_at=completed_at)
    db.add(wo)
    db.commit()
    return wo


def test_active_jobs_counts_in_progress_only(db, order):
    _wo(db, order, "in_progress", 10)
    _wo(db, order, "in_progress", 45)
    _wo(db, order, "completed", 100, completed_at=utcnow())
    _wo(db, order, "pending", 0)
    stats = dashboard.dashboard_stats(db)
    assert stats.activeJobs == 2


def test_completed_today_is_date_scoped(db, order):
    now = datetime(2026, 3, 10, 15, 0)
    _wo(db, order, "completed", 100, completed_at=now - timedelta(hours=2))
    _wo(db, order, "completed", 100, completed_at=now - timedelta(days=1))
    stats = dashboard.dashboard_stats(db, tz_name="UTC", now=now)
    assert stats.completedToday == 1
    assert stats.completedTotal == 2


def test_completed_today_respects_shop_timezone(db, order):
    # 23:30 UTC on the 9th is already the 10th in Shanghai (UTC+8)
    now = datetime(2026, 3, 10, 2, 0)
    _wo(db, order, "completed", 100, completed_at=datetime(2026, 3, 9, 23, 30))
    assert dashboard.dashboard_stats(db, tz_name="Asia/Shanghai", now=now).completedToday == 1
    assert dashboard.dashboard_stats(db, tz_name="UTC", now=now).completedToday == 0
    assert dashboard.dashboard_stats(db, tz_name="UTC", now=datetime(2026, 3, 9, 23, 50)).completedToday == 1


def test_start_of_day_utc_converts_local_midnight():
    assert start_of_day_utc("Asia/Shanghai", datetime(2026, 3, 10, 2, 0)) == datetime(2026, 3, 9, 16, 0)
    assert start_of_day_utc("UTC", datetime(2026, 3, 10, 2, 0)) == datetime(2026, 3, 10, 0, 0)


def test_downtime_halts_the_line(db, broadcaster):
    assert dashboard.dashboard_stats(db).lineStatus.value == "RUNNING"
    log = downtime.report_downtime(db, broadcaster, "Station-1", "Machine Jammed")
    stats = dashboard.dashboard_stats(db)
    assert stats.activeDowntime == 1
    assert stats.lineStatus.value == "HALTED"
    downtime.resolve_downtime(db, broadcaster, log.id)
    stats = dashboard.dashboard_stats(db)
    assert stats.activeDowntime == 0
    assert stats.lineStatus.value == "RUNNING"


def test_stats_reflect_store_without_caching(db, broadcaster, order):
    wo = work_orders.create_work_order(db, broadcaster, order.id, "Linear Grill 200x50", 50, "cutting")
    assert dashboard.dashboard_stats(db).activeJobs == 0
    work_orders.transition_work_order(db, broadcaster, wo.id, status="in_progress", progress=5)
    assert dashboard.dashboard_stats(db).activeJobs == 1

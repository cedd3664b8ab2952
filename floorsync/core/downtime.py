"""停机告警管理

停机相当于一个二值警报：任意一条未解除的停机都会使产线状态变为 HALTED。
"""

from sqlalchemy.orm import Session

from .. import models, schemas
from ..config.settings import settings
from ..crud import store
from ..logging_config import get_logger
from ..utils.helpers import utcnow
from .broadcaster import EventBroadcaster, DOWNTIME_ALERT, DOWNTIME_RESOLVED
from .exceptions import (
    ConstraintViolationError,
    DuplicateAlertError,
    ValidationError,
    VersionConflictError,
)

logger = get_logger("core.downtime")


def downtime_rooms(log) -> tuple:
    return ("maintenance", f"machine:{log.machine}")


def publish_downtime(broadcaster: EventBroadcaster, event: str, log) -> int:
    payload = schemas.DowntimeRead.model_validate(log).model_dump(mode="json")
    return broadcaster.publish(
        event,
        payload,
        rooms=downtime_rooms(log),
        entity=("downtime", log.id, log.version),
    )


def active_downtime_for(db: Session, machine: str):
    return store.find_all(
        db,
        models.DowntimeLog,
        filters={"machine": machine, "is_active": True},
        order_by=models.DowntimeLog.id.asc(),
    )


def report_downtime(db: Session, broadcaster: EventBroadcaster, machine: str, reason: str,
                    reporter=None, single_active: bool = None):
    """上报停机，创建一条未解除的停机记录并推送 downtime_alert

    single_active 为真时同一机台已有未解除停机则拒绝（DuplicateAlertError），
    缺省取配置 DOWNTIME_SINGLE_ACTIVE_PER_MACHINE。
    """
    machine = (machine or "").strip()
    reason = (reason or "").strip()
    if not machine:
        raise ValidationError("Machine is required")
    if not reason:
        raise ValidationError("Reason is required")
    if single_active is None:
        single_active = settings.DOWNTIME_SINGLE_ACTIVE_PER_MACHINE

    if single_active:
        active = active_downtime_for(db, machine)
        if active:
            raise DuplicateAlertError(machine, active[0].id)

    try:
        log = store.insert(db, models.DowntimeLog(
            machine=machine,
            # 并发上报由 active_machine 唯一约束兜底
            active_machine=machine if single_active else None,
            reason=reason,
            reported_by=None if reporter is None else str(reporter),
            is_active=True,
            start_time=utcnow(),
        ))
    except ConstraintViolationError as exc:
        active = active_downtime_for(db, machine)
        raise DuplicateAlertError(machine, active[0].id if active else None) from exc
    logger.warning("downtime #%s reported on %s: %s", log.id, machine, reason)
    publish_downtime(broadcaster, DOWNTIME_ALERT, log)
    return log


def resolve_downtime(db: Session, broadcaster: EventBroadcaster, downtime_id: int):
    """解除停机：置为非活动并记录结束时间，推送 downtime_resolved

    已解除的记录再次解除不做任何修改、不再推送，直接返回当前记录。
    """
    log = store.get(db, models.DowntimeLog, downtime_id)
    if not log.is_active:
        logger.info("downtime #%s already resolved", downtime_id)
        return log

    try:
        updated = store.update(
            db,
            models.DowntimeLog,
            downtime_id,
            {"is_active": False, "active_machine": None, "end_time": utcnow()},
            expected_version=log.version,
        )
    except VersionConflictError:
        # 并发解除：以先提交者为准
        current = store.get(db, models.DowntimeLog, downtime_id)
        db.refresh(current)
        if not current.is_active:
            return current
        raise

    logger.info("downtime #%s on %s resolved", downtime_id, updated.machine)
    publish_downtime(broadcaster, DOWNTIME_RESOLVED, updated)
    return updated


def list_downtime(db: Session, active: bool = None):
    """停机记录，最新的在前；active 不为空时按状态过滤"""
    filters = None if active is None else {"is_active": active}
    return store.find_all(
        db,
        models.DowntimeLog,
        filters=filters,
        order_by=[models.DowntimeLog.start_time.desc(), models.DowntimeLog.id.desc()],
    )


def line_status(db: Session) -> models.LineStatus:
    if store.count(db, models.DowntimeLog, filters={"is_active": True}) > 0:
        return models.LineStatus.HALTED
    return models.LineStatus.RUNNING

"""工单业务逻辑

创建工单、变更状态/进度，每次成功变更后推送一条 wo_updated 事件
"""

from sqlalchemy.orm import Session

from .. import models, schemas
from ..crud import store
from ..logging_config import get_logger
from ..utils.helpers import utcnow
from .broadcaster import EventBroadcaster, WO_UPDATED
from .exceptions import ValidationError
from .state_machine import plan_transition

logger = get_logger("core.work_orders")

STATIONS = {s.value for s in models.Station}


def work_order_rooms(work_order) -> tuple:
    return ("production", f"station:{work_order.station}")


def publish_work_order(broadcaster: EventBroadcaster, work_order) -> int:
    """推送包含所属订单信息的完整工单"""
    payload = schemas.WorkOrderRead.model_validate(work_order).model_dump(mode="json")
    return broadcaster.publish(
        WO_UPDATED,
        payload,
        rooms=work_order_rooms(work_order),
        entity=("work_order", work_order.id, work_order.version),
    )


def create_work_order(db: Session, broadcaster: EventBroadcaster, order_id: int, product: str,
                      quantity: int, station, operator_id: int = None):
    """在已有订单下创建工单，初始状态 pending、进度 0"""
    product = (product or "").strip()
    if not product:
        raise ValidationError("Product is required")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError(f"Quantity must be a positive integer, got {quantity!r}")
    station = getattr(station, "value", station)
    if station not in STATIONS:
        raise ValidationError(f"Unknown station {station!r}")
    if order_id is None or store.find_by_id(db, models.Order, order_id) is None:
        raise ValidationError(f"Order {order_id} does not exist")

    work_order = store.insert(db, models.WorkOrder(
        order_id=order_id,
        product=product,
        quantity=quantity,
        station=station,
        status=models.WorkOrderStatus.PENDING.value,
        progress=0,
        operator_id=operator_id,
    ))
    logger.info("work order %s created for order %s at %s", work_order.id, order_id, station)
    publish_work_order(broadcaster, work_order)
    return work_order


def get_work_order(db: Session, work_order_id: int):
    """获取工单，不存在时抛出 NotFoundError"""
    return store.get(db, models.WorkOrder, work_order_id)


def list_work_orders(db: Session):
    """所有工单（内嵌订单），最近更新的在前"""
    return store.find_all(
        db,
        models.WorkOrder,
        order_by=[models.WorkOrder.updated_at.desc(), models.WorkOrder.id.desc()],
    )


def transition_work_order(db: Session, broadcaster: EventBroadcaster, work_order_id: int,
                          status=None, progress: int = None, expected_version: int = None):
    """变更工单状态/进度

    以读取到的版本号（或调用方提供的 expected_version）做比较并交换，
    期间被其他请求修改则抛出 VersionConflictError。
    """
    work_order = store.get(db, models.WorkOrder, work_order_id)
    transition = plan_transition(work_order.status, work_order.progress, status, progress)

    fields = {"status": transition.target.value, "progress": transition.progress}
    if transition.completes and work_order.completed_at is None:
        fields["completed_at"] = utcnow()

    version = work_order.version if expected_version is None else expected_version
    updated = store.update(db, models.WorkOrder, work_order_id, fields, expected_version=version)
    logger.info(
        "work order %s: %s -> %s, progress %s (v%s)",
        work_order_id, transition.source.value, transition.target.value,
        transition.progress, updated.version,
    )
    publish_work_order(broadcaster, updated)
    return updated

"""工单API路由

创建与状态变更成功后都会通过广播器推送 wo_updated
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import schemas
from ...core import work_orders
from ...core.broadcaster import EventBroadcaster
from ...core.exceptions import FloorError
from ...database.connection import get_db
from ..deps import get_broadcaster, http_error

router = APIRouter()


@router.get("/work-orders", response_model=List[schemas.WorkOrderRead])
def list_work_orders_endpoint(db: Session = Depends(get_db)):
    """工单列表（含订单），最近更新的在前"""
    return work_orders.list_work_orders(db)


@router.get("/work-orders/{work_order_id}", response_model=schemas.WorkOrderRead)
def get_work_order_endpoint(work_order_id: int, db: Session = Depends(get_db)):
    try:
        return work_orders.get_work_order(db, work_order_id)
    except FloorError as exc:
        raise http_error(exc) from exc


@router.post("/work-orders", response_model=schemas.WorkOrderRead)
def create_work_order_endpoint(
    payload: schemas.WorkOrderCreate,
    db: Session = Depends(get_db),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
):
    """计划员创建工单"""
    try:
        return work_orders.create_work_order(
            db,
            broadcaster,
            order_id=payload.order_id,
            product=payload.product,
            quantity=payload.quantity,
            station=payload.station,
            operator_id=payload.operator_id,
        )
    except FloorError as exc:
        raise http_error(exc) from exc


@router.put("/work-orders/{work_order_id}/status", response_model=schemas.WorkOrderRead)
def update_work_order_status_endpoint(
    work_order_id: int,
    payload: schemas.WorkOrderStatusUpdate,
    db: Session = Depends(get_db),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
):
    """操作员更新工单状态/进度"""
    try:
        return work_orders.transition_work_order(
            db,
            broadcaster,
            work_order_id,
            status=payload.status,
            progress=payload.progress,
            expected_version=payload.expected_version,
        )
    except FloorError as exc:
        raise http_error(exc) from exc

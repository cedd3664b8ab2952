"""停机API路由"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ... import schemas
from ...core import downtime
from ...core.broadcaster import EventBroadcaster
from ...core.exceptions import FloorError
from ...database.connection import get_db
from ..deps import get_broadcaster, http_error

router = APIRouter()


@router.get("/downtime", response_model=List[schemas.DowntimeRead])
def list_downtime_endpoint(
    active: Optional[bool] = Query(None, description="只看未解除/已解除的停机"),
    db: Session = Depends(get_db),
):
    return downtime.list_downtime(db, active=active)


@router.post("/downtime", response_model=schemas.DowntimeRead)
def report_downtime_endpoint(
    payload: schemas.DowntimeCreate,
    db: Session = Depends(get_db),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
):
    """操作员上报停机"""
    try:
        return downtime.report_downtime(
            db, broadcaster, payload.machine, payload.reason, reporter=payload.reported_by
        )
    except FloorError as exc:
        raise http_error(exc) from exc


@router.put("/downtime/{downtime_id}/resolve", response_model=schemas.DowntimeRead)
def resolve_downtime_endpoint(
    downtime_id: int,
    db: Session = Depends(get_db),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
):
    """解除停机"""
    try:
        return downtime.resolve_downtime(db, broadcaster, downtime_id)
    except FloorError as exc:
        raise http_error(exc) from exc

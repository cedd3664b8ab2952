"""看板API路由"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import schemas
from ...core.dashboard import dashboard_stats
from ...database.connection import get_db

router = APIRouter()


@router.get("/dashboard", response_model=schemas.DashboardStats)
def dashboard_endpoint(db: Session = Depends(get_db)):
    """看板统计：进行中工单、未解除停机、今日完成"""
    return dashboard_stats(db)

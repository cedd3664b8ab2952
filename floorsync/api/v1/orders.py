"""订单API路由"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ... import crud, schemas
from ...database.connection import get_db

router = APIRouter()


@router.get("/orders", response_model=List[schemas.OrderRead])
def list_orders_endpoint(db: Session = Depends(get_db)):
    """订单列表（计划员下拉框）"""
    return crud.list_orders(db)


@router.post("/orders", response_model=schemas.OrderRead)
def create_order_endpoint(order: schemas.OrderCreate, db: Session = Depends(get_db)):
    """创建新订单"""
    return crud.create_order(db, order)


@router.get("/orders/{order_id}", response_model=schemas.OrderRead)
def get_order_endpoint(order_id: int, db: Session = Depends(get_db)):
    db_order = crud.get_order(db, order_id)
    if not db_order:
        raise HTTPException(status_code=404, detail="Order not found")
    return db_order

"""数据库操作（CRUD）- 订单相关

订单由计划员录入，核心逻辑只读取订单、不变更订单状态
"""

from sqlalchemy.orm import Session
from .. import models, schemas
from . import store


def create_order(db: Session, order: schemas.OrderCreate):
    """创建新订单"""
    db_order = models.Order(
        customer=order.customer,
        delivery_date=order.delivery_date,
        status=order.status.value,
    )
    return store.insert(db, db_order)


def get_order(db: Session, order_id: int):
    """根据ID获取订单，不存在时返回 None"""
    return store.find_by_id(db, models.Order, order_id)


def list_orders(db: Session):
    """获取所有订单（按交期、编号排序）"""
    return store.find_all(
        db,
        models.Order,
        order_by=[models.Order.delivery_date.asc(), models.Order.id.asc()],
    )

"""存储适配层

对 Order / WorkOrder / DowntimeLog 提供统一的增查改操作：
- insert / find_by_id / get / find_all / count / update
- update 基于 version 列做比较并交换（CAS），每次成功更新 version 加一
- 违反约束转换为 ConstraintViolationError，其余 SQLAlchemy 异常转换为 StoreError
"""

from contextlib import contextmanager
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import ConstraintViolationError, NotFoundError, StoreError, VersionConflictError
from ..logging_config import get_logger
from ..utils.helpers import utcnow

logger = get_logger("crud.store")


@contextmanager
def store_errors(db: Session):
    """将底层数据库异常转换为 StoreError"""
    try:
        yield
    except IntegrityError as exc:
        db.rollback()
        logger.info("store write rejected by constraint: %s", exc.orig)
        raise ConstraintViolationError("Store write violates a constraint") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("store operation failed: %s", exc)
        raise StoreError(f"Store operation failed: {exc.__class__.__name__}") from exc


def insert(db: Session, entity):
    """写入新实体并返回（已分配 id）"""
    with store_errors(db):
        db.add(entity)
        db.commit()
        db.refresh(entity)
    return entity


def find_by_id(db: Session, model, entity_id: int):
    """按主键查找，不存在时返回 None"""
    with store_errors(db):
        return db.get(model, entity_id)


def get(db: Session, model, entity_id: int):
    """按主键查找，不存在时抛出 NotFoundError"""
    entity = find_by_id(db, model, entity_id)
    if entity is None:
        raise NotFoundError(model.__name__, entity_id)
    return entity


def _apply_filters(query, model, filters: Optional[dict], where: Iterable):
    if filters:
        query = query.filter_by(**filters)
    for criterion in where:
        query = query.filter(criterion)
    return query


def find_all(db: Session, model, filters: dict = None, order_by=None, where: Iterable = ()):
    """列出满足条件的实体

    filters 为等值条件字典，where 为额外的 SQLAlchemy 条件表达式
    """
    with store_errors(db):
        query = _apply_filters(db.query(model), model, filters, where)
        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                query = query.order_by(*order_by)
            else:
                query = query.order_by(order_by)
        return query.all()


def count(db: Session, model, filters: dict = None, where: Iterable = ()) -> int:
    """统计满足条件的实体数量"""
    with store_errors(db):
        return _apply_filters(db.query(model), model, filters, where).count()


def update(db: Session, model, entity_id: int, fields: dict, expected_version: int = None):
    """原子地更新一行并返回更新后的实体

    expected_version 不为空时仅在版本号一致时写入，否则抛出 VersionConflictError；
    为空时后写者覆盖先写者。
    """
    values = dict(fields)
    values["version"] = model.version + 1
    if hasattr(model, "updated_at"):
        values["updated_at"] = utcnow()

    query = db.query(model).filter(model.id == entity_id)
    if expected_version is not None:
        query = query.filter(model.version == expected_version)

    with store_errors(db):
        matched = query.update(values, synchronize_session=False)
        db.commit()

    if not matched:
        if find_by_id(db, model, entity_id) is None:
            raise NotFoundError(model.__name__, entity_id)
        raise VersionConflictError(model.__name__, entity_id, expected_version)

    with store_errors(db):
        entity = db.get(model, entity_id)
        db.refresh(entity)
    return entity

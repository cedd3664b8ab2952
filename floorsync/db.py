"""
floorsync 数据库入口

引擎、会话与模型基类在 database 包中创建；这里额外提供建表/删表函数，
保证调用前订单、工单、停机三张表的模型都已注册到 Base.metadata
"""

from .database.connection import engine, get_db, Base, SessionLocal


def create_schema(bind=None):
    """按当前模型建表（已存在的表跳过）"""
    from . import models  # noqa: F401  注册模型

    Base.metadata.create_all(bind=bind or engine)


def drop_schema(bind=None):
    """删除全部 floorsync 表，测试复位用"""
    from . import models  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)


__all__ = ["engine", "get_db", "Base", "SessionLocal", "create_schema", "drop_schema"]

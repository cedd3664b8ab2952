"""数据库连接模块

统一管理数据库引擎、会话和模型基类的创建
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from ..config.settings import settings


def _engine_options(url: str) -> dict:
    """SQLite 需要跨线程共享连接（FastAPI 同步路由运行在线程池中）"""
    options = {"pool_pre_ping": True, "echo": settings.ECHO_SQL}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # 内存库只有一个连接，否则每个连接看到的是不同的库
            options["poolclass"] = StaticPool
    return options


# 创建数据库引擎
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# 创建会话工厂
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 创建模型基类
Base = declarative_base()


def get_db():
    """获取数据库会话的依赖函数"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

"""FastAPI主应用入口

车间工单跟踪服务：
- /api/v1 下提供订单、工单、停机与看板接口
- /ws 向看板、操作员终端、计划员推送实时变更
- 广播器在 create_app 中创建一次，经 app.state 传递给各路由
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.deps import status_code_for
from .api.v1 import (
    orders_router,
    work_orders_router,
    downtime_router,
    dashboard_router,
    events_router,
)
from .config.settings import settings
from .core.broadcaster import EventBroadcaster
from .core.exceptions import FloorError
from .db import create_schema, engine
from .logging_config import configure_logging, get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 启动时确保数据表存在
    create_schema()
    logger.info("database ready at %s", engine.url.render_as_string(hide_password=True))
    yield


def create_app(broadcaster: EventBroadcaster = None) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_TITLE,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.broadcaster = broadcaster or EventBroadcaster(settings.EVENT_VERSION_CACHE_SIZE)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
    )

    # 挂载API路由
    app.include_router(orders_router, prefix="/api/v1", tags=["orders"])
    app.include_router(work_orders_router, prefix="/api/v1", tags=["work-orders"])
    app.include_router(downtime_router, prefix="/api/v1", tags=["downtime"])
    app.include_router(dashboard_router, prefix="/api/v1", tags=["dashboard"])
    app.include_router(events_router)

    @app.exception_handler(FloorError)
    async def floor_error_handler(request: Request, exc: FloorError):
        # 路由未显式处理的业务异常（如读取时的 StoreError）
        return JSONResponse(
            status_code=status_code_for(exc),
            content={"detail": exc.message, "code": exc.code},
        )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


# 创建FastAPI应用实例
app = create_app()

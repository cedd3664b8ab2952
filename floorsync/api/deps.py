"""路由层公共依赖"""

from fastapi import HTTPException
from starlette.requests import HTTPConnection

from ..core.broadcaster import EventBroadcaster
from ..core.exceptions import (
    ConstraintViolationError,
    DuplicateAlertError,
    FloorError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
    VersionConflictError,
)


def get_broadcaster(conn: HTTPConnection) -> EventBroadcaster:
    """取出应用启动时创建的广播器（HTTP 与 WebSocket 通用）"""
    return conn.app.state.broadcaster


# 子类在前
STATUS_CODES = (
    (DuplicateAlertError, 409),
    (VersionConflictError, 409),
    (InvalidTransitionError, 409),
    (ConstraintViolationError, 409),
    (ValidationError, 422),
    (NotFoundError, 404),
)


def status_code_for(exc: FloorError) -> int:
    for exc_type, status_code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def http_error(exc: FloorError) -> HTTPException:
    return HTTPException(status_code=status_code_for(exc), detail=exc.message)

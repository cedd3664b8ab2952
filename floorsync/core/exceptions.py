"""业务异常定义

所有异常都继承自 FloorError，携带可读的 message 与机器可读的 code，
路由层据此转换为对应的 HTTP 状态码。

    FloorError
    +-- ValidationError
    |   +-- DuplicateAlertError
    +-- NotFoundError
    +-- InvalidTransitionError
    +-- StoreError
        +-- ConstraintViolationError
        +-- VersionConflictError
"""


class FloorError(Exception):
    """业务异常基类"""

    code: str = "FLOOR_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FloorError):
    """输入格式错误或语义无效（数量非正、订单不存在等）"""

    code = "VALIDATION_ERROR"


class DuplicateAlertError(ValidationError):
    """同一机台已有未解除的停机告警"""

    code = "DUPLICATE_ALERT"

    def __init__(self, machine: str, active_id: int = None):
        suffix = "" if active_id is None else f" #{active_id}"
        super().__init__(f"Machine {machine!r} already has active downtime{suffix}")
        self.machine = machine
        self.active_id = active_id


class NotFoundError(FloorError):
    """引用的实体不存在"""

    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(FloorError):
    """工单状态或进度的非法变更"""

    code = "INVALID_TRANSITION"


class StoreError(FloorError):
    """底层存储失败，对本次请求视为致命错误"""

    code = "STORE_ERROR"


class ConstraintViolationError(StoreError):
    """写入违反数据库约束（唯一、非空等）"""

    code = "CONSTRAINT_VIOLATION"


class VersionConflictError(StoreError):
    """比较并交换失败：记录已被其他请求修改"""

    code = "VERSION_CONFLICT"

    def __init__(self, entity: str, entity_id, expected_version: int):
        super().__init__(
            f"{entity} {entity_id} was modified concurrently (expected version {expected_version})"
        )
        self.entity = entity
        self.entity_id = entity_id
        self.expected_version = expected_version

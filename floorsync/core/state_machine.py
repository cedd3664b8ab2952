"""工单状态机

状态只能前进：pending -> in_progress -> completed。
允许的 (当前状态, 目标状态) 组合见 ALLOWED_TRANSITIONS，其余一律拒绝。
进度限制在 [0, 100]，不允许回退；完成时进度固定为 100。
"""

from dataclasses import dataclass
from typing import Optional

from ..models.enums import WorkOrderStatus
from ..utils.helpers import clamp_progress
from .exceptions import InvalidTransitionError, ValidationError

PENDING = WorkOrderStatus.PENDING
IN_PROGRESS = WorkOrderStatus.IN_PROGRESS
COMPLETED = WorkOrderStatus.COMPLETED

ALLOWED_TRANSITIONS = frozenset({
    (PENDING, IN_PROGRESS),
    (IN_PROGRESS, IN_PROGRESS),  # 仅推进进度
    (IN_PROGRESS, COMPLETED),
})


@dataclass(frozen=True)
class Transition:
    """一次已校验的变更"""
    source: WorkOrderStatus
    target: WorkOrderStatus
    progress: int

    @property
    def completes(self) -> bool:
        return self.target is COMPLETED


def can_transition(current, requested) -> bool:
    return (WorkOrderStatus(current), WorkOrderStatus(requested)) in ALLOWED_TRANSITIONS


def plan_transition(current_status, current_progress: int,
                    new_status=None, new_progress: Optional[int] = None) -> Transition:
    """校验并计算变更后的状态与进度

    new_status 为空时保持当前状态；pending 工单带正进度时视为开工。
    非法变更抛出 InvalidTransitionError。
    """
    source = WorkOrderStatus(current_status)
    current_progress = current_progress or 0
    progress = current_progress if new_progress is None else clamp_progress(new_progress)

    if new_status is None:
        target = IN_PROGRESS if source is PENDING and progress > 0 else source
    else:
        try:
            target = WorkOrderStatus(new_status)
        except ValueError as exc:
            raise ValidationError(f"Unknown status {new_status!r}") from exc

    if (source, target) not in ALLOWED_TRANSITIONS:
        raise InvalidTransitionError(
            f"Cannot move work order from {source.value} to {target.value}"
        )

    if target is COMPLETED:
        progress = 100
    elif progress < current_progress:
        raise InvalidTransitionError(
            f"Progress cannot go backwards ({current_progress} -> {progress})"
        )

    return Transition(source=source, target=target, progress=progress)

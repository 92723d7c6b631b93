"""枚举定义

TaskStatus 状态集合以及完成状态判定。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """任务状态"""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"


# 拥有完成时间的状态
COMPLETED_STATES: set[TaskStatus] = {TaskStatus.DONE}


def is_completed(status: TaskStatus) -> bool:
    """状态是否要求存在 completed_at"""
    return status in COMPLETED_STATES

"""tasktrack Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .account import Account, AccountView
from .enums import COMPLETED_STATES, TaskStatus, is_completed
from .task import Task, TaskCreate, TaskStatistics, TaskUpdate

__all__ = [
    # 枚举
    "TaskStatus",
    "COMPLETED_STATES",
    "is_completed",
    # Account
    "Account",
    "AccountView",
    # Task
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskStatistics",
]

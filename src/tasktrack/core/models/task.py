"""Task Domain Model

completed_at 当且仅当 status == done 时存在，由 TaskService 维护。
owner_id 创建后不可修改，TaskUpdate 不包含该字段。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import TaskStatus


class Task(BaseModel):
    """Task 数据模型"""

    task_id: str = Field(description="唯一标识，ULID 格式")
    title: str = Field(min_length=1, description="任务标题")
    description: str | None = Field(default=None, description="任务描述")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="当前状态")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")
    completed_at: datetime | None = Field(default=None, description="完成时间")
    owner_id: str = Field(description="所有者账户 ID")


class TaskCreate(BaseModel):
    """创建任务输入"""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, description="任务标题")
    description: str | None = Field(default=None, description="任务描述")
    status: TaskStatus | None = Field(default=None, description="初始状态，默认 pending")


class TaskUpdate(BaseModel):
    """更新任务输入（部分更新，仅显式提供的字段生效）"""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, description="任务标题")
    description: str | None = Field(default=None, description="任务描述")
    status: TaskStatus | None = Field(default=None, description="目标状态")
    completed_at: datetime | None = Field(default=None, description="完成时间")


class TaskStatistics(BaseModel):
    """按状态聚合的任务计数"""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    done: int = 0

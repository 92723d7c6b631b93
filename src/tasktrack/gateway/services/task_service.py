"""TaskService -- 任务 CRUD / 所有权校验 / 统计业务逻辑

所有单任务操作先经过 get_owned_task：
1. 任务不存在 -> NotFoundError
2. 调用者不是所有者 -> ForbiddenError

更新时按状态维护 completed_at：
- status == done 且未提供 completed_at -> 设为当前时间
- status 为其他值 -> 清空 completed_at（忽略同时提供的值）
- 未提供 status -> 规则不触发；completed_at 仅在任务已是 done 时生效
"""

from datetime import UTC, datetime
from typing import Any

import structlog
from tasktrack.core.exceptions import ForbiddenError, NotFoundError
from tasktrack.core.models import (
    Task,
    TaskCreate,
    TaskStatistics,
    TaskStatus,
    TaskUpdate,
    is_completed,
)
from tasktrack.core.store import StoreGroup

log = structlog.get_logger()

TASK_NOT_FOUND_MESSAGE = "task not found"
TASK_FORBIDDEN_MESSAGE = "access to this task is denied"


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def create_task(self, data: TaskCreate, owner_id: str) -> Task:
        """创建任务，status 默认 pending，所有者为当前账户"""
        status = data.status or TaskStatus.PENDING
        task = await self._stores.task_store.create_task(
            owner_id=owner_id,
            title=data.title,
            description=data.description,
            status=status,
            completed_at=datetime.now(UTC) if is_completed(status) else None,
        )
        log.info("task_created", task_id=task.task_id, status=task.status.value)
        return task

    async def list_tasks(self, owner_id: str) -> list[Task]:
        """查询所有者的任务列表，按 created_at 倒序"""
        return await self._stores.task_store.list_tasks_by_owner(owner_id)

    async def get_owned_task(self, task_id: str, owner_id: str) -> Task:
        """查询任务并校验所有权

        Raises:
            NotFoundError: 任务不存在
            ForbiddenError: 调用者不是所有者
        """
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND_MESSAGE)
        if task.owner_id != owner_id:
            log.warning("task_access_denied", task_id=task_id)
            raise ForbiddenError(TASK_FORBIDDEN_MESSAGE)
        return task

    async def update_task(self, task_id: str, data: TaskUpdate, owner_id: str) -> Task:
        """部分更新任务（先校验存在性与所有权）"""
        current = await self.get_owned_task(task_id, owner_id)

        changes = self._build_changes(current, data)
        updated = await self._stores.task_store.update_task(task_id, changes)
        if updated is None:
            # 校验与更新之间被删除
            raise NotFoundError(TASK_NOT_FOUND_MESSAGE)

        log.info(
            "task_updated",
            task_id=task_id,
            fields=sorted(changes),
            status=updated.status.value,
        )
        return updated

    async def delete_task(self, task_id: str, owner_id: str) -> None:
        """删除任务（先校验存在性与所有权）"""
        await self.get_owned_task(task_id, owner_id)
        deleted = await self._stores.task_store.delete_task(task_id)
        if not deleted:
            raise NotFoundError(TASK_NOT_FOUND_MESSAGE)
        log.info("task_deleted", task_id=task_id)

    async def get_statistics(self, owner_id: str) -> TaskStatistics:
        """按状态统计所有者的任务数量（每次实时计算）"""
        tasks = await self.list_tasks(owner_id)
        stats = TaskStatistics(total=len(tasks))
        for task in tasks:
            if task.status == TaskStatus.PENDING:
                stats.pending += 1
            elif task.status == TaskStatus.IN_PROGRESS:
                stats.in_progress += 1
            elif task.status == TaskStatus.DONE:
                stats.done += 1
        return stats

    @staticmethod
    def _build_changes(current: Task, data: TaskUpdate) -> dict[str, Any]:
        """将更新输入转换为列变更，并应用 completed_at 规则"""
        changes = data.model_dump(exclude_unset=True)

        # title 不可清空
        if changes.get("title", "") is None:
            changes.pop("title")

        status = changes.get("status")
        if "status" in changes and status is None:
            changes.pop("status")
            status = None

        if status is not None:
            if is_completed(status):
                if changes.get("completed_at") is None:
                    changes["completed_at"] = datetime.now(UTC)
            else:
                changes["completed_at"] = None
        elif "completed_at" in changes:
            # 未完成的任务不记录完成时间；已完成的任务不允许清空
            if not is_completed(current.status) or changes["completed_at"] is None:
                changes.pop("completed_at")

        return changes

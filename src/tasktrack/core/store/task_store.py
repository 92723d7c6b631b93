"""TaskStore SQLite 实现

只提供数据库操作；所有权校验与完成时间规则由 TaskService 负责。
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import aiosqlite
from ulid import ULID

from ..exceptions import NotFoundError
from ..models.enums import TaskStatus
from ..models.task import Task
from .sqlite_init import format_ts

_COLUMNS = (
    "task_id, title, description, status, created_at, updated_at, completed_at, owner_id"
)

# 允许部分更新的列（owner_id / created_at 不可修改）
_MUTABLE_COLUMNS = ("title", "description", "status", "completed_at")

OWNER_NOT_FOUND_MESSAGE = "owner account not found"


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(
        self,
        owner_id: str,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
        completed_at: datetime | None = None,
    ) -> Task:
        """创建任务记录，分配 task_id 与 created_at

        Raises:
            NotFoundError: owner_id 对应的账户不存在（外键约束）
        """
        now = datetime.now(UTC)
        task = Task(
            task_id=str(ULID()),
            title=title,
            description=description,
            status=status,
            created_at=now,
            updated_at=now,
            completed_at=completed_at,
            owner_id=owner_id,
        )
        try:
            await self._conn.execute(
                f"INSERT INTO tasks ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    task.task_id,
                    task.title,
                    task.description,
                    task.status.value,
                    format_ts(task.created_at),
                    format_ts(task.updated_at),
                    format_ts(task.completed_at),
                    task.owner_id,
                ),
            )
            await self._conn.commit()
        except aiosqlite.IntegrityError as e:
            await self._conn.rollback()
            raise NotFoundError(OWNER_NOT_FOUND_MESSAGE) from e
        except Exception:
            await self._conn.rollback()
            raise
        return task

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks_by_owner(self, owner_id: str) -> list[Task]:
        """查询所有者的任务列表，按 created_at 倒序"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE owner_id = ? "
            "ORDER BY created_at DESC, task_id DESC",
            (owner_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def update_task(self, task_id: str, changes: Mapping[str, Any]) -> Task | None:
        """部分更新任务字段，返回更新后的记录；任务不存在时返回 None

        Args:
            task_id: 任务 ID
            changes: 列名 -> 新值，仅接受可变列
        """
        unknown = set(changes) - set(_MUTABLE_COLUMNS)
        if unknown:
            raise ValueError(f"不可更新的字段: {sorted(unknown)}")

        assignments = ["updated_at = ?"]
        params: list[Any] = [format_ts(datetime.now(UTC))]
        for column in _MUTABLE_COLUMNS:
            if column not in changes:
                continue
            value = changes[column]
            if column == "completed_at":
                value = format_ts(value)
            elif column == "status" and value is not None:
                value = TaskStatus(value).value
            assignments.append(f"{column} = ?")
            params.append(value)
        params.append(task_id)

        try:
            cursor = await self._conn.execute(
                f"UPDATE tasks SET {', '.join(assignments)} WHERE task_id = ?",
                params,
            )
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise

        if cursor.rowcount == 0:
            return None
        return await self.get_task(task_id)

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，返回记录是否存在"""
        try:
            cursor = await self._conn.execute(
                "DELETE FROM tasks WHERE task_id = ?",
                (task_id,),
            )
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            task_id=row[0],
            title=row[1],
            description=row[2],
            status=row[3],
            created_at=datetime.fromisoformat(row[4]),
            updated_at=datetime.fromisoformat(row[5]),
            completed_at=datetime.fromisoformat(row[6]) if row[6] else None,
            owner_id=row[7],
        )

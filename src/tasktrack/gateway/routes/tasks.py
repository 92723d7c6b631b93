"""任务路由 -- 全部需要 Bearer 令牌

POST   /tasks: 创建任务（201）
GET    /tasks: 当前账户的任务列表，按 created_at 倒序
GET    /tasks/statistics: 按状态统计（必须注册在 /tasks/{task_id} 之前）
GET    /tasks/{task_id}: 任务详情（404 不存在 / 403 非所有者）
PUT    /tasks/{task_id}: 部分更新任务
DELETE /tasks/{task_id}: 删除任务（204）
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from starlette.responses import Response
from tasktrack.auth import SessionClaims
from tasktrack.core.models import Task, TaskCreate, TaskStatistics, TaskUpdate

from ..deps import get_current_identity, get_store_group
from ..services.task_service import TaskService

router = APIRouter()


class TaskResponse(BaseModel):
    """任务对外表示"""

    id: str
    title: str
    description: str | None
    status: str
    created_at: str
    updated_at: str
    completed_at: str | None
    owner_id: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.task_id,
            title=task.title,
            description=task.description,
            status=task.status.value,
            created_at=task.created_at.isoformat(),
            updated_at=task.updated_at.isoformat(),
            completed_at=task.completed_at.isoformat() if task.completed_at else None,
            owner_id=task.owner_id,
        )


@router.post("/tasks", status_code=201, response_model=TaskResponse)
async def create_task(
    body: TaskCreate,
    identity: SessionClaims = Depends(get_current_identity),
    store_group=Depends(get_store_group),
):
    """创建任务，所有者为当前账户"""
    service = TaskService(store_group)
    task = await service.create_task(body, identity.account_id)
    return TaskResponse.from_task(task)


@router.get("/tasks", response_model=list[TaskResponse])
async def list_tasks(
    identity: SessionClaims = Depends(get_current_identity),
    store_group=Depends(get_store_group),
):
    """查询当前账户的任务列表，最新的在前"""
    service = TaskService(store_group)
    tasks = await service.list_tasks(identity.account_id)
    return [TaskResponse.from_task(t) for t in tasks]


@router.get("/tasks/statistics", response_model=TaskStatistics)
async def get_statistics(
    identity: SessionClaims = Depends(get_current_identity),
    store_group=Depends(get_store_group),
):
    """按状态统计当前账户的任务"""
    service = TaskService(store_group)
    return await service.get_statistics(identity.account_id)


@router.get("/tasks/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    identity: SessionClaims = Depends(get_current_identity),
    store_group=Depends(get_store_group),
):
    """查询任务详情"""
    service = TaskService(store_group)
    task = await service.get_owned_task(task_id, identity.account_id)
    return TaskResponse.from_task(task)


@router.put("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    identity: SessionClaims = Depends(get_current_identity),
    store_group=Depends(get_store_group),
):
    """部分更新任务"""
    service = TaskService(store_group)
    task = await service.update_task(task_id, body, identity.account_id)
    return TaskResponse.from_task(task)


@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    identity: SessionClaims = Depends(get_current_identity),
    store_group=Depends(get_store_group),
):
    """删除任务"""
    service = TaskService(store_group)
    await service.delete_task(task_id, identity.account_id)
    return Response(status_code=204)

"""TraceMiddleware -- 任务级日志上下文

对 /tasks/{task_id} 路径绑定 task_id，贯穿该请求的全部日志。
/tasks/statistics 等字面量子路由不绑定。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

ULID_LENGTH = 26


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件 -- 为单任务操作绑定 task_id"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        task_id = extract_task_id(request.url.path)
        if task_id:
            structlog.contextvars.bind_contextvars(task_id=task_id)

        return await call_next(request)


def extract_task_id(path: str) -> str | None:
    """从 /tasks/{task_id} 提取 task_id（仅接受 ULID 长度的段）"""
    parts = [part for part in path.split("/") if part]
    for i, part in enumerate(parts):
        if part == "tasks" and i + 1 < len(parts):
            candidate = parts[i + 1]
            if len(candidate) == ULID_LENGTH:
                return candidate
    return None

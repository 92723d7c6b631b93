"""LoggingMiddleware -- 请求级日志

每个请求一个 request_id：沿用客户端传入的合法 X-Request-ID，否则生成 ULID。
request_id 绑定到 structlog contextvars，并在响应头中返回。
4xx 记为 warning，5xx 记为 error；未处理异常记录 request_failed 后继续抛出。
"""

import re
import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

# 允许透传的外部 request_id：字母数字与 -_.，最长 64
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_request_id(incoming: str | None) -> str:
    """沿用合法的外部 request_id，否则生成新的 ULID"""
    if incoming and _REQUEST_ID_PATTERN.match(incoming):
        return incoming
    return str(ULID())


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        started = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        log = structlog.get_logger()
        await log.ainfo("request_started")

        try:
            response = await call_next(request)
        except Exception:
            await log.aexception("request_failed", duration_ms=_elapsed_ms(started))
            raise

        if response.status_code >= 500:
            log_method = log.aerror
        elif response.status_code >= 400:
            log_method = log.awarning
        else:
            log_method = log.ainfo
        await log_method(
            "request_completed",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

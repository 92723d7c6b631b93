"""异常 -> HTTP 错误响应映射

错误响应统一格式: {"error": {"code": ..., "message": ...}}
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse
from tasktrack.core.exceptions import TaskTrackError, UnauthorizedError

log = structlog.get_logger()


def error_response(
    status_code: int,
    code: str,
    message: str,
    headers: dict[str, str] | None = None,
    details: list | None = None,
) -> JSONResponse:
    """构建统一错误响应"""
    error: dict = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error}, headers=headers)


async def handle_domain_error(request: Request, exc: TaskTrackError) -> JSONResponse:
    """领域异常 -> 对应状态码"""
    log.info("request_rejected", code=exc.code, status_code=exc.status_code)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return error_response(exc.status_code, exc.code, exc.message, headers=headers)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求校验失败 -> 400"""
    details = [
        {
            "loc": list(err.get("loc", ())),
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    return error_response(
        400,
        "VALIDATION_ERROR",
        "request validation failed",
        details=jsonable_encoder(details),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """注册异常处理器"""
    app.add_exception_handler(TaskTrackError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

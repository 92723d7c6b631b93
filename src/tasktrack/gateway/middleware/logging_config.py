"""structlog 配置模块

dev 模式：pretty print 可读输出
json 模式：结构化 JSON 输出

口令、摘要、令牌等字段在渲染前统一脱敏。
"""

import logging
import os
from collections.abc import MutableMapping
from typing import Any

import structlog

REDACTED = "***"

# 出现在日志事件中时必须脱敏的字段
SENSITIVE_KEYS = frozenset(
    {"password", "password_hash", "token", "authorization", "jwt_secret"}
)


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog 处理器：替换敏感字段的值"""
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def setup_logging() -> None:
    """初始化 structlog 配置

    环境变量:
        TASKTRACK_LOG_FORMAT: "json" 结构化输出；"dev"（默认）可读输出
        TASKTRACK_LOG_LEVEL: 日志级别（默认 INFO，非法值按 INFO 处理）
    """
    log_format = os.environ.get("TASKTRACK_LOG_FORMAT", "dev")
    log_level = getattr(
        logging,
        os.environ.get("TASKTRACK_LOG_LEVEL", "INFO").upper(),
        logging.INFO,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # uvicorn 等标准库日志走同一渲染器
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # 请求日志由 LoggingMiddleware 输出，uvicorn access 日志只保留告警
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 认证组件初始化 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from tasktrack.auth import PasswordHasher, TokenIssuer, load_auth_config
from tasktrack.core.config import get_db_path
from tasktrack.core.store import create_store_group

from .errors import register_exception_handlers
from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import auth, health, tasks

log = structlog.get_logger()


def init_auth_components(app: FastAPI) -> None:
    """加载认证配置并创建 PasswordHasher / TokenIssuer（进程内只读取一次）"""
    auth_config = load_auth_config()
    app.state.auth_config = auth_config
    app.state.password_hasher = PasswordHasher(auth_config.bcrypt_rounds)
    app.state.token_issuer = TokenIssuer.from_config(auth_config)
    log.info(
        "auth_initialized",
        bcrypt_rounds=auth_config.bcrypt_rounds,
        jwt_expires_s=auth_config.jwt_expires_s,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB 与认证组件，关闭时清理连接"""
    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group
    log.info("store_initialized", db_path=db_path)

    init_auth_components(app)

    yield

    await store_group.close()
    log.info("store_closed")


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="tasktrack API",
        version="0.1.0",
        description="任务管理 API：账户认证 + 个人任务管理",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    # 初始化日志
    setup_logging()

    # 注册路由
    app.include_router(auth.router, tags=["auth"])
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()

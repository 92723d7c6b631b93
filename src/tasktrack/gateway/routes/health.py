"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，验证 SQLite 连通性。
"""

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse
from tasktrack.core.config import SERVICE_NAME

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": SERVICE_NAME,
    }


@router.get("/ready")
async def ready(request: Request):
    """Readiness 检查 -- 验证数据库可用性"""
    checks = {}
    all_ok = True

    try:
        store_group = request.app.state.store_group
        cursor = await store_group.conn.execute("SELECT 1")
        await cursor.fetchone()
        checks["sqlite"] = "ok"
    except Exception as e:
        # 不向外暴露底层异常细节
        log.warning("readiness_sqlite_failed", error=str(e))
        checks["sqlite"] = "unavailable"
        all_ok = False

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
        },
    )

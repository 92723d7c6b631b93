"""集成测试共享 fixture -- 走真实 lifespan 初始化"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """集成测试用 FastAPI app（DB 与认证组件由 lifespan 创建）"""
    monkeypatch.setenv("TASKTRACK_DB_PATH", str(tmp_path / "sqlite" / "test.db"))
    monkeypatch.setenv("TASKTRACK_JWT_SECRET", "integration-secret")
    monkeypatch.setenv("TASKTRACK_BCRYPT_ROUNDS", "4")

    from tasktrack.gateway.main import create_app

    app = create_app()
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac

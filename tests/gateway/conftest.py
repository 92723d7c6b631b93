"""gateway 测试配置 -- 手动初始化的 FastAPI app + httpx AsyncClient"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import timedelta
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tasktrack.auth import PasswordHasher, TokenIssuer
from tasktrack.core.store import create_store_group

SignUp = Callable[..., Awaitable[dict]]


@pytest_asyncio.fixture
async def test_app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TASKTRACK_DB_PATH", str(tmp_path / "test.db"))

    from tasktrack.gateway.main import create_app

    app = create_app()

    # 手动初始化（绕过 lifespan）
    store_group = await create_store_group(str(tmp_path / "test.db"))
    app.state.store_group = store_group
    app.state.password_hasher = PasswordHasher(rounds=4)
    app.state.token_issuer = TokenIssuer(secret="test-secret", expires_in=timedelta(hours=1))

    yield app

    await store_group.close()


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def sign_up(client: AsyncClient) -> SignUp:
    """注册账户并返回 {"token", "account", "headers"}"""

    async def _sign_up(
        name: str = "Ana",
        email: str = "ana@example.com",
        password: str = "senha123",
    ) -> dict:
        resp = await client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        data = resp.json()
        data["headers"] = {"Authorization": f"Bearer {data['token']}"}
        return data

    return _sign_up

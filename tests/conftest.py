"""全局 pytest 配置 -- 临时 SQLite 数据库 fixture + 认证组件"""

from collections.abc import AsyncGenerator
from datetime import timedelta
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio
from tasktrack.auth import PasswordHasher, TokenIssuer
from tasktrack.core.store import StoreGroup

# 测试中使用最低 bcrypt 成本，避免拖慢用例
TEST_BCRYPT_ROUNDS = 4
TEST_JWT_SECRET = "test-secret"


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "test.db"


@pytest_asyncio.fixture
async def db_conn(tmp_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    from tasktrack.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_db_path))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def store_group(db_conn: aiosqlite.Connection) -> StoreGroup:
    """基于临时连接的 StoreGroup"""
    return StoreGroup(db_conn)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(secret=TEST_JWT_SECRET, expires_in=timedelta(hours=1))

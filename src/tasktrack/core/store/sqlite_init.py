"""SQLite 数据库初始化

PRAGMA 配置 + 两张表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

from datetime import UTC, datetime

import aiosqlite

# accounts 表 DDL
_ACCOUNTS_DDL = """
CREATE TABLE IF NOT EXISTS accounts (
    account_id     TEXT PRIMARY KEY,
    name           TEXT NOT NULL,
    email          TEXT NOT NULL,
    password_hash  TEXT NOT NULL,
    created_at     TEXT NOT NULL
);
"""

_ACCOUNTS_INDEXES = [
    # 邮箱唯一约束（并发注册时以此为准）
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_accounts_email ON accounts(email);",
]

# tasks 表 DDL
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    task_id       TEXT PRIMARY KEY,
    title         TEXT NOT NULL,
    description   TEXT,
    status        TEXT NOT NULL DEFAULT 'pending'
                  CHECK (status IN ('pending', 'in_progress', 'done')),
    created_at    TEXT NOT NULL,
    updated_at    TEXT NOT NULL,
    completed_at  TEXT,
    owner_id      TEXT NOT NULL,

    FOREIGN KEY (owner_id) REFERENCES accounts(account_id)
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_owner_id ON tasks(owner_id);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks(created_at DESC);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表
    await conn.execute(_ACCOUNTS_DDL)
    await conn.execute(_TASKS_DDL)

    # 创建索引
    for idx_sql in _ACCOUNTS_INDEXES + _TASKS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


def format_ts(value: datetime | None) -> str | None:
    """统一时间戳存储格式

    统一转换为 UTC 且固定微秒精度，保证字符串排序与时间顺序一致。
    无时区信息的时间按 UTC 处理。
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    else:
        value = value.astimezone(UTC)
    return value.isoformat(timespec="microseconds")

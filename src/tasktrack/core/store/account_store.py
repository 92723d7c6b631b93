"""AccountStore SQLite 实现

邮箱唯一性由 accounts.email 唯一索引保证；
插入前的查询只用于在未发生竞争时给出友好的冲突错误。
"""

from datetime import UTC, datetime

import aiosqlite
from ulid import ULID

from ..exceptions import ConflictError, NotFoundError
from ..models.account import Account
from .sqlite_init import format_ts

_COLUMNS = "account_id, name, email, password_hash, created_at"

EMAIL_IN_USE_MESSAGE = "email already in use"


class SqliteAccountStore:
    """AccountStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_account(self, name: str, email: str, password_hash: str) -> Account:
        """创建账户记录

        Raises:
            ConflictError: 邮箱已被注册
        """
        if await self.find_by_email(email) is not None:
            raise ConflictError(EMAIL_IN_USE_MESSAGE)

        account = Account(
            account_id=str(ULID()),
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
        )
        try:
            await self._conn.execute(
                f"INSERT INTO accounts ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                (
                    account.account_id,
                    account.name,
                    account.email,
                    account.password_hash,
                    format_ts(account.created_at),
                ),
            )
            await self._conn.commit()
        except aiosqlite.IntegrityError as e:
            await self._conn.rollback()
            # 并发注册：唯一索引兜底
            raise ConflictError(EMAIL_IN_USE_MESSAGE) from e
        except Exception:
            await self._conn.rollback()
            raise
        return account

    async def find_by_email(self, email: str) -> Account | None:
        """根据邮箱精确查询账户"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM accounts WHERE email = ?",
            (email,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_account(row)

    async def get_account(self, account_id: str) -> Account:
        """根据 account_id 查询账户

        Raises:
            NotFoundError: 账户不存在
        """
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM accounts WHERE account_id = ?",
            (account_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            raise NotFoundError("account not found")
        return self._row_to_account(row)

    async def count_accounts(self) -> int:
        """账户总数"""
        cursor = await self._conn.execute("SELECT COUNT(*) FROM accounts")
        row = await cursor.fetchone()
        return row[0]

    @staticmethod
    def _row_to_account(row: aiosqlite.Row) -> Account:
        """将数据库行转换为 Account 模型"""
        return Account(
            account_id=row[0],
            name=row[1],
            email=row[2],
            password_hash=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )

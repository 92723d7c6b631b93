"""SqliteAccountStore 测试

测试内容：
1. 创建账户 + 按邮箱/ID 查询
2. 重复邮箱返回 ConflictError，且不写入第二条记录
3. 唯一索引兜底（查询未命中但插入冲突）
"""

from unittest.mock import AsyncMock

import pytest
from tasktrack.core.exceptions import ConflictError, NotFoundError
from tasktrack.core.store import StoreGroup


class TestCreateAccount:
    async def test_create_and_find(self, store_group: StoreGroup):
        """创建后可以按邮箱与 ID 查询"""
        store = store_group.account_store
        account = await store.create_account("Ana", "ana@example.com", "$2b$04$digest")

        assert len(account.account_id) == 26
        assert account.created_at.tzinfo is not None

        by_email = await store.find_by_email("ana@example.com")
        assert by_email is not None
        assert by_email.account_id == account.account_id
        assert by_email.password_hash == "$2b$04$digest"

        by_id = await store.get_account(account.account_id)
        assert by_id.email == "ana@example.com"
        assert by_id.created_at == account.created_at

    async def test_find_unknown_email(self, store_group: StoreGroup):
        """未注册邮箱返回 None"""
        assert await store_group.account_store.find_by_email("nobody@example.com") is None

    async def test_get_unknown_account(self, store_group: StoreGroup):
        """不存在的 account_id 抛出 NotFoundError"""
        with pytest.raises(NotFoundError):
            await store_group.account_store.get_account("01HZZZZZZZZZZZZZZZZZZZZZZZ")

    async def test_email_match_is_exact(self, store_group: StoreGroup):
        """邮箱按原样匹配，不做大小写折叠"""
        store = store_group.account_store
        await store.create_account("Ana", "Ana@Example.com", "h")

        assert await store.find_by_email("ana@example.com") is None
        assert await store.find_by_email("Ana@Example.com") is not None


class TestEmailUniqueness:
    async def test_duplicate_email_conflict(self, store_group: StoreGroup):
        """重复邮箱抛出 ConflictError，账户数不变"""
        store = store_group.account_store
        await store.create_account("Ana", "ana@example.com", "h1")

        with pytest.raises(ConflictError) as exc_info:
            await store.create_account("Other", "ana@example.com", "h2")

        assert exc_info.value.message == "email already in use"
        assert await store.count_accounts() == 1

    async def test_unique_index_backstop(self, store_group: StoreGroup):
        """预查询未命中时由唯一索引兜底"""
        store = store_group.account_store
        await store.create_account("Ana", "ana@example.com", "h1")

        # 模拟并发：预查询看不到已存在的记录
        store.find_by_email = AsyncMock(return_value=None)

        with pytest.raises(ConflictError):
            await store.create_account("Other", "ana@example.com", "h2")

        assert await store.count_accounts() == 1

    async def test_store_usable_after_conflict(self, store_group: StoreGroup):
        """冲突回滚后连接仍可继续写入"""
        store = store_group.account_store
        await store.create_account("Ana", "ana@example.com", "h1")
        store.find_by_email = AsyncMock(return_value=None)
        with pytest.raises(ConflictError):
            await store.create_account("Other", "ana@example.com", "h2")

        await store.create_account("Bia", "bia@example.com", "h3")
        assert await store.count_accounts() == 2

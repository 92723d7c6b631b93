"""AuthService -- 注册/登录业务逻辑

注册：创建账户（口令摘要）-> 签发令牌 -> 返回令牌 + 账户视图。
登录：按邮箱查询 -> 校验口令 -> 签发令牌。
邮箱不存在与口令错误返回同一条消息，避免泄露邮箱是否已注册。
"""

import asyncio

import structlog
from pydantic import BaseModel
from tasktrack.auth import PasswordHasher, TokenIssuer
from tasktrack.core.exceptions import UnauthorizedError
from tasktrack.core.models import Account, AccountView
from tasktrack.core.store import StoreGroup

log = structlog.get_logger()

INVALID_CREDENTIALS_MESSAGE = "invalid credentials"


class AuthResult(BaseModel):
    """注册/登录结果"""

    token: str
    account: AccountView


class AuthService:
    """认证业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._stores = store_group
        self._hasher = hasher
        self._issuer = token_issuer

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        """注册新账户并签发令牌

        Raises:
            ConflictError: 邮箱已被注册
        """
        # bcrypt 为 CPU 密集操作，放到线程池执行
        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        account = await self._stores.account_store.create_account(
            name=name,
            email=email,
            password_hash=password_hash,
        )
        log.info("account_registered", account_id=account.account_id)
        return self._build_result(account)

    async def login(self, email: str, password: str) -> AuthResult:
        """校验凭据并签发令牌

        Raises:
            UnauthorizedError: 邮箱不存在或口令错误（同一消息）
        """
        account = await self._stores.account_store.find_by_email(email)
        if account is None:
            log.info("login_failed", reason="unknown_email")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        valid = await asyncio.to_thread(
            self._hasher.verify, password, account.password_hash
        )
        if not valid:
            log.info("login_failed", reason="wrong_password", account_id=account.account_id)
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        log.info("login_succeeded", account_id=account.account_id)
        return self._build_result(account)

    def _build_result(self, account: Account) -> AuthResult:
        token = self._issuer.issue(
            sub=account.account_id,
            email=account.email,
            name=account.name,
        )
        return AuthResult(token=token, account=account.to_view())

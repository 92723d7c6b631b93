"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store / 认证组件 / 当前身份

Store 与认证组件通过 app.state 管理，在 lifespan 中初始化/清理。
受保护路由通过 get_current_identity 获取调用者身份，并显式传给业务服务。
"""

import structlog
from fastapi import Request
from tasktrack.auth import PasswordHasher, SessionClaims, TokenInvalidError, TokenIssuer
from tasktrack.core.exceptions import NotFoundError, UnauthorizedError
from tasktrack.core.store import StoreGroup

BEARER_PREFIX = "Bearer "

NO_TOKEN_MESSAGE = "no token provided"
INVALID_TOKEN_MESSAGE = "invalid token"

log = structlog.get_logger()


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_password_hasher(request: Request) -> PasswordHasher:
    """从 app.state 获取 PasswordHasher 实例"""
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    """从 app.state 获取 TokenIssuer 实例"""
    return request.app.state.token_issuer


def extract_bearer_token(header: str | None) -> str | None:
    """从 Authorization 头提取 Bearer 令牌

    仅接受 "Bearer <token>" 形式（单个空格，scheme 区分大小写）；
    其他形式一律视为未提供令牌。
    """
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):]
    if not token or " " in token:
        return None
    return token


class AccessGate:
    """访问闸门 -- 校验 Bearer 令牌并返回身份声明"""

    def __init__(self, token_issuer: TokenIssuer) -> None:
        self._issuer = token_issuer

    def authenticate(self, authorization: str | None) -> SessionClaims:
        """校验 Authorization 头

        Raises:
            UnauthorizedError: 未提供令牌，或令牌无效/过期
        """
        token = extract_bearer_token(authorization)
        if token is None:
            raise UnauthorizedError(NO_TOKEN_MESSAGE)
        try:
            return self._issuer.verify(token)
        except TokenInvalidError as e:
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from e


async def get_current_identity(request: Request) -> SessionClaims:
    """受保护路由依赖：校验令牌，确认账户仍然存在，并把身份附加到请求上下文

    签名合法但 sub 对应的账户不存在（如数据库重建后的旧令牌）时，
    与无效令牌同样处理。
    """
    gate = AccessGate(get_token_issuer(request))
    claims = gate.authenticate(request.headers.get("Authorization"))
    try:
        await get_store_group(request).account_store.get_account(claims.account_id)
    except NotFoundError as e:
        log.warning("token_subject_unknown", account_id=claims.account_id)
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from e
    request.state.identity = claims
    structlog.contextvars.bind_contextvars(account_id=claims.account_id)
    return claims

"""TokenIssuer -- JWT 签发与校验

令牌无状态：每次请求重新校验签名与过期时间，不落库。
"""

from datetime import UTC, datetime, timedelta

import jwt
from pydantic import ValidationError

from .config import AuthConfig
from .exceptions import TokenInvalidError
from .models import SessionClaims

_REQUIRED_CLAIMS = ["sub", "email", "name", "exp"]


class TokenIssuer:
    """HS256 令牌签发器"""

    def __init__(
        self,
        secret: str,
        expires_in: timedelta,
        algorithm: str = "HS256",
    ) -> None:
        self._secret = secret
        self._expires_in = expires_in
        self._algorithm = algorithm

    @classmethod
    def from_config(cls, config: AuthConfig) -> "TokenIssuer":
        return cls(
            secret=config.jwt_secret.get_secret_value(),
            expires_in=timedelta(seconds=config.jwt_expires_s),
            algorithm=config.jwt_algorithm,
        )

    def issue(self, sub: str, email: str, name: str) -> str:
        """签发令牌

        Args:
            sub: 账户 ID
            email: 账户邮箱
            name: 账户显示名

        Returns:
            签名后的令牌字符串
        """
        now = datetime.now(UTC)
        payload = {
            "sub": sub,
            "email": email,
            "name": name,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> SessionClaims:
        """校验令牌并返回声明

        Raises:
            TokenInvalidError: 签名错误、格式错误、缺少声明或已过期
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
            return SessionClaims(**payload)
        except (jwt.PyJWTError, ValidationError) as e:
            # 过期与格式错误不区分，统一对外
            raise TokenInvalidError() from e

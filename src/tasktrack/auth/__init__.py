"""tasktrack Auth -- 口令摘要与会话令牌

packages 公开接口导出。
"""

# 配置
from .config import AuthConfig, load_auth_config

# 异常
from .exceptions import AuthError, TokenInvalidError

# 核心组件
from .hasher import PasswordHasher
from .models import SessionClaims
from .tokens import TokenIssuer

__all__ = [
    "AuthConfig",
    "load_auth_config",
    "AuthError",
    "TokenInvalidError",
    "PasswordHasher",
    "SessionClaims",
    "TokenIssuer",
]

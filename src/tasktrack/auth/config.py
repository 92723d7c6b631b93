"""AuthConfig -- 认证配置加载

从环境变量加载 JWT 签名密钥、令牌有效期与 bcrypt 轮数。
进程启动时读取一次，之后不再变化。
"""

import os

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()

DEFAULT_JWT_EXPIRES_S = 86400
DEFAULT_BCRYPT_ROUNDS = 10


class AuthConfig(BaseModel):
    """认证配置 -- 从环境变量加载

    环境变量:
        TASKTRACK_JWT_SECRET: JWT 签名密钥
        TASKTRACK_JWT_EXPIRES_S: 令牌有效期（秒，默认 86400）
        TASKTRACK_BCRYPT_ROUNDS: bcrypt 成本因子（默认 10）
    """

    jwt_secret: SecretStr = Field(
        default=SecretStr("tasktrack-dev-secret-change-me"),
        description="JWT HS256 签名密钥",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT 签名算法")
    jwt_expires_s: int = Field(
        default=DEFAULT_JWT_EXPIRES_S,
        ge=1,
        description="令牌有效期（秒）",
    )
    bcrypt_rounds: int = Field(
        default=DEFAULT_BCRYPT_ROUNDS,
        ge=4,
        le=31,
        description="bcrypt 成本因子",
    )


def load_auth_config() -> AuthConfig:
    """从环境变量加载认证配置

    环境变量映射:
        TASKTRACK_JWT_SECRET -> jwt_secret
        TASKTRACK_JWT_EXPIRES_S -> jwt_expires_s (默认 86400)
        TASKTRACK_BCRYPT_ROUNDS -> bcrypt_rounds (默认 10)

    Returns:
        AuthConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKTRACK_JWT_SECRET"):
        kwargs["jwt_secret"] = SecretStr(val)
    else:
        log.warning("jwt_secret_not_configured", message="使用开发环境默认密钥")

    if val := os.environ.get("TASKTRACK_JWT_EXPIRES_S"):
        try:
            kwargs["jwt_expires_s"] = int(val)
        except ValueError:
            log.warning(
                "invalid_auth_config",
                env_var="TASKTRACK_JWT_EXPIRES_S",
                value=val,
                fallback=DEFAULT_JWT_EXPIRES_S,
            )

    if val := os.environ.get("TASKTRACK_BCRYPT_ROUNDS"):
        try:
            kwargs["bcrypt_rounds"] = int(val)
        except ValueError:
            log.warning(
                "invalid_auth_config",
                env_var="TASKTRACK_BCRYPT_ROUNDS",
                value=val,
                fallback=DEFAULT_BCRYPT_ROUNDS,
            )
            # 使用默认值，不阻塞启动

    return AuthConfig(**kwargs)

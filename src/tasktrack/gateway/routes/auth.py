"""认证路由

POST /auth/register: 注册账户，返回 201 + 令牌 + 账户视图；邮箱已占用返回 409。
POST /auth/login: 登录，返回 200 + 令牌 + 账户视图；凭据错误返回 401。
"""

from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..deps import get_password_hasher, get_store_group, get_token_issuer
from ..services.auth_service import AuthResult, AuthService

router = APIRouter()

PASSWORD_MIN_LENGTH = 6
# bcrypt 只接受 72 字节以内的口令
PASSWORD_MAX_BYTES = 72


def check_email(value: str) -> str:
    """校验邮箱格式（不查询 DNS），返回原始字符串

    不使用规范化结果：邮箱按注册时的原样存储与匹配。
    """
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e)) from e
    return value


class RegisterRequest(BaseModel):
    """注册请求体"""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="显示名")
    email: str = Field(description="邮箱")
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, description="口令（至少 6 位）")

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, value: str) -> str:
        return check_email(value)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    """登录请求体"""

    model_config = ConfigDict(extra="forbid")

    email: str = Field(description="邮箱")
    password: str = Field(min_length=1, description="口令")

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, value: str) -> str:
        return check_email(value)


def _build_service(
    store_group=Depends(get_store_group),
    hasher=Depends(get_password_hasher),
    token_issuer=Depends(get_token_issuer),
) -> AuthService:
    return AuthService(store_group, hasher, token_issuer)


@router.post("/auth/register", status_code=201, response_model=AuthResult)
async def register(
    body: RegisterRequest,
    service: AuthService = Depends(_build_service),
):
    """注册账户并签发令牌"""
    return await service.register(body.name, body.email, body.password)


@router.post("/auth/login", response_model=AuthResult)
async def login(
    body: LoginRequest,
    service: AuthService = Depends(_build_service),
):
    """校验凭据并签发令牌"""
    return await service.login(body.email, body.password)

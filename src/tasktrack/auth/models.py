"""认证数据模型"""

from pydantic import BaseModel, Field


class SessionClaims(BaseModel):
    """令牌声明 -- 校验通过后附加到请求上下文的身份信息"""

    sub: str = Field(description="账户 ID")
    email: str = Field(description="账户邮箱（冗余声明）")
    name: str = Field(description="账户显示名（冗余声明）")
    iat: int | None = Field(default=None, description="签发时间（Unix 秒）")
    exp: int = Field(description="过期时间（Unix 秒）")

    @property
    def account_id(self) -> str:
        return self.sub

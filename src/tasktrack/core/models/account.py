"""Account Domain Model

口令摘要只存在于 Account，不出现在对外视图 AccountView 中。
"""

from datetime import datetime

from pydantic import BaseModel, Field


class Account(BaseModel):
    """账户数据模型"""

    account_id: str = Field(description="唯一标识，ULID 格式")
    name: str = Field(min_length=1, description="显示名")
    email: str = Field(min_length=1, description="邮箱（唯一，区分大小写）")
    password_hash: str = Field(description="bcrypt 口令摘要")
    created_at: datetime = Field(description="创建时间")

    def to_view(self) -> "AccountView":
        return AccountView(id=self.account_id, name=self.name, email=self.email)


class AccountView(BaseModel):
    """账户对外视图（不含口令摘要）"""

    id: str
    name: str
    email: str

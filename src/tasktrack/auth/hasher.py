"""PasswordHasher -- bcrypt 口令摘要

hash: 生成带盐摘要（盐与成本因子内嵌在摘要字符串中）。
verify: 空口令/空摘要直接返回 False，不调用 bcrypt。
"""

import bcrypt

from .config import DEFAULT_BCRYPT_ROUNDS


class PasswordHasher:
    """bcrypt 口令摘要器"""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, secret: str) -> str:
        """生成口令摘要"""
        digest = bcrypt.hashpw(secret.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds))
        return digest.decode("ascii")

    def verify(self, secret: str | None, digest: str | None) -> bool:
        """校验口令与摘要是否匹配

        Args:
            secret: 明文口令
            digest: 已存储的摘要

        Returns:
            True 如果匹配；任一参数为空或摘要格式非法时返回 False
        """
        if not secret or not digest:
            return False
        try:
            return bcrypt.checkpw(secret.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            # 摘要不是合法的 bcrypt 字符串
            return False

"""TokenIssuer 单元测试

测试内容：
1. 签发的令牌可以校验通过并还原声明
2. 篡改、错误密钥、过期、缺少声明的令牌被拒绝
3. 过期与格式错误使用同一异常和消息
"""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from pydantic import SecretStr
from tasktrack.auth import AuthConfig, SessionClaims, TokenInvalidError, TokenIssuer

SECRET = "test-secret"


def _flip_char(token: str, index: int) -> str:
    """替换令牌中的一个字符"""
    replacement = "A" if token[index] != "A" else "B"
    return token[:index] + replacement + token[index + 1:]


class TestIssueAndVerify:
    def test_roundtrip_claims(self, token_issuer: TokenIssuer):
        """签发后校验得到原始声明"""
        token = token_issuer.issue(sub="01ACCOUNT", email="ana@example.com", name="Ana")
        claims = token_issuer.verify(token)

        assert isinstance(claims, SessionClaims)
        assert claims.sub == "01ACCOUNT"
        assert claims.account_id == "01ACCOUNT"
        assert claims.email == "ana@example.com"
        assert claims.name == "Ana"
        assert claims.exp > claims.iat

    def test_expiry_from_config(self):
        """有效期来自配置"""
        issuer = TokenIssuer.from_config(
            AuthConfig(jwt_secret=SecretStr(SECRET), jwt_expires_s=120)
        )
        claims = issuer.verify(issuer.issue(sub="x", email="x@example.com", name="X"))
        assert claims.exp - claims.iat == 120

    def test_tampered_signature_rejected(self, token_issuer: TokenIssuer):
        """签名段被修改后校验失败"""
        token = token_issuer.issue(sub="01ACCOUNT", email="ana@example.com", name="Ana")
        # 签名段中间的字符（避开末尾的 base64 填充位）
        signature_start = token.rindex(".") + 1
        tampered = _flip_char(token, signature_start + 5)

        with pytest.raises(TokenInvalidError):
            token_issuer.verify(tampered)

    def test_tampered_payload_rejected(self, token_issuer: TokenIssuer):
        """载荷段被修改后校验失败"""
        token = token_issuer.issue(sub="01ACCOUNT", email="ana@example.com", name="Ana")
        payload_start = token.index(".") + 1
        tampered = _flip_char(token, payload_start + 3)

        with pytest.raises(TokenInvalidError):
            token_issuer.verify(tampered)

    def test_wrong_secret_rejected(self, token_issuer: TokenIssuer):
        """其他密钥签发的令牌被拒绝"""
        other = TokenIssuer(secret="another-secret", expires_in=timedelta(hours=1))
        token = other.issue(sub="01ACCOUNT", email="ana@example.com", name="Ana")

        with pytest.raises(TokenInvalidError):
            token_issuer.verify(token)

    def test_expired_token_rejected(self, token_issuer: TokenIssuer):
        """过期令牌被拒绝"""
        past = datetime.now(UTC) - timedelta(hours=2)
        token = jwt.encode(
            {
                "sub": "01ACCOUNT",
                "email": "ana@example.com",
                "name": "Ana",
                "iat": past,
                "exp": past + timedelta(hours=1),
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError):
            token_issuer.verify(token)

    def test_missing_claim_rejected(self, token_issuer: TokenIssuer):
        """缺少 email/name 声明的令牌被拒绝"""
        token = jwt.encode(
            {"sub": "01ACCOUNT", "exp": datetime.now(UTC) + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError):
            token_issuer.verify(token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_rejected(self, token_issuer: TokenIssuer, token: str):
        """格式错误的令牌被拒绝"""
        with pytest.raises(TokenInvalidError):
            token_issuer.verify(token)

    def test_expired_and_malformed_indistinguishable(self, token_issuer: TokenIssuer):
        """过期与格式错误对外表现一致"""
        past = datetime.now(UTC) - timedelta(hours=2)
        expired = jwt.encode(
            {"sub": "a", "email": "a@example.com", "name": "A", "exp": past},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError) as expired_info:
            token_issuer.verify(expired)
        with pytest.raises(TokenInvalidError) as malformed_info:
            token_issuer.verify("garbage")

        assert str(expired_info.value) == str(malformed_info.value)

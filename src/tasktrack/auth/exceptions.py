"""认证组件异常体系"""


class AuthError(Exception):
    """认证包基础异常"""


class TokenInvalidError(AuthError):
    """令牌无效

    签名不匹配、格式错误、缺少声明或已过期统一归为此异常，
    调用方无法区分具体原因。
    """

    def __init__(self, message: str = "invalid token") -> None:
        super().__init__(message)

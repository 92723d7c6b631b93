"""领域异常体系

每个异常携带对外错误码与 HTTP 状态码，由 gateway 统一映射为错误响应。
"""


class TaskTrackError(Exception):
    """领域基础异常"""

    code: str = "INTERNAL_ERROR"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConflictError(TaskTrackError):
    """资源冲突（邮箱已被注册）"""

    code = "CONFLICT"
    status_code = 409


class UnauthorizedError(TaskTrackError):
    """未认证：缺少/无效令牌，或登录凭据错误

    登录失败统一使用同一条消息，避免泄露邮箱是否已注册。
    """

    code = "UNAUTHORIZED"
    status_code = 401


class ForbiddenError(TaskTrackError):
    """已认证但不是资源所有者"""

    code = "FORBIDDEN"
    status_code = 403


class NotFoundError(TaskTrackError):
    """资源不存在"""

    code = "NOT_FOUND"
    status_code = 404

"""
核心层异常

服务层抛出带业务错误码的异常，由 API 层统一转换为响应
"""


class ClipGraphError(Exception):
    """核心层异常基类"""

    status_code = 500
    default_code = "INTERNAL_ERROR"

    def __init__(self, code: str = None, message: str = ""):
        self.code = code or self.default_code
        self.message = message
        super().__init__(message or self.code)

    def to_error(self) -> dict:
        return {"code": self.code, "message": self.message}


class NotFoundError(ClipGraphError):
    """引用的用户/视频/评论不存在或已失效"""

    status_code = 404
    default_code = "NOT_FOUND"


class InvalidOperationError(ClipGraphError):
    """非法操作（关注自己、分页参数错误等）"""

    status_code = 400
    default_code = "INVALID_OPERATION"


class ConflictError(ClipGraphError):
    """并发写入触发唯一约束冲突"""

    status_code = 409
    default_code = "CONFLICT"


class UnavailableError(ClipGraphError):
    """存储不可用，整页请求失败"""

    status_code = 503
    default_code = "UNAVAILABLE"

"""
业务异常定义

服务层抛出这些异常，由 main.py 中注册的异常处理器统一转换为
{success: false, message: ...} 响应。
"""


class AppError(Exception):
    """业务异常基类"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """请求参数错误"""

    status_code = 400


class LoginFailedError(AppError):
    """登录失败（与参数错误一样返回 400）"""

    status_code = 400


class AuthenticationError(AppError):
    """未登录或会话无效"""

    status_code = 401


class PermissionDeniedError(AppError):
    """无权限"""

    status_code = 403


class NotFoundError(AppError):
    """记录不存在"""

    status_code = 404


class ConflictError(AppError):
    """唯一键冲突"""

    status_code = 409


class ConfigError(AppError):
    """配置文件缺失或格式错误"""

    status_code = 500

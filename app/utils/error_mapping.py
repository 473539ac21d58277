"""砚台 - 异常与 HTTP 状态码映射.

该模块属于 HTTP 边界适配层,用于将异常转换为对外 HTTP 状态码.
`app/core/exceptions.py` 只负责定义异常类型与元数据,不感知 Flask/Werkzeug 等框架细节.
"""

from __future__ import annotations

from werkzeug.exceptions import HTTPException

from app.constants import HttpStatus
from app.core.exceptions import AppError, NotFoundError, ValidationError

_EXCEPTION_STATUS_MAP: tuple[tuple[type[Exception], int], ...] = (
    (ValidationError, HttpStatus.BAD_REQUEST),
    (NotFoundError, HttpStatus.NOT_FOUND),
)


def map_exception_to_status(error: Exception, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """根据异常类型推导 HTTP 状态码.

    Args:
        error: 捕获到的异常对象.
        default: 无法匹配时的默认状态码.

    Returns:
        int: 与异常对应的 HTTP 状态码.

    """
    for exc_type, status in _EXCEPTION_STATUS_MAP:
        if isinstance(error, exc_type):
            return int(status)

    if isinstance(error, AppError):
        return int(default)

    if isinstance(error, HTTPException):
        code = getattr(error, "code", None)
        if code is not None:
            return int(code)

    return int(default)


__all__ = ["map_exception_to_status"]

"""框架扩展协议与运行期挂载属性类型声明.

集中管理 Flask 应用在运行期挂载的扩展/属性,为 Pyright 提供静态类型支持.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from flask import Flask

from app.types.structures import LoggerExtra
from app.utils.logging.error_adapter import ErrorContext


class EnhancedErrorHandler(Protocol):
    """增强错误处理器调用协议."""

    def __call__(
        self,
        error: Exception,
        context: ErrorContext | None = None,
        *,
        extra: LoggerExtra | None = None,
    ) -> Mapping[str, object]:
        """处理异常并返回序列化后的错误载荷."""
        ...


class InkstoneFlask(Flask):
    """砚台定制的 Flask 子类,补充运行期挂载的扩展属性."""

    enhanced_error_handler: EnhancedErrorHandler


__all__ = [
    "EnhancedErrorHandler",
    "InkstoneFlask",
]

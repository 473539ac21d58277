"""砚台 - 类型定义集中导出."""

from __future__ import annotations

from flask.typing import ResponseReturnValue

from app.types.structures import (
    ContextDict,
    ContextMapping,
    ContextValue,
    JsonDict,
    JsonValue,
    LoggerExtra,
    RouteSafetyOptions,
    ScalarValue,
    StructlogEventDict,
)

# 统一路由返回值类型,涵盖字符串、Response 及包含状态码/头部的元组。
RouteReturn = ResponseReturnValue

__all__ = [
    "ContextDict",
    "ContextMapping",
    "ContextValue",
    "JsonDict",
    "JsonValue",
    "LoggerExtra",
    "RouteReturn",
    "RouteSafetyOptions",
    "ScalarValue",
    "StructlogEventDict",
]

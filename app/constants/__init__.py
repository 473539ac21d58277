"""常量模块。

集中管理所有系统常量，包括错误消息、HTTP 状态码、Flash 类别与资源类型等。

主要常量：
- ErrorMessages: 错误消息常量
- HttpStatus: HTTP 状态码常量
- FlashCategory: 页面提示类别
- ResourceType: 资源类型(数据源/事件)
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

# 导入Flash类别常量
from .flash_categories import FlashCategory

# 导入资源类型常量
from .resource_types import (
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    SORTING_CONFIG_GROUP,
    ResourceSortField,
    ResourceType,
    SortOrder,
)

# 导入所有系统常量
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
)

__all__ = [
    "DEFAULT_SORT_FIELD",
    "DEFAULT_SORT_ORDER",
    "SORTING_CONFIG_GROUP",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "FlashCategory",
    "HttpStatus",
    "ResourceSortField",
    "ResourceType",
    "SortOrder",
]

"""砚台 - 系统常量定义."""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    BUSINESS = "business"
    FILESYSTEM = "filesystem"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 错误消息常量
class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"
    RESOURCE_NOT_FOUND = "资源不存在"
    INVALID_REQUEST = "无效的请求"
    MISSING_REQUIRED_FIELDS = "缺少必需字段: {fields}"

    # 资源错误
    INVALID_RESOURCE_TYPE = "无效的资源类型: {value}"
    INVALID_RESOURCE_HANDLE = "无效的资源标识: {value}"
    INVALID_SORT_FIELD = "不支持的排序字段: {value}"
    TEMPLATE_NOT_FOUND = "模板不存在: {name}"

    # 文件错误
    FILE_DELETE_FAILED = "删除 {file} 失败."
    CHECK_DIRECTORY_PERMISSIONS = "请检查 {folder} 的权限"


# 导出所有常量
__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
]

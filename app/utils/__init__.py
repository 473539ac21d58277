"""工具模块.

包含各种实用工具和辅助函数,提供通用的功能支持.

主要工具:
- time_utils: 时间处理工具
- structlog_config: 结构化日志配置
- error_mapping: 异常到 HTTP 状态码的映射
- response_utils: 统一错误响应
"""

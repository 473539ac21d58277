"""统一时间处理工具模块.

基于 zoneinfo 提供一致的时间处理功能.
"""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from app.utils.structlog_config import get_system_logger

UTC_TZ = ZoneInfo("UTC")


class TimeFormats:
    """时间格式常量."""

    DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
    DATE_FORMAT = "%Y-%m-%d"


class TimeUtils:
    """统一时间处理工具类."""

    @staticmethod
    def now() -> datetime:
        """获取当前 UTC 时间.

        Returns:
            带 UTC 时区信息的当前时间.

        """
        return datetime.now(UTC)

    @staticmethod
    def to_utc(dt: str | date | datetime | None) -> datetime | None:
        """将时间转换为 UTC 时区.

        Args:
            dt: 待转换的时间,可以是 ISO 字符串、date 或 datetime 对象.

        Returns:
            转换后的 UTC 时区时间,转换失败时返回 None.

        """
        if not dt:
            return None

        try:
            if isinstance(dt, str):
                if dt.endswith("Z"):
                    dt = dt[:-1] + "+00:00"
                dt = datetime.fromisoformat(dt)
            elif isinstance(dt, date) and not isinstance(dt, datetime):
                dt = datetime.combine(dt, datetime.min.time())

            if dt.tzinfo is None:
                # 没有时区信息时按 UTC 处理
                dt = dt.replace(tzinfo=UTC_TZ)

            return dt.astimezone(UTC_TZ)
        except (ValueError, TypeError) as e:
            get_system_logger().warning(f"时间转换错误: {e}")
            return None

    @staticmethod
    def format_utc_time(dt: str | date | datetime | None, format_str: str = TimeFormats.DATETIME_FORMAT) -> str:
        """格式化 UTC 时间显示.

        Args:
            dt: 待格式化的日期时间对象或 ISO 字符串.
            format_str: strftime 兼容格式,默认为 `%Y-%m-%d %H:%M:%S`.

        Returns:
            成功时返回格式化后的 UTC 字符串;转换失败时返回 `-`.

        """
        utc_dt = TimeUtils.to_utc(dt)
        if not utc_dt:
            return "-"

        try:
            return utc_dt.strftime(format_str)
        except (ValueError, TypeError):
            return "-"


time_utils = TimeUtils()

"""资源类型常量.

数据源(Datasource)与事件(Event)两类可挂载到页面的资源,
以及资源索引页的排序相关常量.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ResourceType(str, Enum):
    """资源类型枚举."""

    EVENT = "event"
    DATASOURCE = "datasource"

    @property
    def column(self) -> str:
        """配置与挂载记录使用的列名前缀."""
        return _COLUMNS[self]

    @property
    def directory(self) -> str:
        """驱动文件所在的 workspace 子目录."""
        return _DIRECTORIES[self]

    @property
    def driver_prefix(self) -> str:
        """驱动文件名前缀,例如 ``data.`` 或 ``event.``."""
        return _DRIVER_PREFIXES[self]

    @property
    def context(self) -> str:
        """索引页的 URL 上下文,通知扩展时使用."""
        return f"/blueprints/{self.column}/"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_column(cls, column: str) -> ResourceType | None:
        """根据 URL 片段(``datasources``/``events``)解析资源类型."""
        for resource_type, value in _COLUMNS.items():
            if value == column:
                return resource_type
        return None

    @classmethod
    def parse(cls, value: object) -> ResourceType | None:
        """宽松解析资源类型,支持枚举值与列名两种写法."""
        if isinstance(value, ResourceType):
            return value
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        for resource_type in cls:
            if normalized == resource_type.value:
                return resource_type
        return cls.from_column(normalized)


_COLUMNS: dict[ResourceType, str] = {
    ResourceType.EVENT: "events",
    ResourceType.DATASOURCE: "datasources",
}

_DIRECTORIES: dict[ResourceType, str] = {
    ResourceType.EVENT: "events",
    ResourceType.DATASOURCE: "data-sources",
}

_DRIVER_PREFIXES: dict[ResourceType, str] = {
    ResourceType.EVENT: "event.",
    ResourceType.DATASOURCE: "data.",
}

_LABELS: dict[ResourceType, str] = {
    ResourceType.EVENT: "事件",
    ResourceType.DATASOURCE: "数据源",
}


class SortOrder:
    """排序方向常量."""

    ASC = "asc"
    DESC = "desc"

    ALL: ClassVar[tuple[str, ...]] = (ASC, DESC)

    @classmethod
    def normalize(cls, value: str | None) -> str | None:
        """除 ``desc`` 以外的取值一律视为 ``asc``,``None`` 保持不变."""
        if value is None:
            return None
        return cls.DESC if value.strip().lower() == cls.DESC else cls.ASC

    @classmethod
    def toggle(cls, value: str) -> str:
        return cls.ASC if value == cls.DESC else cls.DESC


class ResourceSortField:
    """资源索引页可排序的字段."""

    NAME = "name"
    SOURCE = "source"
    RELEASE_DATE = "release-date"
    AUTHOR = "author"

    ALL: ClassVar[tuple[str, ...]] = (NAME, SOURCE, RELEASE_DATE, AUTHOR)


DEFAULT_SORT_FIELD = ResourceSortField.NAME
DEFAULT_SORT_ORDER = SortOrder.ASC
SORTING_CONFIG_GROUP = "sorting"

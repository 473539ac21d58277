"""资源索引页相关的类型定义.

描述资源记录、页面标题、处理结果(重定向/渲染)等在服务层与路由层之间传递的结构.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ResourceAuthor:
    """资源作者信息."""

    name: str
    website: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class ResourceSource:
    """数据源的来源信息."""

    name: str
    handle: str


@dataclass(frozen=True, slots=True)
class ResourceRecord:
    """索引页中的一条资源记录.

    Attributes:
        handle: 资源唯一标识.
        name: 显示名称.
        author: 作者信息.
        version: 版本号.
        release_date: 发布日期(ISO 字符串).
        source: 数据源来源,事件资源恒为 None.
    """

    handle: str
    name: str
    author: ResourceAuthor
    version: str | None = None
    release_date: str | None = None
    source: ResourceSource | None = None

    def field_value(self, key: str) -> str | None:
        """按字段名读取可比较的字符串值,用于过滤与排序."""
        if key == "handle":
            return self.handle
        if key == "name":
            return self.name
        if key == "author":
            return self.author.name
        if key == "version":
            return self.version
        if key == "release-date":
            return self.release_date
        if key == "source":
            return self.source.name if self.source else None
        return None


@dataclass(frozen=True, slots=True)
class PageTitle:
    """页面 id 与解析后的完整标题."""

    id: int
    title: str


@dataclass(frozen=True, slots=True)
class PageAlert:
    """需要展示给用户的页面提示."""

    message: str
    category: str


@dataclass(frozen=True, slots=True)
class SortedResources:
    """排序后的资源列表以及实际生效的排序字段/方向."""

    resources: list[ResourceRecord]
    sort: str
    order: str


@dataclass(slots=True)
class BulkActionReport:
    """批量操作未重定向时返回的结果."""

    alerts: list[PageAlert] = field(default_factory=list)

    @property
    def has_failure(self) -> bool:
        return bool(self.alerts)


@dataclass(frozen=True, slots=True)
class Redirect:
    """要求外层框架重定向到指定 URL,本次请求不再渲染."""

    url: str


@dataclass(frozen=True, slots=True)
class Rendered(Generic[T]):
    """要求外层框架使用 data 渲染页面."""

    data: T


SortOutcome: TypeAlias = Redirect | Rendered[SortedResources]
BulkActionOutcome: TypeAlias = Redirect | Rendered[BulkActionReport]


__all__ = [
    "BulkActionOutcome",
    "BulkActionReport",
    "PageAlert",
    "PageTitle",
    "Redirect",
    "Rendered",
    "ResourceAuthor",
    "ResourceRecord",
    "ResourceSource",
    "SortOutcome",
    "SortedResources",
]

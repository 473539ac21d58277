"""资源管理服务.

统一管理数据源与事件两类资源:
- 通过 DriverManager 读取驱动文件元信息
- 通过 ConfigStore 读写索引页排序偏好
- 通过 PageResourcesRepository 维护资源与页面的挂载关系

本服务不 commit, 事务边界在路由层.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from app.constants import (
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    SORTING_CONFIG_GROUP,
    ErrorMessages,
    ResourceSortField,
    ResourceType,
    SortOrder,
)
from app.core.exceptions import NotFoundError
from app.infra.config_store import ConfigStore
from app.repositories.page_resources_repository import PageResourcesRepository
from app.services.pages.page_manager import PageManager
from app.services.resources.drivers import DriverManager
from app.types.resources import PageTitle, ResourceRecord


def _sort_key(value: str | None) -> tuple[int, str]:
    # 空值排在最前
    if not value:
        return (0, "")
    return (1, value.casefold())


def parse_order_by(order_by: str | None) -> tuple[str, str] | None:
    """解析 ``"<字段> <方向>"`` 形式的排序子句."""
    if not order_by:
        return None
    parts = order_by.split()
    if not parts:
        return None
    field = parts[0]
    direction = SortOrder.normalize(parts[1]) if len(parts) > 1 else SortOrder.ASC
    return field, direction or SortOrder.ASC


class ResourceManager:
    """数据源/事件资源管理服务."""

    def __init__(
        self,
        config_store: ConfigStore,
        workspace_dir: str | Path,
        page_manager: PageManager | None = None,
        attachments: PageResourcesRepository | None = None,
    ) -> None:
        self.config_store = config_store
        self.workspace_dir = Path(workspace_dir)
        self.page_manager = page_manager or PageManager()
        self._attachments = attachments or PageResourcesRepository()

    def resolve_manager_for_type(self, resource_type: ResourceType) -> DriverManager:
        return DriverManager(resource_type, self.workspace_dir / resource_type.directory)

    # ------------------------------------------------------------------
    # 排序偏好
    # ------------------------------------------------------------------
    @staticmethod
    def _sort_field_key(resource_type: ResourceType) -> str:
        return f"{resource_type.column}_index_sortby"

    @staticmethod
    def _sort_order_key(resource_type: ResourceType) -> str:
        return f"{resource_type.column}_index_order"

    def reload_sorting_preferences(self) -> None:
        """重新读取配置文件, 获取其他进程写入的排序偏好."""
        self.config_store.reload()

    def get_sorting_field(self, resource_type: ResourceType) -> str:
        value = self.config_store.get(self._sort_field_key(resource_type), SORTING_CONFIG_GROUP)
        return str(value) if value else DEFAULT_SORT_FIELD

    def set_sorting_field(self, resource_type: ResourceType, field: str, persist: bool = True) -> None:
        """保存排序字段, persist 为 False 时只修改内存, 等待后续写入."""
        self.config_store.set(self._sort_field_key(resource_type), field, SORTING_CONFIG_GROUP)
        if persist:
            self.config_store.write()

    def get_sorting_order(self, resource_type: ResourceType) -> str:
        value = self.config_store.get(self._sort_order_key(resource_type), SORTING_CONFIG_GROUP)
        return SortOrder.normalize(str(value)) if value else DEFAULT_SORT_ORDER

    def set_sorting_order(self, resource_type: ResourceType, order: str, persist: bool = True) -> None:
        normalized = SortOrder.normalize(order) or DEFAULT_SORT_ORDER
        self.config_store.set(self._sort_order_key(resource_type), normalized, SORTING_CONFIG_GROUP)
        if persist:
            self.config_store.write()

    # ------------------------------------------------------------------
    # 资源读取
    # ------------------------------------------------------------------
    def fetch(
        self,
        resource_type: ResourceType,
        filters: Mapping[str, str] | None = None,
        excludes: Iterable[str] | None = None,
        order_by: str | None = None,
    ) -> list[ResourceRecord]:
        """读取资源列表.

        Args:
            resource_type: 资源类型.
            filters: 字段等值过滤, 例如 ``{"author": "Jane"}``.
            excludes: 需要排除的 handle.
            order_by: ``"<字段> <asc|desc>"``, 字段不可排序时保持 handle 升序.

        Returns:
            过滤并排序后的资源记录.

        """
        records = self.resolve_manager_for_type(resource_type).list_all()

        excluded = set(excludes or ())
        if excluded:
            records = [record for record in records if record.handle not in excluded]
        for key, expected in (filters or {}).items():
            records = [record for record in records if record.field_value(key) == expected]

        records.sort(key=lambda record: record.handle)
        parsed = parse_order_by(order_by)
        if parsed is not None:
            field, direction = parsed
            if field in ResourceSortField.ALL:
                # 稳定排序, 相同取值保持 handle 升序
                records.sort(
                    key=lambda record: _sort_key(record.field_value(field)),
                    reverse=direction == SortOrder.DESC,
                )
        return records

    def resolve_driver_path(self, resource_type: ResourceType, handle: str) -> Path:
        return self.resolve_manager_for_type(resource_type).get_driver_path(handle)

    # ------------------------------------------------------------------
    # 页面挂载
    # ------------------------------------------------------------------
    def get_attached_pages(self, resource_type: ResourceType, handle: str) -> list[PageTitle]:
        """返回挂载了该资源的页面及其层级标题."""
        pages: list[PageTitle] = []
        for page_id in self._attachments.list_attached_page_ids(resource_type, handle):
            title = self.page_manager.resolve_page_title(page_id)
            if title is not None:
                pages.append(PageTitle(id=page_id, title=title))
        return pages

    def attach(self, resource_type: ResourceType, handle: str, page_id: int) -> bool:
        """挂载资源到页面, 页面不存在时抛出 NotFoundError."""
        if not self.page_manager.page_exists(page_id):
            raise NotFoundError(
                ErrorMessages.RESOURCE_NOT_FOUND,
                extra={"page_id": page_id, "resource_type": resource_type.value},
            )
        return self._attachments.attach(resource_type, handle, page_id)

    def detach(self, resource_type: ResourceType, handle: str, page_id: int) -> bool:
        return self._attachments.detach(resource_type, handle, page_id)


__all__ = ["ResourceManager", "parse_order_by"]

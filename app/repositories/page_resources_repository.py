"""页面资源挂载 Repository.

职责:
- 读写 page_resources 关系表
- 不 commit,事务边界由路由层的 safe_route_call 负责
"""

from __future__ import annotations

from app import db
from app.constants import ResourceType
from app.models.page import Page, page_resources


class PageResourcesRepository:
    """页面与资源挂载关系 Repository."""

    @staticmethod
    def list_attached_page_ids(resource_type: ResourceType, handle: str) -> list[int]:
        """返回挂载了该资源的页面 id,按页面原生顺序排列."""
        query = (
            db.session.query(page_resources.c.page_id)
            .join(Page, Page.id == page_resources.c.page_id)
            .filter(
                page_resources.c.resource_type == resource_type.value,
                page_resources.c.handle == handle,
            )
            .order_by(Page.sortorder.asc(), Page.id.asc())
        )
        return [int(page_id) for (page_id,) in query.all()]

    @staticmethod
    def exists(resource_type: ResourceType, handle: str, page_id: int) -> bool:
        row = (
            db.session.query(page_resources.c.page_id)
            .filter(
                page_resources.c.resource_type == resource_type.value,
                page_resources.c.handle == handle,
                page_resources.c.page_id == page_id,
            )
            .first()
        )
        return row is not None

    def attach(self, resource_type: ResourceType, handle: str, page_id: int) -> bool:
        """挂载资源到页面,已挂载时不重复写入.

        Returns:
            bool: 本次是否新增了挂载关系.

        """
        if self.exists(resource_type, handle, page_id):
            return False
        db.session.execute(
            page_resources.insert().values(
                page_id=page_id,
                resource_type=resource_type.value,
                handle=handle,
            ),
        )
        return True

    @staticmethod
    def detach(resource_type: ResourceType, handle: str, page_id: int) -> bool:
        """从页面卸载资源,未挂载时为空操作.

        Returns:
            bool: 本次是否删除了挂载关系.

        """
        result = db.session.execute(
            page_resources.delete().where(
                page_resources.c.resource_type == resource_type.value,
                page_resources.c.handle == handle,
                page_resources.c.page_id == page_id,
            ),
        )
        return bool(result.rowcount)

"""页面读模型 Repository.

职责:
- 仅负责 Query 组装与数据库读取
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from collections.abc import Sequence

from app import db
from app.models.page import Page

PAGE_COLUMNS: tuple[str, ...] = ("id", "parent_id", "title", "handle", "sortorder")
PAGE_TITLE_SEPARATOR = ": "


class PagesRepository:
    """页面查询 Repository."""

    def fetch(self, include_tree: bool = False, columns: Sequence[str] | None = None) -> list[dict[str, object]]:
        """按原生顺序(sortorder, id 升序)读取页面.

        Args:
            include_tree: 是否附带 parent_id,便于调用方还原层级.
            columns: 需要读取的列,为空时读取全部列.

        Returns:
            以列名为键的页面字典列表.

        """
        selected = list(columns) if columns else list(PAGE_COLUMNS)
        unknown = [name for name in selected if name not in PAGE_COLUMNS]
        if unknown:
            msg = f"未知的页面字段: {', '.join(unknown)}"
            raise ValueError(msg)
        if include_tree and "parent_id" not in selected:
            selected.append("parent_id")

        query = db.session.query(*(getattr(Page, name) for name in selected)).order_by(
            Page.sortorder.asc(),
            Page.id.asc(),
        )
        return [dict(zip(selected, row, strict=True)) for row in query.all()]

    def list_ids(self) -> list[int]:
        return [int(row["id"]) for row in self.fetch(columns=("id",))]

    @staticmethod
    def get_by_id(page_id: int) -> Page | None:
        return db.session.get(Page, page_id)

    def resolve_page_path(self, page_id: int, column: str = "title") -> list[str]:
        """从根页面到目标页面依次读取指定列.

        Args:
            page_id: 目标页面 id.
            column: 要读取的列,默认 title.

        Returns:
            根到目标页面的列值列表,页面不存在时返回空列表.

        """
        path: list[str] = []
        seen: set[int] = set()
        page = self.get_by_id(page_id)
        while page is not None and page.id not in seen:
            seen.add(page.id)
            path.append(str(getattr(page, column)))
            page = self.get_by_id(page.parent_id) if page.parent_id is not None else None
        path.reverse()
        return path

    def resolve_page_title(self, page_id: int) -> str | None:
        """返回带层级的页面标题,例如 ``Blog: Archive``."""
        path = self.resolve_page_path(page_id)
        if not path:
            return None
        return PAGE_TITLE_SEPARATOR.join(path)

"""页面管理服务.

包装 PagesRepository, 给资源索引页提供页面列表与层级标题.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.repositories.pages_repository import PagesRepository


class PageManager:
    """页面读取服务."""

    def __init__(self, repository: PagesRepository | None = None) -> None:
        self._repository = repository or PagesRepository()

    def fetch(self, include_tree: bool = False, columns: Sequence[str] | None = ("id",)) -> list[dict[str, object]]:
        return self._repository.fetch(include_tree=include_tree, columns=columns)

    def list_ids(self) -> list[int]:
        """按原生顺序返回全部页面 id."""
        return self._repository.list_ids()

    def resolve_page_title(self, page_id: int) -> str | None:
        return self._repository.resolve_page_title(page_id)

    def page_exists(self, page_id: int) -> bool:
        return self._repository.get_by_id(page_id) is not None


__all__ = ["PageManager"]

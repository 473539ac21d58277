"""
砚台 - 页面模型
"""

from app import db
from app.utils.time_utils import time_utils


class Page(db.Model):
    """页面模型。

    页面以 parent_id 组成树形结构，数据源与事件通过 page_resources 挂载到页面上。

    Attributes:
        id: 页面主键。
        parent_id: 父页面 id，根页面为空。
        title: 页面标题。
        handle: 页面 URL 片段。
        sortorder: 排序顺序，决定页面列表的原生顺序。
        created_at: 创建时间。
    """

    __tablename__ = "pages"

    id = db.Column(db.Integer, primary_key=True)
    parent_id = db.Column(db.Integer, db.ForeignKey("pages.id"), nullable=True, index=True)
    title = db.Column(db.String(255), nullable=False)
    handle = db.Column(db.String(255), nullable=False, index=True)
    sortorder = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now)

    parent = db.relationship("Page", remote_side=[id], backref="children")

    def __init__(
        self,
        title: str,
        handle: str,
        parent_id: int | None = None,
        sortorder: int = 0,
    ) -> None:
        """初始化页面。

        Args:
            title: 页面标题。
            handle: 页面 URL 片段。
            parent_id: 父页面 id，可选。
            sortorder: 排序顺序，默认为 0。
        """
        self.title = title
        self.handle = handle
        self.parent_id = parent_id
        self.sortorder = sortorder

    def __repr__(self) -> str:
        return f"<Page {self.handle}>"


# 页面与资源的挂载关系, (page_id, resource_type, handle) 唯一
page_resources = db.Table(
    "page_resources",
    db.Column("page_id", db.Integer, db.ForeignKey("pages.id", ondelete="CASCADE"), primary_key=True),
    db.Column("resource_type", db.String(20), primary_key=True),
    db.Column("handle", db.String(255), primary_key=True),
    db.Column("created_at", db.DateTime(timezone=True), default=time_utils.now),
)

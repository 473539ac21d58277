#!/usr/bin/env python3
"""
初始化数据库表, 可选写入示例页面
"""

import argparse
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app import create_app, db  # noqa: E402
from app.models.page import Page  # noqa: E402
from app.utils.structlog_config import get_system_logger  # noqa: E402

DEMO_PAGES: list[tuple[str, str, str | None]] = [
    ("Home", "home", None),
    ("Blog", "blog", None),
    ("Archive", "archive", "blog"),
]


def _seed_demo_pages() -> int:
    created = 0
    handles_to_ids: dict[str, int] = {}
    for sortorder, (title, handle, parent_handle) in enumerate(DEMO_PAGES, start=1):
        existing = Page.query.filter_by(handle=handle).first()
        if existing is not None:
            handles_to_ids[handle] = existing.id
            continue
        parent_id = handles_to_ids.get(parent_handle) if parent_handle else None
        page = Page(title=title, handle=handle, parent_id=parent_id, sortorder=sortorder)
        db.session.add(page)
        db.session.flush()
        handles_to_ids[handle] = page.id
        created += 1
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="初始化砚台数据库")
    parser.add_argument("--demo", action="store_true", help="写入示例页面")
    args = parser.parse_args()

    logger = get_system_logger()
    (project_root / "userdata").mkdir(exist_ok=True)
    app = create_app()
    with app.app_context():
        db.create_all()
        logger.info("数据库表已创建", database=app.config["SQLALCHEMY_DATABASE_URI"])
        if args.demo:
            created = _seed_demo_pages()
            db.session.commit()
            logger.info("示例页面已写入", created=created)


if __name__ == "__main__":
    main()

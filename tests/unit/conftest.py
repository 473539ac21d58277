# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供隔离的 workspace、配置文件与内存数据库, 以及驱动文件/页面的构造助手。
"""

from __future__ import annotations

from pathlib import Path

import pytest

from app import create_app, db
from app.constants import ResourceType
from app.models.page import Page
from app.settings import Settings


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - unit tests 不依赖外部数据库等基础设施
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.delenv("WORKSPACE_DIR", raising=False)
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    monkeypatch.delenv("TEMPLATE_DIR", raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """临时 workspace, 包含驱动目录与模板覆盖目录."""
    root = tmp_path / "workspace"
    for directory in ("data-sources", "events", "template"):
        (root / directory).mkdir(parents=True)
    return root


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    return tmp_path / "manifest" / "config.yaml"


@pytest.fixture
def make_driver(workspace: Path):
    """在 workspace 中写入驱动文件."""

    def _make(
        resource_type: ResourceType,
        handle: str,
        *,
        name: str | None = None,
        author: object = "Inkstone Team",
        release_date: str | None = "2024-01-01",
        source: str | None = None,
    ) -> Path:
        about = {
            "name": name or handle.title(),
            "author": author,
            "version": "1.0",
            "release-date": release_date,
        }
        lines = [f"ABOUT = {about!r}"]
        if source is not None:
            lines.append(f"SOURCE = {source!r}")
        path = workspace / resource_type.directory / f"{resource_type.driver_prefix}{handle}.py"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _make


@pytest.fixture
def app(monkeypatch, tmp_path: Path, workspace: Path, config_file: Path):
    """创建测试应用实例并初始化内存数据库."""
    monkeypatch.setenv("WORKSPACE_DIR", str(workspace))
    monkeypatch.setenv("DOCROOT", str(tmp_path))
    monkeypatch.setenv("CONFIG_FILE", str(config_file))

    settings = Settings.load()
    app = create_app(settings=settings)
    app.config["TESTING"] = True
    app.config["WTF_CSRF_ENABLED"] = False

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def make_page(app):
    """写入页面并返回其 id."""

    def _make(
        title: str,
        *,
        parent_id: int | None = None,
        sortorder: int = 0,
        page_id: int | None = None,
    ) -> int:
        page = Page(title=title, handle=title.lower().replace(" ", "-"), parent_id=parent_id, sortorder=sortorder)
        if page_id is not None:
            page.id = page_id
        db.session.add(page)
        db.session.commit()
        return page.id

    return _make


@pytest.fixture
def resources_page_service(app):
    from app.routes.blueprints.resources import RESOURCES_PAGE_SERVICE_KEY

    return app.extensions[RESOURCES_PAGE_SERVICE_KEY]

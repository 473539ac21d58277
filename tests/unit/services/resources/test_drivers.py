from __future__ import annotations

from pathlib import Path

import pytest

from app.constants import ResourceType
from app.core.exceptions import ValidationError
from app.services.resources.drivers import DriverManager


@pytest.mark.unit
def test_list_handles_only_picks_prefixed_driver_files(workspace: Path, make_driver) -> None:
    make_driver(ResourceType.DATASOURCE, "navigation")
    make_driver(ResourceType.DATASOURCE, "articles")
    (workspace / "data-sources" / "README.md").write_text("notes", encoding="utf-8")
    (workspace / "data-sources" / "helper.py").write_text("X = 1\n", encoding="utf-8")

    manager = DriverManager(ResourceType.DATASOURCE, workspace / "data-sources")

    assert manager.list_handles() == ["articles", "navigation"]


@pytest.mark.unit
def test_list_handles_for_missing_directory_is_empty(tmp_path: Path) -> None:
    manager = DriverManager(ResourceType.EVENT, tmp_path / "missing")

    assert manager.list_handles() == []


@pytest.mark.unit
def test_about_reads_driver_metadata_without_executing(workspace: Path, make_driver) -> None:
    path = make_driver(
        ResourceType.DATASOURCE,
        "recent_posts",
        name="Recent Posts",
        author={"name": "Jane", "website": "https://example.com", "email": "jane@example.com"},
        release_date="2024-05-01",
        source="blog-posts",
    )
    path.write_text(path.read_text(encoding="utf-8") + "raise RuntimeError('never executed')\n", encoding="utf-8")

    record = DriverManager(ResourceType.DATASOURCE, workspace / "data-sources").about("recent_posts")

    assert record.handle == "recent_posts"
    assert record.name == "Recent Posts"
    assert record.author.name == "Jane"
    assert record.author.website == "https://example.com"
    assert record.author.email == "jane@example.com"
    assert record.release_date == "2024-05-01"
    assert record.source is not None
    assert record.source.handle == "blog-posts"
    assert record.source.name == "Blog Posts"


@pytest.mark.unit
def test_about_ignores_source_for_events(workspace: Path, make_driver) -> None:
    make_driver(ResourceType.EVENT, "save_comment", source="comments")

    record = DriverManager(ResourceType.EVENT, workspace / "events").about("save_comment")

    assert record.source is None


@pytest.mark.unit
def test_about_falls_back_to_handle_for_broken_driver(workspace: Path) -> None:
    (workspace / "events" / "event.broken.py").write_text("ABOUT = {\n", encoding="utf-8")

    record = DriverManager(ResourceType.EVENT, workspace / "events").about("broken")

    assert record.name == "broken"
    assert record.author.name == ""
    assert record.release_date is None


@pytest.mark.unit
def test_about_falls_back_for_unhashable_literal(workspace: Path) -> None:
    (workspace / "data-sources" / "data.bad.py").write_text(
        'ABOUT = {"name": "Bad", "tags": {["x"]: 1}}\n',
        encoding="utf-8",
    )

    record = DriverManager(ResourceType.DATASOURCE, workspace / "data-sources").about("bad")

    assert record.name == "bad"
    assert record.source is None


@pytest.mark.unit
def test_about_reads_annotated_assignment(workspace: Path) -> None:
    (workspace / "data-sources" / "data.typed.py").write_text(
        'ABOUT: dict = {"name": "Typed", "author": "Jane"}\nSOURCE: str = "blog-posts"\n',
        encoding="utf-8",
    )

    record = DriverManager(ResourceType.DATASOURCE, workspace / "data-sources").about("typed")

    assert record.name == "Typed"
    assert record.author.name == "Jane"
    assert record.source is not None
    assert record.source.handle == "blog-posts"


@pytest.mark.unit
def test_get_driver_path_rejects_traversal(workspace: Path) -> None:
    manager = DriverManager(ResourceType.EVENT, workspace / "events")

    assert manager.get_driver_path("save_comment") == workspace / "events" / "event.save_comment.py"
    with pytest.raises(ValidationError):
        manager.get_driver_path("../../etc/passwd")

from __future__ import annotations

from pathlib import Path

import pytest

from app.services.resources.template_resolver import TemplateResolver


def _resolver(tmp_path: Path) -> tuple[TemplateResolver, Path, Path]:
    workspace_dir = tmp_path / "workspace" / "template"
    system_dir = tmp_path / "system"
    workspace_dir.mkdir(parents=True)
    system_dir.mkdir()
    return TemplateResolver(workspace_dir, system_dir), workspace_dir, system_dir


@pytest.mark.unit
def test_resolve_prefers_workspace_override(tmp_path: Path) -> None:
    resolver, workspace_dir, system_dir = _resolver(tmp_path)
    (workspace_dir / "resources-index.tpl").write_text("override", encoding="utf-8")
    (system_dir / "resources-index.tpl").write_text("system", encoding="utf-8")

    assert resolver.resolve("resources-index") == workspace_dir / "resources-index.tpl"


@pytest.mark.unit
def test_resolve_falls_back_to_system_template(tmp_path: Path) -> None:
    resolver, _workspace_dir, system_dir = _resolver(tmp_path)
    (system_dir / "resources-index.tpl").write_text("system", encoding="utf-8")

    assert resolver.resolve("resources-index") == system_dir / "resources-index.tpl"


@pytest.mark.unit
def test_resolve_returns_none_when_missing(tmp_path: Path) -> None:
    resolver, _workspace_dir, _system_dir = _resolver(tmp_path)

    assert resolver.resolve("resources-index") is None


@pytest.mark.unit
def test_resolve_checks_filesystem_on_every_call(tmp_path: Path) -> None:
    resolver, workspace_dir, system_dir = _resolver(tmp_path)
    (system_dir / "resources-index.tpl").write_text("system", encoding="utf-8")
    assert resolver.resolve("resources-index") == system_dir / "resources-index.tpl"

    (workspace_dir / "resources-index.tpl").write_text("override", encoding="utf-8")

    assert resolver.resolve("resources-index") == workspace_dir / "resources-index.tpl"

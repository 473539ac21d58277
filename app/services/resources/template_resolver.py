"""索引页模板查找.

workspace 下的 ``template/<name>.tpl`` 优先于系统模板目录, 每次调用都重新检查文件系统.
"""

from __future__ import annotations

from pathlib import Path

TEMPLATE_SUFFIX = ".tpl"


class TemplateResolver:
    """按名称解析模板文件路径."""

    def __init__(self, workspace_template_dir: str | Path, system_template_dir: str | Path) -> None:
        self.workspace_template_dir = Path(workspace_template_dir)
        self.system_template_dir = Path(system_template_dir)

    def candidates(self, name: str) -> list[Path]:
        filename = f"{name}{TEMPLATE_SUFFIX}"
        return [self.workspace_template_dir / filename, self.system_template_dir / filename]

    def resolve(self, name: str) -> Path | None:
        """返回第一个存在的模板路径, 都不存在时返回 None."""
        for candidate in self.candidates(name):
            if candidate.is_file():
                return candidate
        return None


__all__ = ["TemplateResolver"]

"""资源驱动文件读取.

驱动文件位于 ``<workspace>/<目录>/<前缀><handle>.py``, 例如
``workspace/data-sources/data.articles.py``. 文件顶层声明 ``ABOUT`` 字典
(数据源另有 ``SOURCE`` 字符串), 这里用 ast 静态读取, 不导入也不执行驱动代码.

```python
ABOUT = {
    "name": "Articles",
    "author": {"name": "Jane", "website": "https://example.com", "email": "jane@example.com"},
    "version": "1.0",
    "release-date": "2024-05-01",
}
SOURCE = "articles"
```
"""

from __future__ import annotations

import ast
from pathlib import Path

from app.constants import ErrorMessages, ResourceType
from app.core.exceptions import ValidationError
from app.services.resources.bulk_actions import is_valid_handle
from app.types.resources import ResourceAuthor, ResourceRecord, ResourceSource
from app.utils.structlog_config import log_warning

DRIVER_SUFFIX = ".py"
_ABOUT_NAME = "ABOUT"
_SOURCE_NAME = "SOURCE"


def _read_module_constants(path: Path, names: set[str]) -> dict[str, object]:
    """读取模块顶层的字面量赋值."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    values: dict[str, object] = {}
    for node in tree.body:
        if isinstance(node, ast.Assign):
            targets, value = node.targets, node.value
        elif isinstance(node, ast.AnnAssign) and node.value is not None:
            targets, value = [node.target], node.value
        else:
            continue
        for target in targets:
            if isinstance(target, ast.Name) and target.id in names:
                values[target.id] = ast.literal_eval(value)
    return values


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _build_author(raw: object) -> ResourceAuthor:
    if isinstance(raw, dict):
        return ResourceAuthor(
            name=_optional_str(raw.get("name")) or "",
            website=_optional_str(raw.get("website")),
            email=_optional_str(raw.get("email")),
        )
    return ResourceAuthor(name=_optional_str(raw) or "")


def _source_title(source: str) -> str:
    return source.replace("-", " ").replace("_", " ").title()


class DriverManager:
    """单一资源类型的驱动文件管理."""

    def __init__(self, resource_type: ResourceType, directory: str | Path) -> None:
        self.resource_type = resource_type
        self.directory = Path(directory)

    @staticmethod
    def is_valid_handle(handle: str) -> bool:
        return is_valid_handle(handle)

    def get_driver_path(self, handle: str) -> Path:
        """返回驱动文件路径, 文件不一定存在.

        Raises:
            ValidationError: handle 含有非法字符(例如路径分隔符)时抛出.

        """
        if not self.is_valid_handle(handle):
            raise ValidationError(
                ErrorMessages.INVALID_RESOURCE_HANDLE.format(value=handle),
                message_key="INVALID_RESOURCE_HANDLE",
                extra={"handle": handle, "resource_type": self.resource_type.value},
            )
        return self.directory / f"{self.resource_type.driver_prefix}{handle}{DRIVER_SUFFIX}"

    def list_handles(self) -> list[str]:
        """扫描驱动目录, 返回按 handle 升序排列的资源标识."""
        if not self.directory.is_dir():
            return []

        prefix = self.resource_type.driver_prefix
        handles: list[str] = []
        for path in self.directory.iterdir():
            name = path.name
            if not path.is_file() or not name.startswith(prefix) or not name.endswith(DRIVER_SUFFIX):
                continue
            handle = name[len(prefix) : -len(DRIVER_SUFFIX)]
            if self.is_valid_handle(handle):
                handles.append(handle)
        return sorted(handles)

    def about(self, handle: str) -> ResourceRecord:
        """读取驱动文件的 ABOUT 信息.

        驱动文件无法解析时记录警告, 并以 handle 作为名称返回最简记录.
        """
        path = self.get_driver_path(handle)
        try:
            constants = _read_module_constants(path, {_ABOUT_NAME, _SOURCE_NAME})
        except (OSError, SyntaxError, ValueError, TypeError, RecursionError, MemoryError) as exc:
            log_warning(
                "驱动文件解析失败",
                module="blueprints",
                resource_type=self.resource_type.value,
                handle=handle,
                path=str(path),
                error_type=exc.__class__.__name__,
                error_message=str(exc),
            )
            constants = {}

        about = constants.get(_ABOUT_NAME)
        if not isinstance(about, dict):
            about = {}

        source: ResourceSource | None = None
        if self.resource_type is ResourceType.DATASOURCE:
            raw_source = _optional_str(constants.get(_SOURCE_NAME))
            if raw_source:
                source = ResourceSource(name=_source_title(raw_source), handle=raw_source)

        release_date = about.get("release-date", about.get("release_date"))
        return ResourceRecord(
            handle=handle,
            name=_optional_str(about.get("name")) or handle,
            author=_build_author(about.get("author")),
            version=_optional_str(about.get("version")),
            release_date=_optional_str(release_date),
            source=source,
        )

    def list_all(self) -> list[ResourceRecord]:
        return [self.about(handle) for handle in self.list_handles()]


__all__ = ["DriverManager"]

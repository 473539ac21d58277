"""持久化配置存储(Infra).

以 YAML 文件保存分组的键值配置,例如资源索引页的排序偏好:

```yaml
sorting:
  datasources_index_sortby: name
  datasources_index_order: asc
```

`set` 只修改内存中的值,需要显式调用 `write` 才会落盘.
`reload` 与 `write` 都会重新读取文件,未写入的修改叠加在最新内容之上,
因此多个进程各自持有的 ConfigStore 只会覆盖自己修改过的键.
同一个键被并发写入时没有加锁,后写入者覆盖先写入者.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import yaml

from app.utils.structlog_config import get_system_logger

logger = get_system_logger()

ConfigValue = str | int | float | bool | None


class ConfigStore:
    """分组键值配置存储."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._pending: dict[tuple[str, str], ConfigValue] = {}
        self._data: dict[str, dict[str, ConfigValue]] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, dict[str, ConfigValue]]:
        """读取配置文件,文件不存在时视为空配置."""
        if not self._path.exists():
            return {}

        with self._path.open(encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)

        if raw is None:
            return {}
        if not isinstance(raw, dict):
            msg = f"配置文件格式错误,顶层必须为映射: {self._path}"
            raise ValueError(msg)

        data: dict[str, dict[str, ConfigValue]] = {}
        for group, values in raw.items():
            if values is None:
                data[str(group)] = {}
                continue
            if not isinstance(values, dict):
                msg = f"配置分组 {group} 必须为映射: {self._path}"
                raise ValueError(msg)
            data[str(group)] = {str(key): value for key, value in values.items()}
        return data

    def reload(self) -> None:
        """重新读取配置文件,保留尚未写入的修改."""
        data = self._load()
        for (group, name), value in self._pending.items():
            data.setdefault(group, {})[name] = value
        self._data = data

    def get(self, name: str, group: str, default: ConfigValue = None) -> ConfigValue:
        """读取配置项,不存在时返回 default."""
        return self._data.get(group, {}).get(name, default)

    def set(self, name: str, value: ConfigValue, group: str) -> None:
        """设置配置项(仅内存)."""
        self._data.setdefault(group, {})[name] = value
        self._pending[(group, name)] = value

    def to_dict(self) -> dict[str, dict[str, ConfigValue]]:
        return {group: dict(values) for group, values in self._data.items()}

    def write(self) -> None:
        """将未写入的修改合并到文件最新内容后写回.

        先写入同目录临时文件再替换,避免读者看到写了一半的文件.
        """
        self.reload()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(prefix=".config-", suffix=".yaml", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                yaml.safe_dump(self.to_dict(), handle, allow_unicode=True, sort_keys=True)
            Path(temp_name).replace(self._path)
        except OSError:
            Path(temp_name).unlink(missing_ok=True)
            raise
        self._pending.clear()
        logger.debug("配置文件已写入", module="config", path=str(self._path))


__all__ = ["ConfigStore"]

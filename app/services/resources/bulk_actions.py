"""资源索引页 "with-selected" 批量操作的解析.

表单提交的操作字符串在边界处一次性解析为带标签的变体, 服务层只处理变体本身.

- ``delete``                    -> DeleteResources
- ``attach-to-page-<id>``       -> AttachToPage(id)
- ``detach-from-page-<id>``     -> DetachFromPage(id)
- ``attach-all-pages``          -> AttachAllPages
- ``detach-all-pages``          -> DetachAllPages
- 其他                           -> UnknownAction
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from app.constants import ErrorMessages
from app.core.exceptions import ValidationError

RESOURCE_HANDLE_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

_ATTACH_TO_PAGE_PATTERN = re.compile(r"^attach-to-page-(\d+)$")
_DETACH_FROM_PAGE_PATTERN = re.compile(r"^detach-from-page-(\d+)$")
_ITEM_FIELD_PATTERN = re.compile(r"^items\[(.*)\]$")


@dataclass(frozen=True, slots=True)
class DeleteResources:
    """删除选中资源的驱动文件."""


@dataclass(frozen=True, slots=True)
class AttachToPage:
    """挂载选中资源到指定页面."""

    page_id: int


@dataclass(frozen=True, slots=True)
class DetachFromPage:
    """从指定页面卸载选中资源."""

    page_id: int


@dataclass(frozen=True, slots=True)
class AttachAllPages:
    """挂载选中资源到所有页面."""


@dataclass(frozen=True, slots=True)
class DetachAllPages:
    """从所有页面卸载选中资源."""


@dataclass(frozen=True, slots=True)
class UnknownAction:
    """未识别的操作, 交由扩展处理, 本模块忽略."""

    value: str


BulkAction: TypeAlias = DeleteResources | AttachToPage | DetachFromPage | AttachAllPages | DetachAllPages | UnknownAction


def parse_bulk_action(value: str | None) -> BulkAction:
    """把 with-selected 字段解析为批量操作变体.

    Args:
        value: 表单中的 with-selected 原始值.

    Returns:
        BulkAction: 解析后的操作变体, 无法识别时为 UnknownAction.

    """
    raw = (value or "").strip()
    if raw == "delete":
        return DeleteResources()
    if raw == "attach-all-pages":
        return AttachAllPages()
    if raw == "detach-all-pages":
        return DetachAllPages()

    matched = _ATTACH_TO_PAGE_PATTERN.match(raw)
    if matched:
        return AttachToPage(page_id=int(matched.group(1)))
    matched = _DETACH_FROM_PAGE_PATTERN.match(raw)
    if matched:
        return DetachFromPage(page_id=int(matched.group(1)))
    return UnknownAction(value=raw)


def is_valid_handle(handle: str) -> bool:
    return bool(RESOURCE_HANDLE_PATTERN.match(handle))


def parse_checked_items(form: Mapping[str, object]) -> list[str]:
    """从 ``items[<handle>]`` 形式的表单字段中提取选中的资源标识, 不做合法性校验."""
    handles: list[str] = []
    for key in form:
        matched = _ITEM_FIELD_PATTERN.match(str(key))
        if not matched:
            continue
        handle = matched.group(1)
        if handle not in handles:
            handles.append(handle)
    return handles


def validate_handles(handles: Sequence[str]) -> None:
    """校验资源标识, 遇到第一个非法标识时抛出 ValidationError."""
    for handle in handles:
        if not is_valid_handle(handle):
            raise ValidationError(
                ErrorMessages.INVALID_RESOURCE_HANDLE.format(value=handle),
                message_key="INVALID_RESOURCE_HANDLE",
                extra={"handle": handle},
            )


def is_action_submitted(form: Mapping[str, object]) -> bool:
    """表单中是否包含 ``action[...]`` 提交按钮."""
    return any(str(key).startswith("action[") for key in form)


__all__ = [
    "AttachAllPages",
    "AttachToPage",
    "BulkAction",
    "DeleteResources",
    "DetachAllPages",
    "DetachFromPage",
    "UnknownAction",
    "is_action_submitted",
    "is_valid_handle",
    "parse_bulk_action",
    "parse_checked_items",
    "validate_handles",
]

from __future__ import annotations

import pytest

from app.core.exceptions import ValidationError
from app.services.resources.bulk_actions import (
    AttachAllPages,
    AttachToPage,
    DeleteResources,
    DetachAllPages,
    DetachFromPage,
    UnknownAction,
    is_action_submitted,
    parse_bulk_action,
    parse_checked_items,
    validate_handles,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("delete", DeleteResources()),
        ("attach-to-page-42", AttachToPage(page_id=42)),
        ("detach-from-page-7", DetachFromPage(page_id=7)),
        ("attach-all-pages", AttachAllPages()),
        ("detach-all-pages", DetachAllPages()),
    ],
)
def test_parse_bulk_action_known_values(raw: str, expected: object) -> None:
    assert parse_bulk_action(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["", None, "publish", "attach-to-page-", "attach-to-page-abc", "detach-from-page-1x"])
def test_parse_bulk_action_falls_back_to_unknown(raw: str | None) -> None:
    action = parse_bulk_action(raw)

    assert isinstance(action, UnknownAction)
    assert action.value == (raw or "")


@pytest.mark.unit
def test_parse_checked_items_keeps_form_order() -> None:
    form = {"items[navigation]": "on", "with-selected": "delete", "items[articles]": "on", "action[apply]": "应用"}

    assert parse_checked_items(form) == ["navigation", "articles"]


@pytest.mark.unit
def test_parse_checked_items_returns_raw_handles() -> None:
    assert parse_checked_items({"items[../secret]": "on", "items[a.b]": "on"}) == ["../secret", "a.b"]


@pytest.mark.unit
def test_validate_handles_rejects_path_like_handle() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_handles(["navigation", "../secret"])

    assert exc_info.value.message_key == "INVALID_RESOURCE_HANDLE"


@pytest.mark.unit
def test_is_action_submitted_requires_action_field() -> None:
    assert is_action_submitted({"action[apply]": "应用", "items[a]": "on"}) is True
    assert is_action_submitted({"items[a]": "on", "with-selected": "delete"}) is False

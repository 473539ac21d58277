from __future__ import annotations

from pathlib import Path

import pytest

from app.constants import FlashCategory, ResourceType
from app.core.exceptions import NotFoundError, ValidationError
from app.repositories.page_resources_repository import PageResourcesRepository
from app.signals import custom_actions
from app.types.resources import Redirect, Rendered

CURRENT_URL = "/blueprints/datasources/"
DS = ResourceType.DATASOURCE


def _attached(handle: str) -> list[int]:
    return PageResourcesRepository.list_attached_page_ids(DS, handle)


@pytest.mark.unit
def test_delete_all_succeeds_detaches_and_redirects(resources_page_service, make_driver, make_page) -> None:
    paths = [make_driver(DS, handle) for handle in ("articles", "navigation")]
    page_id = make_page("Home")
    repository = PageResourcesRepository()
    repository.attach(DS, "articles", page_id)
    repository.attach(DS, "navigation", page_id)

    outcome = resources_page_service.handle_bulk_action(
        DS,
        "delete",
        ["articles", "navigation"],
        current_url=CURRENT_URL,
    )

    assert outcome == Redirect(url=CURRENT_URL)
    assert not any(path.exists() for path in paths)
    assert _attached("articles") == []
    assert _attached("navigation") == []


@pytest.mark.unit
def test_delete_partial_failure_reports_alert_without_redirect(
    resources_page_service,
    make_driver,
    make_page,
    workspace: Path,
) -> None:
    make_driver(DS, "articles")
    make_driver(DS, "comments")
    page_id = make_page("Home")
    repository = PageResourcesRepository()
    for handle in ("articles", "missing", "comments"):
        repository.attach(DS, handle, page_id)

    outcome = resources_page_service.handle_bulk_action(
        DS,
        "delete",
        ["articles", "missing", "comments"],
        current_url=CURRENT_URL,
    )

    assert isinstance(outcome, Rendered)
    alerts = outcome.data.alerts
    assert len(alerts) == 1
    assert alerts[0].category == FlashCategory.ERROR
    assert alerts[0].message == "删除 data.missing.py 失败. 请检查 /workspace/data-sources 的权限"
    assert not (workspace / "data-sources" / "data.articles.py").exists()
    assert not (workspace / "data-sources" / "data.comments.py").exists()
    assert _attached("articles") == []
    assert _attached("comments") == []
    assert _attached("missing") == [page_id]


@pytest.mark.unit
def test_attach_to_page_attaches_every_item(resources_page_service, make_page) -> None:
    make_page("Home", page_id=42)

    outcome = resources_page_service.handle_bulk_action(DS, "attach-to-page-42", ["A", "B"], current_url=CURRENT_URL)

    assert outcome == Redirect(url=CURRENT_URL)
    assert _attached("A") == [42]
    assert _attached("B") == [42]


@pytest.mark.unit
def test_attach_to_missing_page_raises_not_found(resources_page_service) -> None:
    with pytest.raises(NotFoundError):
        resources_page_service.handle_bulk_action(DS, "attach-to-page-404", ["A"], current_url=CURRENT_URL)


@pytest.mark.unit
def test_attach_is_idempotent(resources_page_service, make_page) -> None:
    page_id = make_page("Home")

    resources_page_service.handle_bulk_action(DS, f"attach-to-page-{page_id}", ["A"], current_url=CURRENT_URL)
    resources_page_service.handle_bulk_action(DS, f"attach-to-page-{page_id}", ["A"], current_url=CURRENT_URL)

    assert _attached("A") == [page_id]


@pytest.mark.unit
def test_detach_all_pages_removes_every_attachment(resources_page_service, make_page) -> None:
    first = make_page("Home", sortorder=1)
    second = make_page("Blog", sortorder=2)
    repository = PageResourcesRepository()
    repository.attach(DS, "A", first)
    repository.attach(DS, "A", second)
    repository.attach(DS, "B", second)

    outcome = resources_page_service.handle_bulk_action(DS, "detach-all-pages", ["A"], current_url=CURRENT_URL)

    assert outcome == Redirect(url=CURRENT_URL)
    assert _attached("A") == []
    assert _attached("B") == [second]


@pytest.mark.unit
def test_attach_all_and_detach_from_page(resources_page_service, make_page) -> None:
    first = make_page("Home", sortorder=1)
    second = make_page("Blog", sortorder=2)

    resources_page_service.handle_bulk_action(DS, "attach-all-pages", ["A"], current_url=CURRENT_URL)
    assert _attached("A") == [first, second]

    outcome = resources_page_service.handle_bulk_action(
        DS,
        f"detach-from-page-{first}",
        ["A"],
        current_url=CURRENT_URL,
    )

    assert outcome == Redirect(url=CURRENT_URL)
    assert _attached("A") == [second]


@pytest.mark.unit
def test_unknown_action_and_empty_items_are_noops(resources_page_service, make_driver) -> None:
    path = make_driver(DS, "articles")

    unknown = resources_page_service.handle_bulk_action(DS, "publish", ["articles"], current_url=CURRENT_URL)
    empty = resources_page_service.handle_bulk_action(DS, "delete", [], current_url=CURRENT_URL)
    unsubmitted = resources_page_service.handle_bulk_action(
        DS,
        "delete",
        ["articles"],
        current_url=CURRENT_URL,
        submitted=False,
    )

    for outcome in (unknown, empty, unsubmitted):
        assert isinstance(outcome, Rendered)
        assert outcome.data.alerts == []
    assert path.exists()


@pytest.mark.unit
def test_custom_actions_signal_is_sent_before_dispatch(resources_page_service) -> None:
    received: list[dict[str, object]] = []

    def _receiver(_sender: object, **kwargs: object) -> None:
        received.append(kwargs)

    with custom_actions.connected_to(_receiver):
        resources_page_service.handle_bulk_action(DS, None, [], current_url=CURRENT_URL, submitted=False)

    assert received == [
        {"context": "/blueprints/datasources/", "resource_type": DS, "action": None, "items": []},
    ]


@pytest.mark.unit
def test_custom_actions_signal_is_sent_before_handle_validation(resources_page_service) -> None:
    received: list[dict[str, object]] = []

    def _receiver(_sender: object, **kwargs: object) -> None:
        received.append(kwargs)

    with custom_actions.connected_to(_receiver), pytest.raises(ValidationError) as exc_info:
        resources_page_service.handle_bulk_action(DS, "publish", ["a.b"], current_url=CURRENT_URL)

    assert exc_info.value.message_key == "INVALID_RESOURCE_HANDLE"
    assert received == [
        {"context": "/blueprints/datasources/", "resource_type": DS, "action": "publish", "items": ["a.b"]},
    ]

from __future__ import annotations

from pathlib import Path

import pytest

from app.constants import ResourceType
from app.core.exceptions import ValidationError
from app.services.resources.resources_page_service import ResourcesPageService
from app.services.resources.template_resolver import TemplateResolver
from app.types.resources import Redirect, Rendered, ResourceAuthor, ResourceRecord

CURRENT_URL = "/blueprints/datasources/"


class _FakeResourceManager:
    """记录排序偏好读写与 fetch 调用."""

    def __init__(self, field: str = "name", order: str = "asc") -> None:
        self.fields: dict[ResourceType, str] = {ResourceType.DATASOURCE: field, ResourceType.EVENT: field}
        self.orders: dict[ResourceType, str] = {ResourceType.DATASOURCE: order, ResourceType.EVENT: order}
        self.set_calls: list[tuple[str, ResourceType, str, bool]] = []
        self.fetch_calls: list[tuple[ResourceType, str | None]] = []
        self.reload_count = 0

    def reload_sorting_preferences(self) -> None:
        self.reload_count += 1

    def get_sorting_field(self, resource_type: ResourceType) -> str:
        return self.fields[resource_type]

    def get_sorting_order(self, resource_type: ResourceType) -> str:
        return self.orders[resource_type]

    def set_sorting_field(self, resource_type: ResourceType, field: str, persist: bool = True) -> None:
        self.fields[resource_type] = field
        self.set_calls.append(("field", resource_type, field, persist))

    def set_sorting_order(self, resource_type: ResourceType, order: str, persist: bool = True) -> None:
        self.orders[resource_type] = order
        self.set_calls.append(("order", resource_type, order, persist))

    def fetch(self, resource_type: ResourceType, filters=None, excludes=None, order_by=None) -> list[ResourceRecord]:
        self.fetch_calls.append((resource_type, order_by))
        return [ResourceRecord(handle="articles", name="Articles", author=ResourceAuthor(name="Jane"))]


def _service(manager: _FakeResourceManager, tmp_path: Path) -> ResourcesPageService:
    return ResourcesPageService(manager, TemplateResolver(tmp_path, tmp_path), tmp_path)  # type: ignore[arg-type]


@pytest.mark.unit
def test_sort_unsort_resets_preference_and_redirects(tmp_path: Path) -> None:
    manager = _FakeResourceManager(field="author", order="desc")
    service = _service(manager, tmp_path)

    outcome = service.sort(None, None, {"type": "datasource", "unsort": "1"}, current_url=CURRENT_URL)

    assert outcome == Redirect(url=CURRENT_URL)
    assert manager.set_calls == [
        ("field", ResourceType.DATASOURCE, "name", False),
        ("order", ResourceType.DATASOURCE, "asc", True),
    ]
    assert manager.fetch_calls == []


@pytest.mark.unit
def test_sort_without_params_uses_stored_preference(tmp_path: Path) -> None:
    manager = _FakeResourceManager(field="release-date", order="desc")
    service = _service(manager, tmp_path)

    outcome = service.sort(None, None, {"type": "datasource"}, current_url=CURRENT_URL)

    assert isinstance(outcome, Rendered)
    assert outcome.data.sort == "release-date"
    assert outcome.data.order == "desc"
    assert manager.fetch_calls == [(ResourceType.DATASOURCE, "release-date desc")]
    assert manager.set_calls == []
    assert manager.reload_count == 1


@pytest.mark.unit
def test_sort_change_persists_then_repeat_fetches(tmp_path: Path) -> None:
    manager = _FakeResourceManager()
    service = _service(manager, tmp_path)

    first = service.sort("author", "desc", {"type": "datasource"}, current_url=CURRENT_URL)

    assert first == Redirect(url=CURRENT_URL)
    assert manager.set_calls == [
        ("field", ResourceType.DATASOURCE, "author", False),
        ("order", ResourceType.DATASOURCE, "desc", True),
    ]
    assert manager.fetch_calls == []

    second = service.sort("author", "desc", {"type": "datasource"}, current_url=CURRENT_URL)

    assert isinstance(second, Rendered)
    assert manager.fetch_calls == [(ResourceType.DATASOURCE, "author desc")]
    assert len(manager.set_calls) == 2


@pytest.mark.unit
def test_sort_missing_order_falls_back_to_stored_order(tmp_path: Path) -> None:
    manager = _FakeResourceManager(field="name", order="desc")
    service = _service(manager, tmp_path)

    outcome = service.sort("author", None, {"type": "datasource"}, current_url=CURRENT_URL)

    assert isinstance(outcome, Redirect)
    assert manager.orders[ResourceType.DATASOURCE] == "desc"
    assert manager.fields[ResourceType.DATASOURCE] == "author"


@pytest.mark.unit
def test_sort_unknown_order_normalizes_to_asc(tmp_path: Path) -> None:
    manager = _FakeResourceManager(field="name", order="asc")
    service = _service(manager, tmp_path)

    outcome = service.sort("name", "sideways", {"type": "event"}, current_url="/blueprints/events/")

    assert isinstance(outcome, Rendered)
    assert manager.fetch_calls == [(ResourceType.EVENT, "name asc")]


@pytest.mark.unit
def test_sort_requires_type(tmp_path: Path) -> None:
    service = _service(_FakeResourceManager(), tmp_path)

    with pytest.raises(ValidationError):
        service.sort(None, None, {}, current_url=CURRENT_URL)
    with pytest.raises(ValidationError):
        service.sort(None, None, {"type": "widgets"}, current_url=CURRENT_URL)


@pytest.mark.unit
def test_sort_rejects_unsupported_field(tmp_path: Path) -> None:
    manager = _FakeResourceManager()
    service = _service(manager, tmp_path)

    with pytest.raises(ValidationError) as exc_info:
        service.sort("version", "asc", {"type": "datasource"}, current_url=CURRENT_URL)

    assert exc_info.value.message_key == "INVALID_SORT_FIELD"
    assert manager.set_calls == []

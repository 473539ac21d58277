"""
砚台 - 数据源与事件索引页路由
"""

from __future__ import annotations

from urllib.parse import urlencode

from flask import Blueprint, current_app, flash, redirect, render_template_string, request
from flask.typing import ResponseReturnValue

from app.constants import ErrorMessages, ResourceSortField, ResourceType, SortOrder
from app.core.exceptions import SystemError
from app.infra.route_safety import safe_route_call
from app.services.resources.bulk_actions import is_action_submitted, parse_checked_items
from app.services.resources.resources_page_service import ResourcesPageService
from app.types.resources import Redirect, SortedResources
from app.utils.structlog_config import log_info

# 创建蓝图
blueprints_bp = Blueprint("blueprints", __name__)

RESOURCES_PAGE_SERVICE_KEY = "inkstone.resources_page_service"
INDEX_TEMPLATE_NAME = "resources-index"

_COLUMN_LABELS: dict[str, str] = {
    ResourceSortField.NAME: "名称",
    ResourceSortField.SOURCE: "来源",
    ResourceSortField.RELEASE_DATE: "发布日期",
    ResourceSortField.AUTHOR: "作者",
}


def get_resources_page_service() -> ResourcesPageService:
    return current_app.extensions[RESOURCES_PAGE_SERVICE_KEY]


def _current_url() -> str:
    """当前页面地址,不含查询串."""
    return f"{request.script_root}{request.path}"


def _build_columns(resource_type: ResourceType, sorted_resources: SortedResources) -> list[dict[str, object]]:
    """生成可排序的表头, 点击当前排序列时切换方向."""
    fields = [ResourceSortField.NAME]
    if resource_type is ResourceType.DATASOURCE:
        fields.append(ResourceSortField.SOURCE)
    fields.extend([ResourceSortField.RELEASE_DATE, ResourceSortField.AUTHOR])

    columns: list[dict[str, object]] = []
    for field in fields:
        active = field == sorted_resources.sort
        next_order = SortOrder.toggle(sorted_resources.order) if active else SortOrder.ASC
        columns.append(
            {
                "field": field,
                "label": _COLUMN_LABELS[field],
                "active": active,
                "order": sorted_resources.order if active else None,
                "href": "?" + urlencode({"sort": field, "order": next_order}),
            },
        )
    return columns


def _render_index(resource_type: ResourceType, sorted_resources: SortedResources) -> str:
    service = get_resources_page_service()
    template_path = service.get_template(INDEX_TEMPLATE_NAME)
    if template_path is None:
        raise SystemError(
            ErrorMessages.TEMPLATE_NOT_FOUND.format(name=INDEX_TEMPLATE_NAME),
            message_key="TEMPLATE_NOT_FOUND",
            extra={"template": INDEX_TEMPLATE_NAME},
        )

    return render_template_string(
        template_path.read_text(encoding="utf-8"),
        resource_type=resource_type,
        resources=sorted_resources.resources,
        sort=sorted_resources.sort,
        order=sorted_resources.order,
        columns=_build_columns(resource_type, sorted_resources),
        attached_pages=service.attached_pages(resource_type, sorted_resources.resources),
        pages=service.pages_flat_view(),
        unsort_href="?unsort=1",
    )


def _index(resource_type: ResourceType) -> ResponseReturnValue:
    def _execute() -> ResponseReturnValue:
        service = get_resources_page_service()
        current_url = _current_url()

        if request.method == "POST":
            form = request.form
            outcome = service.handle_bulk_action(
                resource_type,
                form.get("with-selected"),
                parse_checked_items(form),
                current_url=current_url,
                submitted=is_action_submitted(form),
            )
            if isinstance(outcome, Redirect):
                return redirect(outcome.url)
            for alert in outcome.data.alerts:
                flash(alert.message, alert.category)

        params: dict[str, object] = {**request.args.to_dict(), "type": resource_type.value}
        sort_outcome = service.sort(
            request.args.get("sort"),
            request.args.get("order"),
            params,
            current_url=current_url,
        )
        if isinstance(sort_outcome, Redirect):
            return redirect(sort_outcome.url)

        log_info(
            "渲染资源索引页",
            module="blueprints",
            resource_type=resource_type.value,
            count=len(sort_outcome.data.resources),
            sort=sort_outcome.data.sort,
            order=sort_outcome.data.order,
        )
        return _render_index(resource_type, sort_outcome.data)

    return safe_route_call(
        _execute,
        module="blueprints",
        action=f"{resource_type.column}_index",
        public_error=f"加载{resource_type.label}列表失败",
        context={"resource_type": resource_type.value, "method": request.method},
    )


@blueprints_bp.route("/datasources/", methods=["GET", "POST"])
def datasources_index() -> ResponseReturnValue:
    """数据源索引页.

    GET 渲染列表并处理排序参数, POST 处理 "with-selected" 批量操作.

    Query Parameters:
        sort: 排序字段(name/source/release-date/author),可选.
        order: 排序方向(asc/desc),可选.
        unsort: 存在时恢复默认排序.
    """
    return _index(ResourceType.DATASOURCE)


@blueprints_bp.route("/events/", methods=["GET", "POST"])
def events_index() -> ResponseReturnValue:
    """事件索引页."""
    return _index(ResourceType.EVENT)

"""资源索引页服务.

数据源与事件索引页共用的请求处理逻辑:
- sort: 处理排序参数, 排序偏好变化时持久化并要求重定向
- handle_bulk_action: 处理 "with-selected" 批量操作
- pages_flat_view: 生成带层级标题的页面列表, 供批量操作菜单使用
- get_template: 查找索引页模板

处理结果统一返回 Redirect 或 Rendered, 由路由层转换为 HTTP 响应.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from app.constants import (
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    ErrorMessages,
    FlashCategory,
    ResourceSortField,
    ResourceType,
    SortOrder,
)
from app.core.exceptions import ValidationError
from app.infra.route_safety import log_with_context
from app.services.resources.bulk_actions import (
    AttachAllPages,
    AttachToPage,
    BulkAction,
    DeleteResources,
    DetachAllPages,
    DetachFromPage,
    parse_bulk_action,
    validate_handles,
)
from app.services.resources.resource_manager import ResourceManager
from app.services.resources.template_resolver import TemplateResolver
from app.signals import custom_actions
from app.types.resources import (
    BulkActionOutcome,
    BulkActionReport,
    PageAlert,
    PageTitle,
    Redirect,
    Rendered,
    ResourceRecord,
    SortedResources,
    SortOutcome,
)

MODULE = "blueprints"


class ResourcesPageService:
    """资源索引页读写编排."""

    def __init__(
        self,
        resource_manager: ResourceManager,
        template_resolver: TemplateResolver,
        docroot: str | Path,
    ) -> None:
        self.resource_manager = resource_manager
        self.template_resolver = template_resolver
        self.docroot = Path(docroot)

    # ------------------------------------------------------------------
    # 排序
    # ------------------------------------------------------------------
    def sort(
        self,
        sort: str | None,
        order: str | None,
        params: Mapping[str, object],
        *,
        current_url: str,
    ) -> SortOutcome:
        """处理索引页排序参数.

        Args:
            sort: 请求中的排序字段, 未提供时为 None.
            order: 请求中的排序方向, 未提供时为 None.
            params: 请求参数, 必须包含 ``type``; 含 ``unsort`` 时恢复默认排序.
            current_url: 不带查询串的当前页面地址, 作为重定向目标.

        Returns:
            SortOutcome: 排序偏好发生变化时为 Redirect, 否则为携带资源列表的 Rendered.

        Raises:
            ValidationError: 缺少或无法识别 ``type``, 或排序字段不受支持时抛出.

        """
        resource_type = self._require_type(params)
        manager = self.resource_manager
        manager.reload_sorting_preferences()

        if "unsort" in params:
            manager.set_sorting_field(resource_type, DEFAULT_SORT_FIELD, persist=False)
            manager.set_sorting_order(resource_type, DEFAULT_SORT_ORDER, persist=True)
            log_with_context(
                "info",
                "资源排序已重置",
                module=MODULE,
                action="sort",
                context={"resource_type": resource_type.value},
            )
            return Redirect(url=current_url)

        stored_field = manager.get_sorting_field(resource_type)
        stored_order = manager.get_sorting_order(resource_type)

        if sort is None and order is None:
            field, direction = stored_field, stored_order
        else:
            field = sort if sort is not None else stored_field
            direction = SortOrder.normalize(order) or stored_order
            if field not in ResourceSortField.ALL:
                raise ValidationError(
                    ErrorMessages.INVALID_SORT_FIELD.format(value=field),
                    message_key="INVALID_SORT_FIELD",
                    extra={"sort": field, "resource_type": resource_type.value},
                )
            if field != stored_field or direction != stored_order:
                manager.set_sorting_field(resource_type, field, persist=False)
                manager.set_sorting_order(resource_type, direction, persist=True)
                log_with_context(
                    "info",
                    "资源排序已更新",
                    module=MODULE,
                    action="sort",
                    context={"resource_type": resource_type.value},
                    extra={"sort": field, "order": direction},
                )
                return Redirect(url=current_url)

        resources = manager.fetch(resource_type, order_by=f"{field} {direction}")
        return Rendered(SortedResources(resources=resources, sort=field, order=direction))

    @staticmethod
    def _require_type(params: Mapping[str, object]) -> ResourceType:
        raw = params.get("type")
        if raw is None:
            raise ValidationError(
                ErrorMessages.MISSING_REQUIRED_FIELDS.format(fields="type"),
                message_key="MISSING_REQUIRED_FIELDS",
            )
        resource_type = ResourceType.parse(raw)
        if resource_type is None:
            raise ValidationError(
                ErrorMessages.INVALID_RESOURCE_TYPE.format(value=raw),
                message_key="INVALID_RESOURCE_TYPE",
                extra={"type": str(raw)},
            )
        return resource_type

    # ------------------------------------------------------------------
    # 页面
    # ------------------------------------------------------------------
    def pages_flat_view(self) -> list[PageTitle]:
        """按原生顺序返回全部页面的层级标题."""
        page_manager = self.resource_manager.page_manager
        pages: list[PageTitle] = []
        for page_id in page_manager.list_ids():
            title = page_manager.resolve_page_title(page_id)
            if title is not None:
                pages.append(PageTitle(id=page_id, title=title))
        return pages

    def attached_pages(
        self,
        resource_type: ResourceType,
        resources: Sequence[ResourceRecord],
    ) -> dict[str, list[PageTitle]]:
        return {
            record.handle: self.resource_manager.get_attached_pages(resource_type, record.handle)
            for record in resources
        }

    # ------------------------------------------------------------------
    # 批量操作
    # ------------------------------------------------------------------
    def handle_bulk_action(
        self,
        resource_type: ResourceType,
        action: str | None,
        items: Sequence[str],
        *,
        current_url: str,
        submitted: bool = True,
        context: str | None = None,
    ) -> BulkActionOutcome:
        """处理索引页的批量操作.

        无论是否提交, 都会先发送 ``custom_actions`` 信号, 让扩展处理自定义操作,
        之后才校验资源标识.

        Args:
            resource_type: 资源类型.
            action: with-selected 字段原始值.
            items: 选中的资源 handle.
            current_url: 重定向目标.
            submitted: 表单中是否包含 ``action[...]`` 按钮.
            context: 通知扩展时使用的 URL 上下文, 默认为资源类型对应的索引页路径.

        Returns:
            BulkActionOutcome: 操作全部成功时为 Redirect; 删除失败时为携带提示的 Rendered;
            未提交、未选中或未知操作时为不带提示的 Rendered.

        Raises:
            ValidationError: 选中的资源标识包含非法字符时抛出.

        """
        handles = list(items)
        custom_actions.send(
            self,
            context=context or resource_type.context,
            resource_type=resource_type,
            action=action,
            items=handles,
        )
        validate_handles(handles)

        if not submitted or not handles:
            return Rendered(BulkActionReport())

        bulk_action = parse_bulk_action(action)
        log_context = {"resource_type": resource_type.value}
        log_extra = {"bulk_action": bulk_action.__class__.__name__, "item_count": len(handles)}

        if isinstance(bulk_action, DeleteResources):
            report = self._delete(resource_type, handles)
            log_with_context(
                "warning" if report.has_failure else "info",
                "资源批量删除完成",
                module=MODULE,
                action="handle_bulk_action",
                context=log_context,
                extra={**log_extra, "failed_count": len(report.alerts)},
            )
            if report.has_failure:
                return Rendered(report)
            return Redirect(url=current_url)

        if not self._apply_attachment_action(resource_type, bulk_action, handles):
            log_with_context(
                "debug",
                "忽略未识别的批量操作",
                module=MODULE,
                action="handle_bulk_action",
                context=log_context,
                extra={**log_extra, "raw_action": action or ""},
            )
            return Rendered(BulkActionReport())

        log_with_context(
            "info",
            "资源批量操作完成",
            module=MODULE,
            action="handle_bulk_action",
            context=log_context,
            extra=log_extra,
        )
        return Redirect(url=current_url)

    def _apply_attachment_action(
        self,
        resource_type: ResourceType,
        bulk_action: BulkAction,
        handles: Sequence[str],
    ) -> bool:
        """执行挂载/卸载类操作, 未识别的操作返回 False."""
        manager = self.resource_manager
        if isinstance(bulk_action, AttachToPage):
            for handle in handles:
                manager.attach(resource_type, handle, bulk_action.page_id)
            return True
        if isinstance(bulk_action, DetachFromPage):
            for handle in handles:
                manager.detach(resource_type, handle, bulk_action.page_id)
            return True
        if isinstance(bulk_action, AttachAllPages):
            page_ids = manager.page_manager.list_ids()
            for handle in handles:
                for page_id in page_ids:
                    manager.attach(resource_type, handle, page_id)
            return True
        if isinstance(bulk_action, DetachAllPages):
            page_ids = manager.page_manager.list_ids()
            for handle in handles:
                for page_id in page_ids:
                    manager.detach(resource_type, handle, page_id)
            return True
        return False

    def _delete(self, resource_type: ResourceType, handles: Sequence[str]) -> BulkActionReport:
        """逐个删除驱动文件, 单个失败只记录提示, 不中断后续删除."""
        report = BulkActionReport()
        for handle in handles:
            path = self.resource_manager.resolve_driver_path(resource_type, handle)
            try:
                path.unlink()
            except OSError as exc:
                report.alerts.append(PageAlert(message=self._delete_failed_message(path), category=FlashCategory.ERROR))
                log_with_context(
                    "warning",
                    "资源驱动文件删除失败",
                    module=MODULE,
                    action="delete",
                    context={"resource_type": resource_type.value, "handle": handle},
                    extra={"path": str(path), "error_type": exc.__class__.__name__, "error_message": str(exc)},
                )
                continue

            for page in self.resource_manager.get_attached_pages(resource_type, handle):
                self.resource_manager.detach(resource_type, handle, page.id)
        return report

    def _delete_failed_message(self, path: Path) -> str:
        folder = path.parent
        try:
            display_folder = "/" + folder.relative_to(self.docroot).as_posix()
        except ValueError:
            display_folder = str(folder)
        return "{} {}".format(
            ErrorMessages.FILE_DELETE_FAILED.format(file=path.name),
            ErrorMessages.CHECK_DIRECTORY_PERMISSIONS.format(folder=display_folder),
        )

    # ------------------------------------------------------------------
    # 模板
    # ------------------------------------------------------------------
    def get_template(self, name: str) -> Path | None:
        return self.template_resolver.resolve(name)


__all__ = ["ResourcesPageService"]

"""砚台 - Flask 应用初始化.

基于Flask的内容管理后台,提供数据源与事件资源的索引页.
"""

import logging
from importlib import import_module
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Blueprint, Flask, jsonify, request
from flask.typing import ResponseReturnValue
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect

from app.constants import FlashCategory
from app.infra.logging.request_middleware import register_request_logging
from app.settings import Settings
from app.types.extensions import InkstoneFlask
from app.utils.response_utils import unified_error_response
from app.utils.structlog_config import (
    ErrorContext,
    configure_structlog,
    enhanced_error_handler,
)
from app.utils.time_utils import TimeFormats, time_utils

# 初始化扩展
db = SQLAlchemy()
csrf = CSRFProtect()


def create_app(*, settings: Settings | None = None) -> InkstoneFlask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        InkstoneFlask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = InkstoneFlask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 初始化扩展
    initialize_extensions(app)

    # 初始化资源索引页服务
    initialize_services(app, resolved_settings)

    # 注册蓝图
    configure_blueprints(app)

    # 配置日志
    configure_logging(app)

    # 配置统一日志系统
    configure_structlog(app)
    register_request_logging(app)

    # 设置全局日志级别
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    # 注册增强的错误处理器
    app.enhanced_error_handler = enhanced_error_handler

    # 注册全局错误处理器
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        payload, status_code = unified_error_response(error, context=ErrorContext(error, request))
        return jsonify(payload), status_code

    # 配置模板过滤器
    configure_template_filters(app)

    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    """
    app.config.from_mapping(settings.to_flask_config())
    app.config.setdefault("APPLICATION_ROOT", "/")
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_NAME"] = "inkstone_session"


def initialize_extensions(app: Flask) -> None:
    """初始化数据库与 CSRF 保护."""
    db.init_app(app)
    csrf.init_app(app)


def initialize_services(app: Flask, settings: Settings) -> None:
    """组装资源索引页服务并挂载到 app.extensions.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,提供 workspace、配置文件与模板目录.

    """
    from app.infra.config_store import ConfigStore
    from app.routes.blueprints.resources import RESOURCES_PAGE_SERVICE_KEY
    from app.services.resources.resource_manager import ResourceManager
    from app.services.resources.resources_page_service import ResourcesPageService
    from app.services.resources.template_resolver import TemplateResolver

    resource_manager = ResourceManager(ConfigStore(settings.config_file), settings.workspace_dir)
    template_resolver = TemplateResolver(settings.workspace_template_dir, settings.template_dir)
    app.extensions[RESOURCES_PAGE_SERVICE_KEY] = ResourcesPageService(
        resource_manager,
        template_resolver,
        settings.docroot,
    )


def configure_blueprints(app: Flask) -> None:
    """注册所有蓝图以暴露路由.

    Args:
        app: Flask 应用实例.

    """
    blueprint_specs: list[tuple[str, str, str | None]] = [
        ("app.routes.blueprints", "blueprints_bp", "/blueprints"),
    ]

    blueprints: list[tuple[Blueprint, str | None]] = []
    for module_path, attr_name, prefix in blueprint_specs:
        module = import_module(module_path)
        blueprint = getattr(module, attr_name)
        blueprints.append((blueprint, prefix))

    for blueprint, prefix in blueprints:
        if prefix:
            app.register_blueprint(blueprint, url_prefix=prefix)
        else:
            app.register_blueprint(blueprint)


def configure_logging(app: Flask) -> None:
    """配置日志系统与文件处理器.

    Args:
        app: Flask 应用实例.

    """
    if not app.debug and not app.testing:
        # 创建日志目录
        log_path = Path(app.config["LOG_FILE"])
        log_dir = log_path.parent
        log_dir.mkdir(parents=True, exist_ok=True)

        # 配置文件日志处理器
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=app.config["LOG_MAX_SIZE"],
            backupCount=app.config["LOG_BACKUP_COUNT"],
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"),
        )
        file_handler.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.addHandler(file_handler)

        app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.info("砚台应用启动")


def configure_template_filters(app: Flask) -> None:
    """注册索引页使用的模板过滤器.

    Args:
        app: Flask 应用实例.

    """
    @app.template_filter("release_date")
    def release_date_filter(value: str | None) -> str:
        """发布日期格式化过滤器."""
        return time_utils.format_utc_time(value, TimeFormats.DATE_FORMAT)

    @app.template_filter("flash_class")
    def flash_class_filter(category: str) -> str:
        """Flash 类别转换为 CSS 类名."""
        return FlashCategory.get_bootstrap_class(category)


from app.models import page  # noqa: F401, E402

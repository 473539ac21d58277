"""后台蓝图(数据源/事件)路由包,集中导出蓝图."""

from app.routes.blueprints.resources import blueprints_bp

__all__ = ["blueprints_bp"]

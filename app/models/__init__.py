"""数据模型模块.

主要模型:
- Page: 页面模型
- page_resources: 页面与数据源/事件的挂载关系表
"""

__all__ = ["Page", "page_resources"]


def __getattr__(name: str):
    """延迟加载模型, 避免初始化周期引发的循环导入."""
    if name in __all__:
        from app.models import page

        return getattr(page, name)
    msg = f"module 'app.models' has no attribute {name!r}"
    raise AttributeError(msg)

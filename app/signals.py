"""
砚台 - 扩展委托信号
===================
扩展通过订阅这些信号参与后台页面的处理流程, 无需修改核心代码.
"""

from blinker import Namespace

_signals = Namespace()

# 资源索引页批量操作分发前发送(无论表单是否提交了操作)
# 扩展可借此处理自己追加到 "with-selected" 菜单里的自定义操作
# Kwargs: context (str, 例如 '/blueprints/datasources/'), resource_type (ResourceType),
#         action (str | None), items (list[str])
custom_actions = _signals.signal("custom-actions")

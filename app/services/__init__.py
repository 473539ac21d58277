"""服务层模块.

提供业务逻辑服务,路由层只负责参数解析与响应转换.

主要模块:
- resources: 数据源/事件资源管理、排序偏好、批量操作与模板查找
- pages: 页面列表与层级标题
"""

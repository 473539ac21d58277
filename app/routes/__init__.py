"""路由模块。

定义所有 HTTP 路由端点，处理客户端请求并返回响应。

主要路由：
- blueprints: 数据源与事件索引页（排序、批量删除、挂载/卸载页面）
"""

# 该文件仅作为包标识，避免在导入阶段引入循环依赖。

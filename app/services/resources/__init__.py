"""数据源与事件资源相关服务."""

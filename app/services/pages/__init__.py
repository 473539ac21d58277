"""页面相关服务."""

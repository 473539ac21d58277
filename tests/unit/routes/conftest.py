# tests/unit/routes/conftest.py
"""路由契约测试专用 fixtures."""

import pytest


@pytest.fixture(scope="function")
def client(app):
    """创建测试客户端."""
    return app.test_client()

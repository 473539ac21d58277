from __future__ import annotations

import pytest

import app.infra.route_safety as route_safety_module
from app.core.exceptions import SystemError, ValidationError
from app.infra.route_safety import safe_route_call


class _DummySession:
    def __init__(self, *, fail_commit: bool = False) -> None:
        self.commits = 0
        self.rollbacks = 0
        self._fail_commit = fail_commit

    def commit(self) -> None:
        if self._fail_commit:
            raise RuntimeError("commit boom")
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture
def session(monkeypatch) -> _DummySession:
    dummy = _DummySession()
    monkeypatch.setattr(route_safety_module.db, "session", dummy)
    return dummy


@pytest.mark.unit
def test_safe_route_call_commits_on_success(session: _DummySession) -> None:
    result = safe_route_call(lambda: "ok", module="blueprints", action="index", public_error="失败")

    assert result == "ok"
    assert session.commits == 1
    assert session.rollbacks == 0


@pytest.mark.unit
def test_safe_route_call_reraises_expected_errors(session: _DummySession) -> None:
    def _raise() -> None:
        raise ValidationError("bad sort")

    with pytest.raises(ValidationError):
        safe_route_call(_raise, module="blueprints", action="index", public_error="失败")

    assert session.rollbacks == 1
    assert session.commits == 0


@pytest.mark.unit
def test_safe_route_call_wraps_unexpected_errors(session: _DummySession) -> None:
    def _raise() -> None:
        raise KeyError("boom")

    with pytest.raises(SystemError) as exc_info:
        safe_route_call(_raise, module="blueprints", action="index", public_error="加载列表失败")

    assert exc_info.value.message == "加载列表失败"
    assert session.rollbacks == 1


@pytest.mark.unit
def test_safe_route_call_wraps_commit_failure(monkeypatch) -> None:
    dummy = _DummySession(fail_commit=True)
    monkeypatch.setattr(route_safety_module.db, "session", dummy)

    with pytest.raises(SystemError):
        safe_route_call(lambda: "ok", module="blueprints", action="index", public_error="失败")

    assert dummy.rollbacks == 1

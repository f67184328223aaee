"""Tests for the AppContext service-call boundary."""

from pathlib import Path

import pytest

from roomdir.commands._context import AppContext
from roomdir.config.settings import RoomdirSettings
from roomdir.services.errors import ErrorCode
from roomdir.services.guards import require_caller
from roomdir.services.result import ServiceResult


@pytest.fixture
def app(data_root: Path) -> AppContext:
    return AppContext(RoomdirSettings.from_cli(data_root=data_root))


class TestCall:
    def test_passes_result_through(self, app: AppContext) -> None:
        ok = ServiceResult(ok=True, op="x")
        assert app.call("x", lambda: ok) is ok

    def test_guard_rejection_becomes_result(self, app: AppContext) -> None:
        request = app.request(alias_token="room")

        def action() -> ServiceResult:
            owner = require_caller(request, op="bind_alias")
            return ServiceResult(ok=True, op="bind_alias", data={"owner": owner})

        result = app.call("bind_alias", action)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == ErrorCode.MISSING_TOKEN

    def test_crash_becomes_internal_error(self, app: AppContext) -> None:
        def boom() -> ServiceResult:
            raise RuntimeError("database is on fire")

        result = app.call("resolve_alias", boom)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == ErrorCode.INTERNAL_ERROR
        assert result.error.message == "Internal server error"


class TestRequest:
    def test_uses_configured_domain(self, app: AppContext) -> None:
        request = app.request(alias_token="room", caller="@a:example.org")
        assert request.domain == "example.org"
        assert request.alias_token == "room"
        assert request.caller == "@a:example.org"


class TestEmit:
    def test_failure_exits_1(self, app: AppContext) -> None:
        with pytest.raises(SystemExit) as exc_info:
            app.emit(ServiceResult.failure("x", ErrorCode.NOT_FOUND, "missing"))
        assert exc_info.value.code == 1

    def test_success_prints_warnings(
        self, app: AppContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        app.emit(ServiceResult(ok=True, op="x", warnings=["Plugin hook y failed"]))
        captured = capsys.readouterr()
        assert "OK x" in captured.out
        assert "WARNING: Plugin hook y failed" in captured.err

    def test_homeserver_is_lazy(self, app: AppContext, data_root: Path) -> None:
        assert not (data_root / ".roomdir").exists()
        hs = app.homeserver
        assert hs is app.homeserver
        assert hs.plugin_manager is not None
        hs.close()

"""Tests for ServiceResult formatting."""

import json

from roomdir.output.formatters import format_result
from roomdir.services.errors import ErrorCode
from roomdir.services.result import ServiceResult

OK = ServiceResult(
    ok=True,
    op="resolve_alias",
    data={"alias": "#my_room:example.org", "room_id": "!abc:example.org", "servers": ["a", "b"]},
)
FAILED = ServiceResult.failure("bind_alias", ErrorCode.ALIAS_TAKEN, "Room alias already taken")


class TestJson:
    def test_success(self) -> None:
        parsed = json.loads(format_result(OK, json_output=True))
        assert parsed["ok"] is True
        assert parsed["op"] == "resolve_alias"
        assert parsed["data"]["servers"] == ["a", "b"]

    def test_failure(self) -> None:
        parsed = json.loads(format_result(FAILED, json_output=True))
        assert parsed["ok"] is False
        assert parsed["error"]["code"] == "ALIAS_TAKEN"

    def test_json_beats_quiet(self) -> None:
        assert format_result(OK, json_output=True, quiet=True).startswith("{")


class TestQuiet:
    def test_success(self) -> None:
        assert format_result(OK, quiet=True) == "OK: resolve_alias"

    def test_failure(self) -> None:
        assert format_result(FAILED, quiet=True) == "ERROR: bind_alias: Room alias already taken"


class TestHuman:
    def test_success_table(self) -> None:
        out = format_result(OK)
        assert out.splitlines()[0] == "OK resolve_alias"
        assert "#my_room:example.org" in out
        assert "!abc:example.org" in out
        assert "a, b" in out

    def test_success_without_data(self) -> None:
        assert format_result(ServiceResult(ok=True, op="noop")) == "OK noop"

    def test_failure(self) -> None:
        out = format_result(FAILED)
        assert out.splitlines()[0] == "ERROR bind_alias"
        assert "[ALIAS_TAKEN]" in out
        assert "Room alias already taken" in out

    def test_no_ansi_codes(self) -> None:
        assert "\x1b[" not in format_result(OK)


class TestWireMeta:
    def test_human_failure_with_meta(self) -> None:
        failed = FAILED.model_copy(
            update={"meta": {"errcode": "IO_RUMA_ALIAS_TAKEN", "http_status": 409}}
        )
        assert format_result(failed).splitlines()[-1] == "  IO_RUMA_ALIAS_TAKEN (HTTP 409)"

    def test_json_failure_with_meta(self) -> None:
        failed = FAILED.model_copy(update={"meta": {"errcode": "M_NOT_FOUND", "http_status": 404}})
        assert json.loads(format_result(failed, json_output=True))["meta"]["http_status"] == 404

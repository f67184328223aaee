"""Error code taxonomy and its mapping onto the client-server wire format.

Services only ever set ``ServiceError.code``; transport adapters call
:func:`to_matrix_error` to obtain the HTTP status and JSON error body.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roomdir.services.result import ServiceError, ServiceResult


class ErrorCode(StrEnum):
    """Every error code a roomdir service or guard can return."""

    INVALID_ALIAS = "INVALID_ALIAS"
    MISSING_PARAM = "MISSING_PARAM"
    BAD_JSON = "BAD_JSON"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ALIAS_TAKEN = "ALIAS_TAKEN"
    NOT_FOUND = "NOT_FOUND"
    MISSING_TOKEN = "MISSING_TOKEN"
    UNKNOWN_TOKEN = "UNKNOWN_TOKEN"
    ROOM_EXISTS = "ROOM_EXISTS"
    INVALID_ROOM_ID = "INVALID_ROOM_ID"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# code -> (errcode, HTTP status)
_WIRE_ERRORS: dict[str, tuple[str, int]] = {
    ErrorCode.NOT_FOUND: ("M_NOT_FOUND", 404),
    ErrorCode.MISSING_PARAM: ("M_MISSING_PARAM", 400),
    ErrorCode.BAD_JSON: ("M_BAD_JSON", 400),
    ErrorCode.INVALID_ALIAS: ("M_INVALID_PARAM", 400),
    ErrorCode.ROOM_NOT_FOUND: ("M_NOT_FOUND", 422),
    ErrorCode.ALIAS_TAKEN: ("IO_RUMA_ALIAS_TAKEN", 409),
    ErrorCode.MISSING_TOKEN: ("M_MISSING_TOKEN", 401),
    ErrorCode.UNKNOWN_TOKEN: ("M_UNKNOWN_TOKEN", 401),
    ErrorCode.ROOM_EXISTS: ("M_ROOM_IN_USE", 409),
    ErrorCode.INVALID_ROOM_ID: ("M_INVALID_PARAM", 400),
}

_UNKNOWN_ERROR = ("M_UNKNOWN", 500)


def to_matrix_error(error: ServiceError) -> tuple[int, dict[str, str]]:
    """Map *error* to ``(http_status, {"errcode": ..., "error": ...})``.

    Unrecognized codes become an opaque 500 so internal detail never
    reaches the client.
    """
    errcode, status = _WIRE_ERRORS.get(error.code, _UNKNOWN_ERROR)
    message = error.message if error.code in _WIRE_ERRORS else "Internal server error"
    return status, {"errcode": errcode, "error": message}


def with_wire_error(result: ServiceResult) -> ServiceResult:
    """Copy a failed *result* with ``errcode`` and ``http_status`` added to ``meta``.

    Successful results are returned unchanged.
    """
    if result.ok or result.error is None:
        return result
    status, body = to_matrix_error(result.error)
    meta = {**(result.meta or {}), "errcode": body["errcode"], "http_status": status}
    return result.model_copy(update={"meta": meta})

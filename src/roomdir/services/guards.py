"""Caller guard — the explicit auth gate in front of Bind and Unbind.

Transport adapters call :func:`require_caller` before any mutating
directory operation. It either yields the owner ID or raises
:class:`GuardRejected` carrying the failed result to send back.
"""

from __future__ import annotations

from roomdir.domain.ids import validate_user_id
from roomdir.services.errors import ErrorCode
from roomdir.services.requests import RequestContext
from roomdir.services.result import ServiceResult


class GuardRejected(Exception):
    """The request was rejected before reaching the directory."""

    def __init__(self, result: ServiceResult) -> None:
        message = result.error.message if result.error else result.op
        super().__init__(message)
        self.result = result


def require_caller(context: RequestContext, *, op: str) -> str:
    """Return the authenticated caller of *context* as an owner ID."""
    if context.caller is None:
        raise GuardRejected(
            ServiceResult.failure(op, ErrorCode.MISSING_TOKEN, "Missing caller identity")
        )
    if not validate_user_id(context.caller):
        raise GuardRejected(
            ServiceResult.failure(
                op,
                ErrorCode.UNKNOWN_TOKEN,
                f"Unrecognised caller identity: {context.caller}",
            )
        )
    return context.caller

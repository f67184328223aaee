"""Immutable request inputs handed to the directory by a transport adapter."""

from __future__ import annotations

from pydantic import BaseModel, ValidationError


class BadJson(ValueError):
    """Raised when a bind request body is not a JSON object with a string ``room_id``."""


class RequestContext(BaseModel):
    """Per-request values resolved by the transport before a directory call.

    Attributes:
        caller: Authenticated user ID, or None for anonymous requests.
        alias_token: Alias segment from the request target; None if absent.
        domain: Homeserver domain the alias is scoped to.
    """

    model_config = {"frozen": True}

    caller: str | None = None
    alias_token: str | None = None
    domain: str


class BindRequestBody(BaseModel):
    """Body of a bind request: ``{"room_id": "!abc:example.org"}``."""

    room_id: str


def parse_bind_body(raw: str | bytes) -> BindRequestBody:
    """Parse a raw JSON bind body, raising :class:`BadJson` on any defect."""
    try:
        return BindRequestBody.model_validate_json(raw)
    except ValidationError as exc:
        msg = f"Invalid bind request body: {exc.errors()[0]['msg']}"
        raise BadJson(msg) from exc

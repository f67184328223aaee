"""DirectoryService — resolve, bind, and unbind room aliases.

Pipeline for every operation: NORMALIZE → CHECK → STORE → RESPOND.

Per-alias state machine::

    Unbound --bind--> Bound --unbind (owner)--> Unbound

A bind on a bound alias fails with ALIAS_TAKEN, including a repeat bind by
the original owner. An unbind on an unbound alias, or by anyone but the
owner, fails with NOT_FOUND. The two unbind failures are indistinguishable
so non-owners learn nothing about existing bindings.

Atomicity comes from the store's conditional writes; this service holds
no locks.
"""

from __future__ import annotations

import structlog

from roomdir.domain.ids import AliasId, InvalidAlias, parse_alias_token
from roomdir.domain.ownership import can_delete
from roomdir.domain.records import AliasRecord
from roomdir.infrastructure.repositories.aliases import CreateOutcome
from roomdir.services._helpers import now_iso
from roomdir.services.base import BaseService
from roomdir.services.errors import ErrorCode
from roomdir.services.requests import BadJson, RequestContext, parse_bind_body
from roomdir.services.result import ServiceResult

log = structlog.get_logger(__name__)

_UNBIND_NOT_FOUND = "Provided room alias did not exist or you do not have access to delete it."


class DirectoryService(BaseService):
    """Orchestrates the alias directory for one homeserver."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, context: RequestContext) -> ServiceResult:
        """Look up the room an alias points at.

        Returns ``{alias, room_id, servers}`` on a hit. Malformed and
        unbound aliases both yield NOT_FOUND.
        """
        op = "resolve_alias"
        alias = self._normalize(context, op, invalid_code=ErrorCode.NOT_FOUND)
        if isinstance(alias, ServiceResult):
            return alias

        record = self._homeserver.aliases.lookup(alias)
        if record is None:
            return ServiceResult.failure(
                op,
                ErrorCode.NOT_FOUND,
                f"No room alias found with ID {context.alias_token}",
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "alias": alias.canonical,
                "room_id": record.room_id,
                "servers": list(record.servers),
            },
        )

    def bind(self, context: RequestContext, room_id: str, owner: str) -> ServiceResult:
        """Bind an alias to *room_id* on behalf of *owner*.

        *owner* must already have passed :func:`roomdir.services.guards.require_caller`.
        """
        op = "bind_alias"
        alias = self._normalize(context, op, invalid_code=ErrorCode.INVALID_ALIAS)
        if isinstance(alias, ServiceResult):
            return alias
        return self._bind(op, alias, room_id, owner)

    def bind_from_body(
        self, context: RequestContext, body: str | bytes, owner: str
    ) -> ServiceResult:
        """Bind using a raw JSON request body of the form ``{"room_id": ...}``."""
        op = "bind_alias"
        alias = self._normalize(context, op, invalid_code=ErrorCode.INVALID_ALIAS)
        if isinstance(alias, ServiceResult):
            return alias

        try:
            request = parse_bind_body(body)
        except BadJson as exc:
            return ServiceResult.failure(op, ErrorCode.BAD_JSON, str(exc))

        return self._bind(op, alias, request.room_id, owner)

    def unbind(self, context: RequestContext, owner: str) -> ServiceResult:
        """Remove an alias binding owned by *owner*."""
        op = "unbind_alias"
        alias = self._normalize(context, op, invalid_code=ErrorCode.NOT_FOUND)
        if isinstance(alias, ServiceResult):
            return alias

        aliases = self._homeserver.aliases
        record = aliases.lookup(alias)
        if record is not None and not can_delete(record, owner):
            log.debug("alias.unbind_denied", alias=alias.canonical, requester=owner)
            return ServiceResult.failure(op, ErrorCode.NOT_FOUND, _UNBIND_NOT_FOUND)

        # delete_if_owner is the authoritative ownership check.
        if aliases.delete_if_owner(alias, owner) == 0:
            return ServiceResult.failure(op, ErrorCode.NOT_FOUND, _UNBIND_NOT_FOUND)

        log.info("alias.unbound", alias=alias.canonical, owner=owner)
        warnings: list[str] = []
        self._dispatch_event(
            "post_alias_unbind",
            {"alias": alias.canonical, "owner": owner},
            warnings,
        )
        return ServiceResult(ok=True, op=op, data={"alias": alias.canonical}, warnings=warnings)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _normalize(
        self,
        context: RequestContext,
        op: str,
        *,
        invalid_code: ErrorCode,
    ) -> AliasId | ServiceResult:
        """Turn the request's alias token into an AliasId or a failed result."""
        if context.alias_token is None:
            return ServiceResult.failure(
                op,
                ErrorCode.MISSING_PARAM,
                "Missing required parameter: room_alias",
                param="room_alias",
            )
        try:
            return parse_alias_token(context.alias_token, context.domain)
        except InvalidAlias as exc:
            log.debug("alias.invalid", token=context.alias_token, reason=str(exc))
            if invalid_code is ErrorCode.NOT_FOUND:
                message = f"No room alias found with ID {context.alias_token}"
            else:
                message = str(exc)
            return ServiceResult.failure(op, invalid_code, message)

    def _bind(self, op: str, alias: AliasId, room_id: str, owner: str) -> ServiceResult:
        hs = self._homeserver

        if not hs.rooms.exists(room_id):
            return ServiceResult.failure(
                op,
                ErrorCode.ROOM_NOT_FOUND,
                f"Room not found: {room_id}",
                room_id=room_id,
            )

        record = AliasRecord.new(
            alias,
            room_id,
            owner,
            local_domain=hs.domain,
            created=now_iso(),
        )
        if hs.aliases.create_if_absent(record) is CreateOutcome.CONFLICT:
            log.info("alias.bind_conflict", alias=alias.canonical, owner=owner)
            return ServiceResult.failure(
                op,
                ErrorCode.ALIAS_TAKEN,
                f"Room alias already taken: {alias.canonical}",
                alias=alias.canonical,
            )

        log.info("alias.bound", alias=alias.canonical, room_id=room_id, owner=owner)
        warnings: list[str] = []
        self._dispatch_event(
            "post_alias_bind",
            {
                "alias": alias.canonical,
                "room_id": room_id,
                "owner": owner,
                "servers": list(record.servers),
            },
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"alias": alias.canonical, "room_id": room_id},
            warnings=warnings,
        )

"""AliasRecord — a binding from an alias to a room.

INVARIANT: A record is created once by a successful bind and destroyed once
by a successful unbind. It is never updated in between; the owner in
particular is fixed for the life of the record.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from roomdir.domain.ids import AliasId


class AliasRecord(BaseModel):
    """A bound alias.

    Attributes:
        alias: The canonical alias this record is keyed by.
        room_id: Room the alias points at (validated at creation only).
        owner: User ID of the caller who created the binding.
        servers: Homeserver domains able to resolve the alias, in
            insertion order. Always contains the local domain.
        created: ISO 8601 creation timestamp.
    """

    model_config = {"frozen": True}

    alias: AliasId
    room_id: str
    owner: str
    servers: list[str] = Field(min_length=1)
    created: str

    @classmethod
    def new(
        cls,
        alias: AliasId,
        room_id: str,
        owner: str,
        *,
        local_domain: str,
        created: str,
    ) -> AliasRecord:
        """Build a fresh record advertising only the local domain."""
        return cls(
            alias=alias,
            room_id=room_id,
            owner=owner,
            servers=[local_domain],
            created=created,
        )

"""RoomService — register rooms the directory may bind aliases to."""

from __future__ import annotations

import structlog

from roomdir.domain.ids import generate_room_id, validate_room_id
from roomdir.services._helpers import now_iso
from roomdir.services.base import BaseService
from roomdir.services.errors import ErrorCode
from roomdir.services.result import ServiceResult

log = structlog.get_logger(__name__)


class RoomService(BaseService):
    """Thin service over the room registry."""

    def register_room(self, creator: str, *, room_id: str | None = None) -> ServiceResult:
        """Record a room as existing. Generates an ID on the local domain if none is given."""
        op = "register_room"
        hs = self._homeserver

        if room_id is None:
            room_id = generate_room_id(hs.domain)
        elif not validate_room_id(room_id):
            return ServiceResult.failure(
                op, ErrorCode.INVALID_ROOM_ID, f"Invalid room ID: {room_id}"
            )

        if not hs.rooms.register(room_id, creator, now_iso()):
            return ServiceResult.failure(
                op, ErrorCode.ROOM_EXISTS, f"Room already exists: {room_id}", room_id=room_id
            )

        log.info("room.registered", room_id=room_id, creator=creator)
        return ServiceResult(ok=True, op=op, data={"room_id": room_id, "creator": creator})

    def show_room(self, room_id: str) -> ServiceResult:
        """Return the registry row for *room_id*."""
        op = "show_room"
        row = self._homeserver.rooms.get(room_id)
        if row is None:
            return ServiceResult.failure(op, ErrorCode.ROOM_NOT_FOUND, f"Room not found: {room_id}")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "room_id": row["room_id"],
                "creator": row["creator"],
                "created": row["created"],
            },
        )

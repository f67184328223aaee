"""Room registry consulted before an alias is bound."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine

from roomdir.domain.ids import validate_room_id
from roomdir.infrastructure.database.schema import rooms


class RoomRegistry:
    """Encapsulates SQL for the ``rooms`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def exists(self, room_id: str) -> bool:
        """Whether *room_id* names a known room. Malformed IDs never exist."""
        if not validate_room_id(room_id):
            return False
        with self._engine.connect() as conn:
            row = conn.execute(select(rooms.c.room_id).where(rooms.c.room_id == room_id)).first()
        return row is not None

    def register(self, room_id: str, creator: str | None, created: str) -> bool:
        """Insert a room row. Returns False if the room was already known."""
        stmt = (
            sqlite_insert(rooms)
            .values(room_id=room_id, creator=creator, created=created)
            .on_conflict_do_nothing(index_elements=[rooms.c.room_id])
        )
        with self._engine.begin() as conn:
            result = conn.execute(stmt)
        return result.rowcount == 1

    def get(self, room_id: str) -> dict[str, Any] | None:
        """Fetch the room row as a dict, or None."""
        with self._engine.connect() as conn:
            row = conn.execute(select(rooms).where(rooms.c.room_id == room_id)).mappings().first()
        return dict(row) if row is not None else None

"""Alias record store — atomic conditional writes keyed by canonical alias.

Both mutating operations are a single conditional statement, so their
outcome is decided by the database under its write lock:

- ``create_if_absent``: ``INSERT ... ON CONFLICT(alias) DO NOTHING``.
  First committer wins; every other attempt sees zero affected rows.
- ``delete_if_owner``: ``DELETE ... WHERE alias = ? AND owner = ?``.
  A missing alias and an alias owned by someone else both affect zero rows.

Each method accepts an optional ``Connection``. When given, the statement
joins the caller's transaction; otherwise it runs in its own
``engine.begin()`` block.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from roomdir.domain.ids import AliasId
from roomdir.domain.records import AliasRecord
from roomdir.infrastructure.database.schema import room_aliases

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine


class CreateOutcome(StrEnum):
    """Result of :meth:`AliasStore.create_if_absent`."""

    OK = "ok"
    CONFLICT = "conflict"


class AliasStore(Protocol):
    """Storage contract the directory service depends on."""

    def lookup(self, alias: AliasId) -> AliasRecord | None: ...

    def create_if_absent(self, record: AliasRecord) -> CreateOutcome: ...

    def delete_if_owner(self, alias: AliasId, owner: str) -> int: ...


class SqlAliasStore:
    """SQLite-backed :class:`AliasStore`."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @contextmanager
    def _connection(self, conn: Connection | None) -> Iterator[Connection]:
        if conn is not None:
            yield conn
            return
        with self._engine.begin() as own:
            yield own

    def lookup(self, alias: AliasId, *, conn: Connection | None = None) -> AliasRecord | None:
        """Return the record bound to *alias*, or None."""
        with self._connection(conn) as c:
            row = (
                c.execute(select(room_aliases).where(room_aliases.c.alias == alias.canonical))
                .mappings()
                .first()
            )
        if row is None:
            return None
        return _row_to_record(row)

    def create_if_absent(
        self, record: AliasRecord, *, conn: Connection | None = None
    ) -> CreateOutcome:
        """Persist *record* unless its alias is already bound."""
        stmt = (
            sqlite_insert(room_aliases)
            .values(
                alias=record.alias.canonical,
                localpart=record.alias.localpart,
                domain=record.alias.domain,
                room_id=record.room_id,
                owner=record.owner,
                servers=json.dumps(record.servers),
                created=record.created,
            )
            .on_conflict_do_nothing(index_elements=[room_aliases.c.alias])
        )
        with self._connection(conn) as c:
            result = c.execute(stmt)
        return CreateOutcome.OK if result.rowcount == 1 else CreateOutcome.CONFLICT

    def delete_if_owner(self, alias: AliasId, owner: str, *, conn: Connection | None = None) -> int:
        """Remove the record for *alias* only if *owner* created it.

        Returns the number of rows removed (0 or 1).
        """
        stmt = delete(room_aliases).where(
            room_aliases.c.alias == alias.canonical,
            room_aliases.c.owner == owner,
        )
        with self._connection(conn) as c:
            result = c.execute(stmt)
        return int(result.rowcount)


def _row_to_record(row: Any) -> AliasRecord:
    return AliasRecord(
        alias=AliasId(localpart=row["localpart"], domain=row["domain"]),
        room_id=row["room_id"],
        owner=row["owner"],
        servers=json.loads(row["servers"]),
        created=row["created"],
    )

"""Database engine setup for SQLite with WAL mode.

WAL mode lets readers proceed while a writer holds the lock; the busy
timeout makes concurrent writers queue instead of failing immediately.
The DB is stored at {data_root}/.roomdir/{filename}.

SQLAlchemy Core (not ORM) is used: every directory operation is a single
short statement, so sessions and identity maps buy nothing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from roomdir.infrastructure.database.schema import metadata

DEFAULT_BUSY_TIMEOUT_MS = 30_000


def create_db_engine(db_path: Path, *, busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS) -> Engine:
    """Create a SQLite engine with WAL mode and a busy timeout."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
        cursor.close()

    return engine


def init_database(
    data_root: Path,
    *,
    filename: str = "roomdir.db",
    busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS,
) -> Engine:
    """Initialize the roomdir database at ``{data_root}/.roomdir/{filename}``.

    Creates the ``.roomdir/`` directory and all tables from
    :data:`schema.metadata`. Idempotent, safe to call on an existing
    data root.

    Returns the engine ready for use.
    """
    roomdir_dir = data_root / ".roomdir"
    roomdir_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(roomdir_dir / filename, busy_timeout_ms=busy_timeout_ms)
    metadata.create_all(engine)
    return engine

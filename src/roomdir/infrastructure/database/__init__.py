"""SQLite database engine and schema via SQLAlchemy Core."""

from roomdir.infrastructure.database.engine import create_db_engine, init_database
from roomdir.infrastructure.database.schema import metadata, room_aliases, rooms

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "room_aliases",
    "rooms",
]

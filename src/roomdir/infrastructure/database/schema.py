"""SQLAlchemy Core table definitions for the roomdir database.

``room_aliases`` is keyed by the canonical alias string, so the primary
key is the namespace-uniqueness constraint. ``rooms`` is the minimal room
registry the directory consults before binding.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, MetaData, Table, Text

metadata = MetaData()

room_aliases = Table(
    "room_aliases",
    metadata,
    Column("alias", Text, primary_key=True),  # "#localpart:domain"
    Column("localpart", Text, nullable=False),
    Column("domain", Text, nullable=False),
    Column("room_id", Text, nullable=False),
    Column("owner", Text, nullable=False),
    Column("servers", Text, nullable=False),  # JSON array
    Column("created", Text, nullable=False),
)

rooms = Table(
    "rooms",
    metadata,
    Column("room_id", Text, primary_key=True),
    Column("creator", Text),
    Column("created", Text, nullable=False),
)

Index("ix_room_aliases_room_id", room_aliases.c.room_id)
Index("ix_room_aliases_owner", room_aliases.c.owner)

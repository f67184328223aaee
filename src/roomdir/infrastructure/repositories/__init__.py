"""Repositories over the roomdir tables."""

from roomdir.infrastructure.repositories.aliases import AliasStore, CreateOutcome, SqlAliasStore
from roomdir.infrastructure.repositories.rooms import RoomRegistry

__all__ = ["AliasStore", "CreateOutcome", "RoomRegistry", "SqlAliasStore"]

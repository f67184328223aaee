"""Homeserver — the single dependency injected into every service.

Owns the database engine, the alias store, the room registry, and the
plugin manager. Constructed once per process from :class:`RoomdirSettings`;
services receive it through :class:`BaseService`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from roomdir.infrastructure.database.engine import init_database
from roomdir.infrastructure.repositories.aliases import SqlAliasStore
from roomdir.infrastructure.repositories.rooms import RoomRegistry

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from roomdir.config.settings import RoomdirSettings
    from roomdir.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Homeserver:
    """Repository encapsulating the directory's persistent state."""

    def __init__(self, settings: RoomdirSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            self.root,
            filename=settings.database.filename,
            busy_timeout_ms=settings.database.busy_timeout_ms,
        )
        self._aliases = SqlAliasStore(self._engine)
        self._rooms = RoomRegistry(self._engine)
        self._plugin_manager: PluginManager | None = None
        logger.debug("Homeserver %s opened at %s", self.domain, self.root)

    @property
    def root(self) -> Path:
        """The data root directory."""
        return self._settings.data_root

    @property
    def domain(self) -> str:
        """The local homeserver domain."""
        return self._settings.server.domain

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def settings(self) -> RoomdirSettings:
        return self._settings

    @property
    def aliases(self) -> SqlAliasStore:
        """The alias record store."""
        return self._aliases

    @property
    def rooms(self) -> RoomRegistry:
        """The room-existence registry."""
        return self._rooms

    @property
    def plugin_manager(self) -> PluginManager | None:
        """The plugin manager (None until :meth:`init_plugins`)."""
        return self._plugin_manager

    def init_plugins(self) -> None:
        """Create the plugin manager and load entry-point plugins if enabled."""
        from roomdir.plugins.manager import PluginManager

        pm = PluginManager()
        if self._settings.plugins.enabled:
            pm.discover_and_load()
        self._plugin_manager = pm

    def close(self) -> None:
        """Release pooled database connections."""
        self._engine.dispose()

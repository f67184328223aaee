"""Pluggy hook specifications for directory lifecycle events.

Hooks are notifications: they run synchronously after the store write has
committed and cannot veto or alter the outcome.
"""

from __future__ import annotations

import pluggy

PROJECT_NAME = "roomdir"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class RoomdirHookSpec:
    """Hook specifications for the roomdir plugin system."""

    @hookspec
    def post_alias_bind(
        self,
        alias: str,
        room_id: str,
        owner: str,
        servers: list[str],
    ) -> None:
        """Called after an alias is bound to a room."""

    @hookspec
    def post_alias_unbind(self, alias: str, owner: str) -> None:
        """Called after an alias binding is removed by its owner."""

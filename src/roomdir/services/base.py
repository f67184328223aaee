"""BaseService — shared foundation for roomdir services.

Every service receives a :class:`Homeserver` at construction time. The
homeserver provides the stores; services own validation and result shaping.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from roomdir.infrastructure.homeserver import Homeserver

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class DirectoryService(BaseService):
            def resolve(self, context: RequestContext) -> ServiceResult:
                record = self._homeserver.aliases.lookup(...)
                ...
    """

    def __init__(self, homeserver: Homeserver) -> None:
        self._homeserver = homeserver

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin hook synchronously. No-op if plugins are not initialized.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        pm = self._homeserver.plugin_manager
        if pm is None:
            return
        try:
            getattr(pm.hook, hook_name)(**payload)
        except Exception:
            logger.warning("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")

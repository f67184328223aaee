"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Provides lazy Homeserver initialization, request
context construction, the service-call boundary, and result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import click

from roomdir.output.formatters import format_result
from roomdir.services.errors import ErrorCode, with_wire_error
from roomdir.services.guards import GuardRejected
from roomdir.services.requests import RequestContext
from roomdir.services.result import ServiceResult

if TYPE_CHECKING:
    from roomdir.config.settings import RoomdirSettings
    from roomdir.infrastructure.homeserver import Homeserver

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The homeserver is created on first use so ``--help`` and ``--version``
    never touch the database.
    """

    def __init__(self, settings: RoomdirSettings) -> None:
        self.settings = settings
        self._homeserver: Homeserver | None = None

        from roomdir.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, log_json=settings.log_json, domain=settings.domain
        )

    @property
    def homeserver(self) -> Homeserver:
        """The homeserver instance (created lazily on first access)."""
        if self._homeserver is None:
            from roomdir.infrastructure.homeserver import Homeserver

            self._homeserver = Homeserver(self.settings)
            self._homeserver.init_plugins()
        return self._homeserver

    def request(
        self, *, alias_token: str | None = None, caller: str | None = None
    ) -> RequestContext:
        """Build the immutable per-request context for a directory call."""
        return RequestContext(
            caller=caller,
            alias_token=alias_token,
            domain=self.settings.domain,
        )

    def call(self, op: str, action: Callable[[], ServiceResult]) -> ServiceResult:
        """Run *action* and turn guard rejections and crashes into results.

        Unexpected exceptions (storage failures included) are logged and
        reported as an opaque INTERNAL_ERROR.
        """
        try:
            return action()
        except GuardRejected as exc:
            return exc.result
        except Exception:
            logger.exception("Unhandled error during %s", op)
            return ServiceResult.failure(op, ErrorCode.INTERNAL_ERROR, "Internal server error")

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally. Warnings go to stderr
          unless JSON output already carries them.
        * Failure: writes to stderr, exits with code 1. The result carries the
          wire errcode and HTTP status in ``meta``.
        """
        result = with_wire_error(result)
        output = format_result(
            result,
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

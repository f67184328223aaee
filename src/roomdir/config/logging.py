"""structlog configuration for roomdir.

Every event carries the homeserver ``domain`` it was emitted for.

Two output modes, both on stderr:
- Human (default): colored console output
- JSON (``--log-json``): one structured JSON object per line
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Library loggers that stay at WARNING even under --verbose.
QUIET_LOGGERS = ("sqlalchemy",)


def _stamp_domain(domain: str | None) -> Processor:
    def processor(_logger: WrappedLogger, _name: str, event_dict: EventDict) -> EventDict:
        if domain is not None:
            event_dict.setdefault("domain", domain)
        return event_dict

    return processor


def _renderers(log_json: bool) -> list[Processor]:
    if log_json:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    domain: str | None = None,
) -> None:
    """Route roomdir and library logs through structlog to stderr.

    Args:
        verbose: DEBUG for ``roomdir`` loggers instead of WARNING.
        log_json: JSON lines instead of the console renderer.
        domain: Homeserver domain stamped on every event.
    """
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _stamp_domain(domain),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("roomdir").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

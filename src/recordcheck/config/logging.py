"""structlog configuration for recordcheck.

All log output goes to stderr so stdout stays parseable (``--json``,
``-q generate booking > payload.json``):

- Human (default): key=value console lines, colored on a terminal
- JSON (``--log-json``): one JSON object per line

Stdlib records from ``recordcheck.infrastructure`` and third-party
libraries pass through the same processor chain as structlog events.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

ROOT_LOGGER = "recordcheck"

# Chatty third-party loggers held at WARNING regardless of --verbose.
QUIET_LOGGERS = ("httpx", "httpcore", "faker")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Configure structlog and replace the root handler with a stderr handler.

    Args:
        verbose: DEBUG for ``recordcheck.*`` loggers; WARNING otherwise.
        log_json: Render JSON lines instead of console lines.
    """
    shared = _shared_processors()
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
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def log_context(**values: Any) -> Iterator[None]:
    """Bind *values* to every log event emitted inside the block.

    Usage::

        with log_context(base_url=url):
            ...  # every structlog event carries base_url=...
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield

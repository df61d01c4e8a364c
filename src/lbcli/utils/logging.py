"""Structured logging for lbcli.

structlog is layered on the stdlib :mod:`logging` module so that records
from third-party libraries (httpx) pass through the same renderer.  All
output goes to stderr; stdout is reserved for command results.

Usage::

    from lbcli.utils.logging import configure_logging, get_logger

    configure_logging("DEBUG")        # once, at CLI start-up
    logger = get_logger(__name__)
    logger.debug("api request", method="GET", path="/api/v1/links")

Never pass tokens or passwords as log fields.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

VALID_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _bridge_to_stdlib() -> None:
    """Route structlog through stdlib logging until :func:`configure_logging` runs.

    Without this, structlog's own default prints every level to stdout.
    """
    if structlog.is_configured():
        return
    structlog.configure(
        processors=_shared_processors() + [structlog.processors.KeyValueRenderer()],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(level: str = "WARNING", *, colors: bool = False) -> None:
    """Configure structlog and the root logger.

    Parameters
    ----------
    level:
        One of :data:`VALID_LEVELS` (case-insensitive).
    colors:
        Whether the console renderer may emit ANSI colours.

    Raises
    ------
    ValueError
        If *level* is not a known level name.
    """
    normalized = level.upper()
    if normalized not in VALID_LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    log_level = getattr(logging, normalized)

    shared_processors = _shared_processors()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=colors),
        foreign_pre_chain=shared_processors,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # httpx logs every request at INFO; only let that through when debugging.
    quiet_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    logging.getLogger("httpx").setLevel(quiet_level)
    logging.getLogger("httpcore").setLevel(max(quiet_level, logging.INFO))


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to *name* (typically ``__name__``)."""
    return structlog.get_logger(name)


_bridge_to_stdlib()

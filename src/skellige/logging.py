"""Logging configuration using structlog.

Levels apply to the ``skellige`` logger tree only. GitPython's own ``git``
logger stays at WARNING unless skellige runs at DEBUG, so conversion events
such as ``git.error_converted`` are not drowned in GitPython command traces.
"""

import logging
import sys
from typing import Any

import structlog

from skellige.config import SkelligeSettings, settings

__all__ = ["LOG_FORMATS", "configure_logging"]

LOG_FORMATS = ("console", "json")


def _renderers(log_format: str) -> list[Any]:
    if log_format == "json":
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer()]


def configure_logging(config: SkelligeSettings | None = None) -> None:
    """Configure structlog from skellige settings.

    Args:
        config: Settings to read ``log_level`` and ``log_format`` from;
            the module-level ``settings`` when omitted

    Raises:
        ValueError: If the level or the format is not recognised
    """
    config = config or settings

    level = logging.getLevelNamesMapping().get(config.log_level.upper())
    if level is None:
        raise ValueError(f"unknown log level: {config.log_level}")
    if config.log_format not in LOG_FORMATS:
        raise ValueError(
            f"unknown log format: {config.log_format} "
            f"(expected one of {', '.join(LOG_FORMATS)})"
        )

    # stdout carries command output; logs go to stderr.
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger("skellige").setLevel(level)
    logging.getLogger("git").setLevel(
        logging.DEBUG if level == logging.DEBUG else logging.WARNING
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            *_renderers(config.log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

"""
Structured logging for the fallback package.

The package never configures logging on import. Applications call
:func:`configure_logging` (or :func:`configure_from_settings`) once at
startup; modules obtain loggers through :func:`get_logger`.

Architecture:
    ::

        configure_logging(level="INFO", json_format=False, service="fallback")
              ↓
        structlog processor chain:
          TimeStamper (iso) -> add_log_level -> add_logger_name
          -> service metadata -> JSONRenderer | ConsoleRenderer

Examples:
    >>> from fallback.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True)
    >>> logger = get_logger(__name__)
    >>> logger.debug("companion.generated", record="Foo", fields=2)

Tags:
    logging, structlog, observability, fallback
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from fallback.errors import InvalidConfigError
from fallback.settings import LOG_LEVELS, FallbackSettings

# Store service name for metadata
_SERVICE_NAME = "fallback"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _resolve_level(level: str) -> int:
    name = level.upper()
    if name not in LOG_LEVELS:
        raise InvalidConfigError("log_level", level)
    return getattr(logging, name)


def _processors(json_format: bool, add_timestamp: bool) -> list[Processor]:
    chain: list[Processor] = [structlog.processors.TimeStamper(fmt="iso")] if add_timestamp else []
    chain += [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_service_metadata,
    ]
    if json_format:
        chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        chain.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return chain


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "fallback",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs

    Raises:
        InvalidConfigError: If ``level`` is not a known level name.
    """
    global _SERVICE_NAME
    numeric_level = _resolve_level(level)
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stdout.isatty()

    # Loggers are not cached so module-level loggers follow reconfiguration.
    structlog.configure(
        processors=_processors(json_format, add_timestamp),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)


def configure_from_settings(settings: FallbackSettings) -> None:
    """Apply :class:`FallbackSettings` to :func:`configure_logging`."""
    level = logging.getLevelName(settings.effective_log_level)
    configure_logging(level=level, json_format=settings.log_format == "json")


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
]

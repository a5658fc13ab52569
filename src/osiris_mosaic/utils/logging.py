"""
Logging utilities for the OSIRIS mosaic pipeline.

Structured logging through structlog, rendered either for the console
or as one JSON object per line for batch reduction logs.

Example:
    >>> from osiris_mosaic.utils import setup_logging, get_logger
    >>>
    >>> setup_logging(level="INFO", format="console")
    >>> logger = get_logger(__name__)
    >>> logger.info("offsets_determined", n_sets=4, scale=0.0203)
"""

from __future__ import annotations

import logging
import sys
from typing import IO, TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from osiris_mosaic.config.settings import LoggingSettings


def _build_processors(
    format: str,
    include_timestamp: bool,
    include_location: bool,
) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_location:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    processors.append(structlog.stdlib.PositionalArgumentsFormatter())
    processors.append(structlog.processors.StackInfoRenderer())
    processors.append(structlog.processors.UnicodeDecoder())

    if format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    return processors


def setup_logging(
    level: str = "INFO",
    format: str = "console",
    *,
    include_timestamp: bool = True,
    include_location: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Configure structured logging.

    Diagnostics go to stderr by default so that offset tables printed
    on stdout stay machine-readable.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format ("console" or "json")
        include_timestamp: Include timestamps in output
        include_location: Include source file/line info
        stream: Destination stream (defaults to stderr)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=getattr(logging, level.upper()),
        force=True,
    )

    structlog.configure(
        processors=_build_processors(format, include_timestamp, include_location),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: LoggingSettings, level: str | None = None) -> None:
    """Configure logging from a LoggingSettings block.

    Args:
        settings: Logging settings
        level: Overrides settings.level when given (e.g. --verbose)
    """
    setup_logging(
        level=level or settings.level,
        format=settings.format,
        include_timestamp=settings.include_timestamp,
        include_location=settings.include_location,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger instance
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_context(**kwargs: Any) -> None:
    """Bind context variables for all subsequent log calls.

    Example:
        >>> bind_context(batch="s240101_a003", n_sets=6)
        >>> logger.info("scale_resolved")  # includes batch and n_sets
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()

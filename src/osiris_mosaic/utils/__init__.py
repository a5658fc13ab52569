"""
Utility functions for the OSIRIS mosaic pipeline.

Logging:
- setup_logging(): Configure structured logging with structlog
- configure_from_settings(): Same, from a LoggingSettings block
- get_logger(name): Get a logger instance
- bind_context() / clear_context(): Context variables for all log calls
"""

from osiris_mosaic.utils.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    get_logger,
    setup_logging,
)

__all__ = [
    "bind_context",
    "clear_context",
    "configure_from_settings",
    "get_logger",
    "setup_logging",
]

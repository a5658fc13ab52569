"""
Configuration management for the OSIRIS mosaic pipeline.

Configuration hierarchy:
1. Default values (built-in)
2. config/default.toml (project defaults)
3. config/local.toml (user overrides, gitignored)
4. Environment variables (OSIRIS_* prefix)
5. Command-line arguments

Example:
    >>> from osiris_mosaic.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(settings.offsets.scale_table)

Configuration files use TOML format. See config/default.toml for all options.
"""

from osiris_mosaic.config.settings import (
    KeywordSettings,
    LoggingSettings,
    OffsetSettings,
    Settings,
    get_settings,
    load_settings,
    reload_settings,
)

__all__ = [
    "KeywordSettings",
    "LoggingSettings",
    "OffsetSettings",
    "Settings",
    "get_settings",
    "load_settings",
    "reload_settings",
]

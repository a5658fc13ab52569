"""
Configuration settings for the OSIRIS mosaic pipeline.

This module handles loading and validating configuration from TOML files
and environment variables. The resolved OffsetSettings object is passed
explicitly into every offset operation; nothing reads module globals.

Configuration hierarchy (later overrides earlier):
1. Default values (built-in)
2. config/default.toml
3. config/local.toml (gitignored)
4. File named by OSIRIS_CONFIG_PATH
5. Environment variables (OSIRIS_* prefix)
6. Command-line arguments

Example:
    >>> from osiris_mosaic.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(f"PA tolerance: {settings.offsets.pa_tolerance} rad")
    >>> print(f"RA keyword: {settings.offsets.keywords.ra}")
"""

from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "OSIRIS_"

# Nominal SSCALE (arcsec/spaxel) -> calibrated plate scale
DEFAULT_SCALE_TABLE: dict[float, float] = {
    0.020: 0.0203,
    0.035: 0.0350,
    0.050: 0.0500,
    0.100: 0.1009,
}


class KeywordSettings(BaseModel):
    """Header keyword names read and written by the pipeline."""

    model_config = ConfigDict(extra="ignore")

    ra: str = Field(default="RA", description="Right ascension (deg)")
    dec: str = Field(default="DEC", description="Declination (deg)")
    rotator: str = Field(default="ROTPOSN", description="Rotator position (deg)")
    instrument_angle: str = Field(default="INSTANGL", description="Instrument angle (deg)")
    scale: str = Field(default="SSCALE", description="Nominal spaxel scale (arcsec)")
    ao_x: str = Field(default="AOTSX", description="AO tip-tilt stage X")
    ao_y: str = Field(default="AOTSY", description="AO tip-tilt stage Y")
    x_offset: str = Field(default="X_OFF", description="Output X offset (pixels)")
    y_offset: str = Field(default="Y_OFF", description="Output Y offset (pixels)")


class OffsetSettings(BaseModel):
    """Constants used by the offset determination pipeline."""

    model_config = ConfigDict(extra="ignore")

    scale_table: dict[float, float] = Field(
        default_factory=lambda: dict(DEFAULT_SCALE_TABLE),
        description="Nominal scale -> calibrated arcsec/pixel",
    )
    image_scale: float = Field(
        default=0.0203,
        gt=0,
        description="Plate scale used for imager frames (arcsec/pixel)",
    )
    image_pa_bias_deg: float = Field(
        default=47.5,
        description="Position angle bias for imager frames (deg)",
    )
    cube_pa_bias_deg: float = Field(
        default=0.0,
        description="Position angle bias for cubes (deg)",
    )
    pa_tolerance: float = Field(
        default=0.01745,
        ge=0,
        description="Allowed position angle spread across a batch (rad)",
    )
    min_exposures: int = Field(
        default=2,
        ge=2,
        description="Smallest batch that defines a relative offset",
    )
    keywords: KeywordSettings = Field(default_factory=KeywordSettings)

    @field_validator("scale_table")
    @classmethod
    def validate_scale_table(cls, v: dict[float, float]) -> dict[float, float]:
        """Calibrated scales must be positive."""
        for nominal, calibrated in v.items():
            if calibrated <= 0:
                raise ValueError(f"Calibrated scale for {nominal} must be positive")
        return v


class LoggingSettings(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="console", description="Output format")
    include_timestamp: bool = Field(default=True)
    include_location: bool = Field(default=False)


class Settings(BaseModel):
    """Main settings container."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="osiris-mosaic")
    header_extension: int = Field(
        default=0,
        ge=0,
        description="FITS extension holding the exposure header",
    )

    offsets: OffsetSettings = Field(default_factory=OffsetSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _find_config_files() -> list[Path]:
    """Find configuration files in standard locations.

    Returns:
        List of config file paths (in order of priority)
    """
    files = []

    cwd = Path.cwd()
    for name in ["config/default.toml", "config/local.toml"]:
        path = cwd / name
        if path.exists():
            files.append(path)

    env_config = os.environ.get("OSIRIS_CONFIG_PATH")
    if env_config:
        path = Path(env_config)
        if path.exists():
            files.append(path)

    return files


def _load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML content
    """
    with open(path, "rb") as f:
        return tomllib.load(f)


def _merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _coerce(value: str, original: Any) -> Any:
    """Convert an environment string to the type of the default it replaces."""
    if isinstance(original, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(original, int):
        return int(value)
    if isinstance(original, float):
        return float(value)
    if isinstance(original, (dict, list)):
        return json.loads(value)
    return value


def _set_nested(
    config: dict[str, Any],
    defaults: dict[str, Any],
    parts: list[str],
    value: str,
) -> bool:
    """Place an override at the key path matched by underscore-split parts.

    Field names may themselves contain underscores, so the longest
    matching prefix is tried first at each level.
    """
    for i in range(len(parts), 0, -1):
        name = "_".join(parts[:i])
        rest = parts[i:]
        if name not in defaults:
            continue

        default = defaults[name]
        if rest and isinstance(default, dict):
            sub = config.setdefault(name, {})
            if isinstance(sub, dict) and _set_nested(sub, default, rest, value):
                return True
        elif not rest:
            config[name] = _coerce(value, default)
            return True

    return False


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides.

    Environment variables with OSIRIS_ prefix override config values.
    Example: OSIRIS_OFFSETS_PA_TOLERANCE -> offsets.pa_tolerance

    Args:
        config: Configuration dictionary

    Returns:
        Modified configuration
    """
    defaults = Settings().model_dump()

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX) or key == "OSIRIS_CONFIG_PATH":
            continue

        parts = key[len(ENV_PREFIX) :].lower().split("_")
        _set_nested(config, defaults, parts, value)

    return config


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from configuration files.

    Args:
        config_path: Optional explicit config file path

    Returns:
        Settings instance
    """
    config: dict[str, Any] = {}

    if config_path:
        files = [Path(config_path)]
    else:
        files = _find_config_files()

    for path in files:
        file_config = _load_toml(path)
        config = _merge_dicts(config, file_config)

    config = _apply_env_overrides(config)

    return Settings(**config)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance (cached after first call)
    """
    return load_settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache).

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings()

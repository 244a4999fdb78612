"""Environment-driven settings for the fallback package.

The package itself is pure, so there is little to configure: how logging
is rendered and how generated companion types are named. Values come from
``FALLBACK_*`` environment variables or a ``.env`` file.

Derivation only reads :class:`CompanionSettings`, so a bad logging value
never stops a companion from being generated.

Manifesto:
    - **Pydantic validation:** Bad values are rejected when settings load
    - **Environment-driven:** Reads from env vars and .env files
    - **Sensible defaults:** Works out of the box, no configuration required

Examples:
    >>> from fallback.settings import FallbackSettings
    >>> FallbackSettings().companion_prefix
    'Fallback'

Tags:
    settings, configuration, pydantic, environment, fallback
"""

from __future__ import annotations

import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fallback.errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "console")


class CompanionSettings(BaseSettings):
    """Settings read by fieldwise derivation.

    Fields
    ──────
    companion_prefix  : Name prefix of generated companion types
    """

    model_config = SettingsConfigDict(
        env_prefix="FALLBACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Derivation ───────────────────────────────────────────────
    companion_prefix: str = Field(
        default="Fallback",
        description="Prefix prepended to a record name to form its companion type name",
    )

    @field_validator("companion_prefix")
    @classmethod
    def _check_companion_prefix(cls, value: str) -> str:
        # "" is allowed: the companion then shares the record's name
        if value and not value.isidentifier():
            raise ValueError("companion_prefix must be a valid Python identifier")
        return value


class FallbackSettings(CompanionSettings):
    """Settings shared by every module of the package.

    Fields
    ──────
    log_level         : Structlog log level
    log_format        : ``json`` or ``console`` renderer
    debug             : Forces DEBUG logging when enabled
    companion_prefix  : Inherited from :class:`CompanionSettings`
    """

    # ── Observability ────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        return fmt

    @property
    def effective_log_level(self) -> int:
        """Numeric level, DEBUG when ``debug`` is set."""
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level)


# ── Settings factories with caching ──────────────────────────────────────

_settings_cache: dict[str, CompanionSettings] = {}


def _load(key: str, settings_cls: type[CompanionSettings], force: bool) -> CompanionSettings:
    if not force and key in _settings_cache:
        return _settings_cache[key]

    try:
        settings = settings_cls()
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid fallback settings: {exc.error_count()} error(s)", cause=exc
        ) from exc

    _settings_cache[key] = settings
    return settings


def get_settings(*, _force_reload: bool = False) -> FallbackSettings:
    """Load, validate, and cache a :class:`FallbackSettings` instance.

    Raises
    ------
    ConfigError
        If any environment value fails validation.
    """
    return _load("default", FallbackSettings, _force_reload)


def get_companion_settings(*, _force_reload: bool = False) -> CompanionSettings:
    """Load, validate, and cache the derivation-only settings.

    Logging variables are ignored here, so only a bad
    ``FALLBACK_COMPANION_PREFIX`` can fail.

    Raises
    ------
    ConfigError
        If ``FALLBACK_COMPANION_PREFIX`` fails validation.
    """
    return _load("companion", CompanionSettings, _force_reload)


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "CompanionSettings",
    "FallbackSettings",
    "get_settings",
    "get_companion_settings",
    "clear_settings_cache",
    "LOG_LEVELS",
    "LOG_FORMATS",
]

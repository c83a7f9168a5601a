"""Settings for dbspine.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.
    The driver layer has very little of it, but the little it has (the
    driver module prefix, log level) must be overridable without code
    changes.

    - **Pydantic validation:** Type-checked at load, not at first use
    - **Environment-driven:** ``DBSPINE_*`` env vars and ``.env`` files
    - **Sensible defaults:** Works out of the box

Fields
──────
log_level      : structlog log level
json_logs      : JSON log output (None = auto-detect from tty)
driver_prefix  : prefix of conventional driver module names (``R`` + name)
sqlite_timeout : seconds SQLite waits on a locked database

Examples:
    >>> from dbspine.core.settings import get_settings
    >>> get_settings().driver_prefix
    'R'

Tags:
    settings, configuration, pydantic, environment, dbspine
"""

from __future__ import annotations

import pydantic
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dbspine.core.errors import ConfigError


class DBSpineSettings(BaseSettings):
    """dbspine settings, read from ``DBSPINE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DBSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    json_logs: bool | None = None

    # ── Resolution ───────────────────────────────────────────────
    driver_prefix: str = Field(
        default="R",
        description="Prefix of the conventional driver module name",
    )

    # ── Built-in drivers ─────────────────────────────────────────
    sqlite_timeout: float = Field(default=5.0, gt=0)

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("driver_prefix")
    @classmethod
    def _identifier_prefix(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError("driver_prefix must be a valid module name prefix")
        return value


_settings: DBSpineSettings | None = None


def get_settings(*, _force_reload: bool = False) -> DBSpineSettings:
    """Load, validate, and cache a :class:`DBSpineSettings` instance.

    Raises:
        ConfigError: a ``DBSPINE_*`` value failed validation.
    """
    global _settings
    if _settings is None or _force_reload:
        try:
            _settings = DBSpineSettings()
        except pydantic.ValidationError as e:
            fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
            raise ConfigError(
                f"Invalid dbspine settings: {', '.join(fields)}",
                cause=e,
            ).with_context(fields=fields) from e
    return _settings


__all__ = [
    "DBSpineSettings",
    "get_settings",
]

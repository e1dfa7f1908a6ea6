"""Configuration using Pydantic Settings.

This module centralizes the defaults of the ``service-readiness`` command line.
Values can be provided via environment variables (preferred) or fall back to
the defaults below. A ``Settings`` instance is intended to be retrieved via
``get_settings`` which caches the object for reuse across the process.

The probe runtime never reads these settings: every run takes its parameters
from an explicit ``ProbeSpec``. Settings only fill in CLI options the operator
did not pass.

Environment variable prefix: ``SERVICE_READINESS_`` (e.g. ``SERVICE_READINESS_INTERVAL``).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from service_readiness.constants import DEFAULT_ATTEMPT_TIMEOUT, DEFAULT_HOST, DEFAULT_INTERVAL, DEFAULT_PLUGIN_PATTERN


class Settings(BaseSettings):
    """Runtime settings.

    Attributes map directly to environment variables using the ``SERVICE_READINESS_``
    prefix (case-insensitive). For example, ``host`` <- ``SERVICE_READINESS_HOST``.
    """

    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level",
    )
    host: str = Field(
        default=DEFAULT_HOST,
        description="Host to probe when only a port is given",
    )  # fmt: skip
    interval: float = Field(
        default=DEFAULT_INTERVAL,
        gt=0,
        description="Seconds between the end of one attempt and the start of the next",
    )  # fmt: skip
    max_attempts: int | None = Field(
        default=None,
        ge=1,
        description="Maximum number of attempts",
    )  # fmt: skip
    timeout: float | None = Field(
        default=120.0,
        gt=0,
        description="Overall deadline in seconds from the start of the wait",
    )  # fmt: skip
    attempt_timeout: float = Field(
        default=DEFAULT_ATTEMPT_TIMEOUT,
        gt=0,
        description="Network timeout of a single attempt, capped at the interval when polling",
    )  # fmt: skip
    plugin_pattern: str = Field(
        default=DEFAULT_PLUGIN_PATTERN,
        description="Glob selecting plugin files in the plugin directory",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        if v is None:
            return "INFO"

        v_upper = str(v).upper()

        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR"}
        if v_upper not in allowed:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(allowed))}")

        return v_upper

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_READINESS_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached ``Settings`` instance.

    The first invocation reads environment variables / .env file; subsequent
    calls reuse the same object to ensure consistent config.
    """

    return Settings()


__all__ = ["Settings", "get_settings"]

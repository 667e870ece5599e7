"""
ctxlog.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the logging facade, rate limiter and demo API.
- Derive environment-dependent defaults (log level, log format).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ctxlog.observability.rate_limit import DEFAULT_LIMIT, DEFAULT_WINDOW_SIZE_MS
from ctxlog.observability.sanitize import validate_log_level, validate_service_name


class Settings(BaseSettings):
    """
    - Strict env-driven configuration (`CTXLOG_*`)
    - Development defaults: debug level, human-readable console output
    - Everything else: info level, JSON lines
    """

    model_config = SettingsConfigDict(env_prefix="CTXLOG_", case_sensitive=False)

    env: Literal["development", "test", "production"] = "development"
    service_name: str = "default"
    # None means "derive from env" (see `_apply_env_defaults`).
    log_level: str | None = None
    log_format: Literal["text", "json"] | None = None

    # Rate limiter policy for the whole process.
    rate_limit: int = Field(default=DEFAULT_LIMIT, gt=0)
    rate_limit_window_ms: int = Field(default=DEFAULT_WINDOW_SIZE_MS, gt=0)

    # HTTP access logging
    http_skip_logging: bool = False
    http_log_only_auth_errors: bool = False

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    @field_validator("service_name", mode="before")
    @classmethod
    def _validate_service_name(cls, value: object) -> str:
        return validate_service_name(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: object) -> str | None:
        if value is None:
            return None
        return validate_log_level(value)

    @model_validator(mode="after")
    def _apply_env_defaults(self) -> Settings:
        if self.log_level is None:
            self.log_level = "debug" if self.env == "development" else "info"
        if self.log_format is None:
            self.log_format = "text" if self.env == "development" else "json"
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Rate limiter values are applied once, by `observability.logging.configure_logging`.

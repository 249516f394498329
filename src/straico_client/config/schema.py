"""Configuration schema. Defaults point at the public Straico API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_MODEL,
    PROXY_DEFAULT_HOST,
    PROXY_DEFAULT_PORT,
    STRAICO_BASE_URL,
    STRAICO_DEFAULT_TIMEOUT_S,
)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class StraicoConfig(BaseModel):
    """Straico endpoint, credentials and default model."""
    base_url: str = Field(STRAICO_BASE_URL, description="Straico API root, without a version segment.")
    api_key: str = Field("", description="Bearer token for Straico. Usually supplied via STRAICO_API_KEY.")
    model: str = Field(DEFAULT_MODEL, description="Model id used when a request does not name one.")
    timeout_s: float = Field(STRAICO_DEFAULT_TIMEOUT_S, gt=0, description="HTTP timeout per Straico call.")


class ProxyConfig(BaseModel):
    """OpenAI-compatible proxy server."""
    host: str = PROXY_DEFAULT_HOST
    port: int = Field(PROXY_DEFAULT_PORT, ge=1, le=65535)
    api_key: str = Field(
        "",
        description="When set, clients must send 'Authorization: Bearer <api_key>' (except GET /health).",
    )


class AppConfig(BaseModel):
    straico: StraicoConfig = Field(default_factory=StraicoConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
    log_level: str = Field("WARNING", description="Root log level for the proxy (DEBUG|INFO|WARNING|ERROR).")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return level


DEFAULT_CONFIG = AppConfig()

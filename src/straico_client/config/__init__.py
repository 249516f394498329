"""Configuration: schema, loading from env/file, and shared constants."""

from .schema import DEFAULT_CONFIG, AppConfig, ProxyConfig, StraicoConfig
from .loader import load_config, reset_config
from .constants import (
    COMPLETION_ENDPOINT,
    DEFAULT_MODEL,
    IMAGE_ENDPOINT,
    STRAICO_BASE_URL,
    STRAICO_DEFAULT_TIMEOUT_S,
)

get_config = load_config  # alias

__all__ = [
    "DEFAULT_CONFIG", "AppConfig", "ProxyConfig", "StraicoConfig",
    "load_config", "get_config", "reset_config",
    "COMPLETION_ENDPOINT", "DEFAULT_MODEL", "IMAGE_ENDPOINT",
    "STRAICO_BASE_URL", "STRAICO_DEFAULT_TIMEOUT_S",
]

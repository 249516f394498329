"""Load config from STRAICO_CONFIG_PATH or return default.

``load_config()`` is memoised with ``functools.lru_cache`` so the file is read
and parsed at most once per process.  The STRAICO_* environment is read once
too; call ``reset_config()`` to drop both caches so the next ``load_config()``
sees the current file and environment.

Secrets are usually kept out of the config file: ``STRAICO_API_KEY`` and
``STRAICO_PROXY_API_KEY`` override ``straico.api_key`` and ``proxy.api_key``.
"""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .schema import AppConfig, DEFAULT_CONFIG


class _Env(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STRAICO_", extra="ignore")
    config_path: Optional[str] = None
    api_key: Optional[str] = None
    proxy_api_key: Optional[str] = None


_env: Optional[_Env] = None


def _get_env() -> _Env:
    global _env
    if _env is None:
        _env = _Env()
    return _env


def _load_file(path: Optional[str]) -> AppConfig:
    if not path or not path.strip():
        return DEFAULT_CONFIG
    p = Path(path).expanduser().resolve()
    if not p.is_file():
        return DEFAULT_CONFIG
    data = json.loads(p.read_text(encoding="utf-8"))
    return AppConfig.model_validate(data)


@functools.lru_cache(maxsize=1)
def load_config() -> AppConfig:
    """Load config from STRAICO_CONFIG_PATH if set and valid; else DEFAULT_CONFIG.

    Environment secrets are applied on top.  Result is cached for the lifetime
    of the process.
    """
    env = _get_env()
    config = _load_file(env.config_path)
    if env.api_key:
        config = config.model_copy(
            update={"straico": config.straico.model_copy(update={"api_key": env.api_key})}
        )
    if env.proxy_api_key:
        config = config.model_copy(
            update={"proxy": config.proxy.model_copy(update={"api_key": env.proxy_api_key})}
        )
    return config


def reset_config() -> None:
    """Forget the cached environment and config; the next load re-reads both."""
    global _env
    _env = None
    load_config.cache_clear()

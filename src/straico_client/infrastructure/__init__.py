"""Infrastructure: adapters for external systems (Straico HTTP API)."""

from __future__ import annotations

from straico_client.config.schema import StraicoConfig
from straico_client.infrastructure.straico import StraicoClient


def build_straico_client(config: StraicoConfig) -> StraicoClient:
    """Return a ``StraicoClient`` for *config*.

    Raises:
        ValueError: ``config.api_key`` is empty.
    """
    if not config.api_key:
        raise ValueError("Straico API key is not set. Export STRAICO_API_KEY or set straico.api_key in config.")
    return StraicoClient(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout_s=config.timeout_s,
    )

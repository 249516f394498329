"""Named constants for values that appear in multiple places or need explanation."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Straico API
# ---------------------------------------------------------------------------

STRAICO_BASE_URL: str = "https://api.straico.com"

# Endpoint versions differ per route on the Straico side.
COMPLETION_ENDPOINT: str = "/v1/prompt/completion"
IMAGE_ENDPOINT: str = "/v0/image/generation"

# Model used when neither the caller nor the config names one.
DEFAULT_MODEL: str = "openai/gpt-4o-mini"

# ---------------------------------------------------------------------------
# Timeouts
# ---------------------------------------------------------------------------

# Default HTTP read timeout for one Straico call. Completions fan out to up to
# four models server-side, and Straico only answers once all have finished.
STRAICO_DEFAULT_TIMEOUT_S: float = 180.0

# ---------------------------------------------------------------------------
# Proxy
# ---------------------------------------------------------------------------

PROXY_DEFAULT_HOST: str = "127.0.0.1"
PROXY_DEFAULT_PORT: int = 8000

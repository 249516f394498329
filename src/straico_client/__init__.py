from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("straico-client")
except PackageNotFoundError:
    # Package not installed (e.g. running from source without pip install)
    __version__ = "0.0.0.dev0"

from straico_client.domain import (
    Completion,
    CompletionData,
    EmptySelectionError,
    MarkupDecodeError,
    StraicoError,
    UpstreamError,
    parse_completion,
)
from straico_client.infrastructure.straico import StraicoClient

__all__ = [
    "__version__",
    "Completion",
    "CompletionData",
    "EmptySelectionError",
    "MarkupDecodeError",
    "StraicoClient",
    "StraicoError",
    "UpstreamError",
    "parse_completion",
]

import logging

# Library convention: stay silent unless the application (CLI, proxy, tests)
# configures handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

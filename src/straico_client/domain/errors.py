"""Domain and application errors."""

from __future__ import annotations


class StraicoError(Exception):
    """Base for straico-client errors."""
    pass


class MarkupDecodeError(StraicoError):
    """A ``<tool_call>`` span is not a JSON object with ``name`` and ``arguments``."""

    def __init__(self, span: str, reason: str) -> None:
        self.span = span
        self.reason = reason
        super().__init__(f"Invalid tool call markup {span!r}: {reason}")


class EmptySelectionError(StraicoError):
    """A completion was requested from a CompletionData with no entries."""
    pass


class UpstreamError(StraicoError):
    """The Straico API answered with ``success: false`` or without ``data``."""
    pass

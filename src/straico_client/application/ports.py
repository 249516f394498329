"""Ports (abstract interfaces) used by the application layer.

Each port is a ``Protocol`` so the application depends only on the *shape* of
the collaborator.  ``StraicoClient`` is the production implementation; tests
pass in anything with the same coroutine methods.
"""

from __future__ import annotations

from typing import Protocol

from straico_client.domain import CompletionData, CompletionRequest


class CompletionTransport(Protocol):
    """Delivers a completion request and returns the decoded ``CompletionData``."""

    async def create_completion(self, request: CompletionRequest) -> CompletionData: ...

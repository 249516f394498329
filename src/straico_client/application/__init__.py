"""Application layer: use cases over the domain, talking to ports only."""

from .complete import build_chat_request, complete
from .ports import CompletionTransport
from .prompt import build_prompt

__all__ = ["CompletionTransport", "build_chat_request", "build_prompt", "complete"]

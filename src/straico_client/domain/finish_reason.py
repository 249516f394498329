"""Reconcile a provider's finish reason with the parsed assistant message."""

from __future__ import annotations

from .models import AssistantMessage, Message

FINISH_TOOL_CALLS = "tool_calls"
FINISH_STOP = "stop"
FINISH_END_TURN = "end_turn"


def normalize_finish_reason(message: Message, finish_reason: str) -> str:
    """Return the OpenAI-compatible finish reason for *message*.

    An assistant message without content always finishes with ``tool_calls``,
    whatever the provider said; otherwise Anthropic's ``end_turn`` becomes
    ``stop``. Other roles and labels pass through.
    """
    if not isinstance(message, AssistantMessage):
        return finish_reason
    if message.content is None:
        return FINISH_TOOL_CALLS
    if finish_reason == FINISH_END_TURN:
        return FINISH_STOP
    return finish_reason

"""Extract ``<tool_call>`` markup from assistant text into structured tool calls.

Straico exposes a plain-text completion endpoint, so models are prompted to
emit function calls inline::

    <tool_call>{"name": "lookup", "arguments": {"id": 7}}</tool_call>

:func:`extract_tool_calls` turns every such span into a ``FunctionToolCall``.
Decoding is all-or-nothing per message: one bad span and the message is
returned to the caller untouched via :class:`MarkupDecodeError`.
"""

from __future__ import annotations

import json
import logging
import re
from typing import List

from pydantic import ValidationError

from .errors import MarkupDecodeError
from .models import AssistantMessage, FunctionData, FunctionToolCall, Message

logger = logging.getLogger(__name__)

TOOL_CALL_OPEN = "<tool_call>"
TOOL_CALL_CLOSE = "</tool_call>"

# Every extracted call in a message shares this id.
TOOL_CALL_ID = "func"

_SPAN_RE = re.compile(re.escape(TOOL_CALL_OPEN) + r"(.*?)" + re.escape(TOOL_CALL_CLOSE))


def contains_markup(text: str) -> bool:
    """True if *text* carries either marker; a lone closing tag counts."""
    return TOOL_CALL_OPEN in text or TOOL_CALL_CLOSE in text


def find_markup_spans(text: str) -> List[str]:
    """Return the trimmed inner text of each complete span, left to right.

    Newlines are removed first so JSON bodies split across lines still match.
    """
    flattened = text.replace("\n", "")
    return [match.group(1).strip() for match in _SPAN_RE.finditer(flattened)]


def decode_span(span: str) -> FunctionData:
    try:
        data = FunctionData.model_validate_json(span)
    except ValidationError as exc:
        raise MarkupDecodeError(span, _describe(exc)) from exc
    # The JSON parser lets NaN, Infinity and overflowing literals like 1e400 through.
    try:
        json.dumps(data.arguments, allow_nan=False)
    except ValueError as exc:
        raise MarkupDecodeError(span, f"arguments: {exc}") from exc
    return data


def extract_tool_calls(message: Message) -> Message:
    """Return *message* with its markup converted to ``tool_calls``.

    Non-assistant messages, assistant messages without content, and content
    without a complete span are returned as-is (the same object).

    Raises:
        MarkupDecodeError: a span is not a JSON object with ``name`` and ``arguments``.
    """
    if not isinstance(message, AssistantMessage) or message.content is None:
        return message
    if not contains_markup(message.content):
        return message

    spans = find_markup_spans(message.content)
    if not spans:
        logger.debug("Tool call marker without a complete span; leaving content as text")
        return message

    tool_calls = [FunctionToolCall(id=TOOL_CALL_ID, function=decode_span(span)) for span in spans]
    logger.debug(
        "Extracted %d tool call(s): %s",
        len(tool_calls), ", ".join(call.function.name for call in tool_calls),
    )
    return message.model_copy(update={"content": None, "tool_calls": tool_calls})


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)

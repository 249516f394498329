"""Post-process a Straico completion into canonical OpenAI shape."""

from __future__ import annotations

import logging

from .errors import MarkupDecodeError
from .finish_reason import normalize_finish_reason
from .models import Choice, Completion
from .tool_calls import extract_tool_calls

logger = logging.getLogger(__name__)


def parse_choice(choice: Choice) -> Choice:
    """Return a new ``Choice`` with tool calls extracted and finish reason normalised.

    *choice* itself is not modified, so a decode failure leaves it intact.
    """
    message = extract_tool_calls(choice.message)
    finish_reason = normalize_finish_reason(message, choice.finish_reason)
    return choice.model_copy(update={"message": message, "finish_reason": finish_reason})


def parse_completion(completion: Completion) -> Completion:
    """Parse every choice of *completion* in order, replacing each in place.

    Fail-fast: the first ``MarkupDecodeError`` propagates immediately. Choices
    before the failing one have already been replaced with their parsed form;
    the failing choice and everything after it are left as received.
    """
    for position, choice in enumerate(completion.choices):
        try:
            completion.choices[position] = parse_choice(choice)
        except MarkupDecodeError as exc:
            logger.warning(
                "Completion %s: choice %d has undecodable tool call markup (%s)",
                completion.id, choice.index, exc.reason,
            )
            raise
    return completion

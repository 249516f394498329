"""Use cases: request a completion from Straico and return it in canonical shape."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from straico_client.application.ports import CompletionTransport
from straico_client.application.prompt import build_prompt
from straico_client.domain import Completion, CompletionRequest
from straico_client.domain.requests import build_completion_request

logger = logging.getLogger(__name__)


def build_chat_request(
    messages: List[Dict[str, Any]],
    model: str,
    *,
    tools: Optional[List[Dict[str, Any]]] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> CompletionRequest:
    """Turn an OpenAI-style chat turn (messages + optional tools) into a Straico request.

    Raises:
        ValueError: unsupported message role, or out-of-range sampling options.
    """
    prompt = build_prompt(messages, tools)
    logger.debug(
        "chat model=%s messages=%d tools=%d prompt_chars=%d",
        model, len(messages), len(tools or []), len(prompt),
    )
    return build_completion_request(prompt, [model], temperature=temperature, max_tokens=max_tokens)


async def complete(client: CompletionTransport, request: CompletionRequest) -> Completion:
    """Send *request*, pick the completion, and parse its tool-call markup.

    Raises:
        EmptySelectionError: Straico answered without any completion.
        MarkupDecodeError: a choice carries tool-call markup that is not valid JSON.
        UpstreamError / httpx.HTTPError: propagated from the transport.
    """
    data = await client.create_completion(request)
    logger.debug(
        "Straico returned %d completion(s); overall price %.4f, words %d",
        len(data.completions), data.overall_price.total, data.overall_words.total,
    )
    completion = data.get_completion().parse()
    logger.info(
        "Completion %s model=%s choices=%d finish=%s",
        completion.id, completion.model, len(completion.choices),
        ",".join(choice.finish_reason for choice in completion.choices),
    )
    return completion

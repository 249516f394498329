"""Domain models for Straico completion responses. Pure data, no I/O.

The shapes mirror the wire format of ``POST /v1/prompt/completion``: a
``CompletionData`` holds one ``Model`` entry per requested model, each of
which wraps an OpenAI-style ``Completion`` plus price and word bookkeeping.

``Message`` and ``ToolCall`` are discriminated unions (on ``role`` and
``type`` respectively), so decoding a payload always yields exactly one of
the concrete variants below.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    Field,
    SerializerFunctionWrapHandler,
    field_serializer,
    model_serializer,
)

from .errors import EmptySelectionError


class FunctionData(BaseModel):
    """Name and arguments of a single function call.

    ``arguments`` is decoded as arbitrary JSON but written back as a JSON
    *string*, which is what OpenAI-compatible consumers expect.  The string is
    canonical: compact separators and sorted object keys.  Non-finite numbers
    are refused since they have no JSON spelling.
    """

    name: str
    arguments: Any

    @field_serializer("arguments")
    def _encode_arguments(self, arguments: Any) -> str:
        return json.dumps(
            arguments, separators=(",", ":"), sort_keys=True, ensure_ascii=False, allow_nan=False,
        )


class FunctionToolCall(BaseModel):
    type: Literal["function"] = "function"
    id: str
    function: FunctionData


# Only one variant today; widen to an Annotated Union with
# Field(discriminator="type") when a second one appears.
ToolCall = FunctionToolCall


class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: str


class SystemMessage(BaseModel):
    role: Literal["system"] = "system"
    content: str


class ToolMessage(BaseModel):
    role: Literal["tool"] = "tool"
    content: str


class AssistantMessage(BaseModel):
    """Assistant output: free text, structured tool calls, or (after parsing) one of them.

    ``content`` is always written (``null`` when absent); ``tool_calls`` is
    left out of the payload entirely when absent.
    """

    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None

    @classmethod
    def from_content(cls, content: str) -> "AssistantMessage":
        return cls(content=content)

    @classmethod
    def from_tool_calls(cls, tool_calls: List[ToolCall]) -> "AssistantMessage":
        return cls(content=None, tool_calls=tool_calls)

    @model_serializer(mode="wrap")
    def _omit_absent_tool_calls(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        if self.tool_calls is None:
            data.pop("tool_calls", None)
        return data


Message = Annotated[
    Union[UserMessage, AssistantMessage, SystemMessage, ToolMessage],
    Field(discriminator="role"),
]


class Choice(BaseModel):
    """One candidate response. ``index`` mirrors its position in ``Completion.choices``."""

    message: Message
    index: int
    finish_reason: str


class Usage(BaseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class Completion(BaseModel):
    """An OpenAI-style chat completion as returned by one Straico model."""

    choices: List[Choice]
    object: str
    id: str
    model: str
    created: int
    usage: Usage

    def parse(self) -> "Completion":
        """Extract ``<tool_call>`` markup and normalise finish reasons in place.

        See :func:`straico_client.domain.parsing.parse_completion`.
        """
        from .parsing import parse_completion

        return parse_completion(self)


class Price(BaseModel):
    input: float
    output: float
    total: float


class Words(BaseModel):
    input: int
    output: int
    total: int


class Model(BaseModel):
    """A model's completion together with its price and word counts."""

    completion: Completion
    price: Price
    words: Words


class CompletionData(BaseModel):
    """Payload of ``/v1/prompt/completion``: one ``Model`` entry per requested model."""

    completions: Dict[str, Model]
    overall_price: Price
    overall_words: Words

    def get_completion(self) -> Completion:
        """Return the completion of one entry in ``completions``.

        Which entry is returned is unspecified when there are several; callers
        that asked for more than one model should read ``completions`` directly.

        Raises:
            EmptySelectionError: ``completions`` has no entries.
        """
        for entry in self.completions.values():
            return entry.completion
        raise EmptySelectionError("CompletionData.completions is empty; nothing to select")


class ImagePrice(BaseModel):
    price_per_image: int
    quantity_images: int
    total: int


class ImageData(BaseModel):
    """Payload of ``/v0/image/generation``."""

    zip: str
    images: List[str]
    price: ImagePrice

"""Domain layer: response models and the parse pipeline. No I/O."""

from .errors import EmptySelectionError, MarkupDecodeError, StraicoError, UpstreamError
from .models import (
    AssistantMessage,
    Choice,
    Completion,
    CompletionData,
    FunctionData,
    FunctionToolCall,
    ImageData,
    ImagePrice,
    Message,
    Model,
    Price,
    SystemMessage,
    ToolCall,
    ToolMessage,
    Usage,
    UserMessage,
    Words,
)
from .parsing import parse_choice, parse_completion
from .requests import CompletionRequest, ImageRequest

__all__ = [
    "AssistantMessage",
    "Choice",
    "Completion",
    "CompletionData",
    "CompletionRequest",
    "FunctionData",
    "FunctionToolCall",
    "ImageData",
    "ImagePrice",
    "ImageRequest",
    "Message",
    "Model",
    "Price",
    "SystemMessage",
    "ToolCall",
    "ToolMessage",
    "Usage",
    "UserMessage",
    "Words",
    "parse_choice",
    "parse_completion",
    "StraicoError",
    "MarkupDecodeError",
    "EmptySelectionError",
    "UpstreamError",
]

"""Pytest fixtures and helpers for straico-client tests."""
from __future__ import annotations

from typing import Any, Dict, Optional

import pytest


def _choice(
    content: Optional[str] = "Hello",
    finish_reason: str = "stop",
    index: int = 0,
    role: str = "assistant",
) -> Dict[str, Any]:
    return {"message": {"role": role, "content": content}, "index": index, "finish_reason": finish_reason}


def _completion(*choices: Dict[str, Any], completion_id: str = "cmpl-1", model: str = "anthropic/claude-3.5-sonnet") -> Dict[str, Any]:
    return {
        "id": completion_id,
        "object": "chat.completion",
        "model": model,
        "created": 1718000000,
        "usage": {"prompt_tokens": 12, "completion_tokens": 30, "total_tokens": 42},
        "choices": list(choices) or [_choice()],
    }


def _completion_data(completions: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    price = {"input": 0.5, "output": 1.5, "total": 2.0}
    words = {"input": 10, "output": 25, "total": 35}
    return {
        "completions": {
            label: {"completion": completion, "price": price, "words": words}
            for label, completion in completions.items()
        },
        "overall_price": price,
        "overall_words": words,
    }


@pytest.fixture
def choice_payload():
    """Factory for one wire-format choice dict."""
    return _choice


@pytest.fixture
def completion_payload():
    """Factory for a wire-format completion dict built from choice dicts."""
    return _completion


@pytest.fixture
def completion_data_payload():
    """Factory for the ``data`` object of a /v1/prompt/completion response."""
    return _completion_data


@pytest.fixture(autouse=True)
def _reset_config_cache(monkeypatch):
    """Drop cached config and environment before (and after) every test.

    Also drops any STRAICO_* variables from the developer's shell so tests see
    the defaults unless they set variables themselves.
    """
    import os

    from straico_client.config import reset_config

    for name in list(os.environ):
        if name.startswith("STRAICO_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


def tool_call_markup(name: str, arguments: Any) -> str:
    import json

    return "<tool_call>" + json.dumps({"name": name, "arguments": arguments}) + "</tool_call>"


@pytest.fixture
def markup():
    """Factory for a ``<tool_call>`` span wrapping ``{"name", "arguments"}``."""
    return tool_call_markup

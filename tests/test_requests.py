"""Tests for Straico request builders."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from straico_client.domain import CompletionRequest, ImageRequest
from straico_client.domain.requests import build_completion_request


def test_completion_payload_omits_unset_options():
    request = CompletionRequest(models=["openai/gpt-4o-mini"], message="hi")
    assert request.to_payload() == {"models": ["openai/gpt-4o-mini"], "message": "hi"}


def test_completion_payload_includes_set_options():
    request = CompletionRequest(
        models=["a", "b"], message="hi", temperature=0.3, max_tokens=100,
        youtube_urls=["https://youtu.be/x"], display_transcripts=True,
    )
    payload = request.to_payload()
    assert payload["temperature"] == 0.3
    assert payload["max_tokens"] == 100
    assert payload["youtube_urls"] == ["https://youtu.be/x"]
    assert payload["display_transcripts"] is True
    assert "file_urls" not in payload


@pytest.mark.parametrize("models", [[], ["a", "b", "c", "d", "e"]])
def test_completion_model_count_is_bounded(models):
    with pytest.raises(ValidationError):
        CompletionRequest(models=models, message="hi")


def test_completion_temperature_is_bounded():
    with pytest.raises(ValidationError):
        CompletionRequest(models=["a"], message="hi", temperature=3.5)


def test_build_completion_request_cleans_model_ids():
    request = build_completion_request("hi", [" openai/gpt-4o ", "", "  "])
    assert request.models == ["openai/gpt-4o"]


def test_image_request_defaults_and_bounds():
    request = ImageRequest(model="openai/dall-e-3", description="a cat")
    assert request.to_payload() == {
        "model": "openai/dall-e-3", "description": "a cat", "size": "square", "variations": 1,
    }
    with pytest.raises(ValidationError):
        ImageRequest(model="m", description="d", size="huge")
    with pytest.raises(ValidationError):
        ImageRequest(model="m", description="d", variations=5)

"""Request bodies for the Straico completion and image endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class CompletionRequest(BaseModel):
    """Body of ``POST /v1/prompt/completion``.

    Straico answers one prompt with up to four models in parallel; the result
    is keyed by model id in ``CompletionData.completions``.
    """

    models: List[str] = Field(..., min_length=1, max_length=4)
    message: str
    file_urls: Optional[List[str]] = None
    youtube_urls: Optional[List[str]] = None
    display_transcripts: Optional[bool] = None
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, gt=0)

    def to_payload(self) -> Dict[str, Any]:
        """JSON body with unset optionals left out."""
        return self.model_dump(exclude_none=True)


class ImageRequest(BaseModel):
    """Body of ``POST /v0/image/generation``."""

    model: str
    description: str
    size: Literal["square", "landscape", "portrait"] = "square"
    variations: int = Field(1, ge=1, le=4)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


def build_completion_request(
    message: str,
    models: List[str],
    *,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> CompletionRequest:
    """Construct a ``CompletionRequest`` from external input.

    Model ids are stripped and blanks dropped, so both the CLI (repeated
    ``--model`` options) and the proxy (a single ``model`` field) can pass
    what they received.
    """
    cleaned = [m.strip() for m in models if m and m.strip()]
    return CompletionRequest(
        models=cleaned,
        message=message,
        temperature=temperature,
        max_tokens=max_tokens,
    )

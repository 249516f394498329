"""Straico HTTP client.

Sends bearer-authenticated ``POST`` requests to the Straico API and unwraps
the ``{"data": ..., "success": ...}`` envelope every endpoint answers with.
No retries: non-2xx responses raise ``httpx.HTTPStatusError`` and a
``success: false`` envelope raises :class:`UpstreamError`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from straico_client.config.constants import (
    COMPLETION_ENDPOINT,
    IMAGE_ENDPOINT,
    STRAICO_BASE_URL,
    STRAICO_DEFAULT_TIMEOUT_S,
)
from straico_client.domain import (
    CompletionData,
    CompletionRequest,
    ImageData,
    ImageRequest,
    UpstreamError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class ApiResponse(BaseModel, Generic[T]):
    """Straico response envelope."""
    data: Optional[T] = None
    success: bool = True
    error: Any = None
    message: Optional[str] = None

    def unwrap(self) -> T:
        if not self.success or self.data is None:
            detail = self.error or self.message or "no data in response"
            raise UpstreamError(f"Straico request failed: {detail}")
        return self.data


class StraicoClient:
    """Async client for the Straico completion and image endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = STRAICO_BASE_URL,
        timeout_s: float = STRAICO_DEFAULT_TIMEOUT_S,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_s

    async def post(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        """POST *payload* as JSON to ``{base_url}{endpoint}`` and return the decoded body."""
        url = f"{self._base_url}{endpoint}"
        headers = {"Authorization": f"Bearer {self._api_key}"}
        logger.debug("POST %s keys=%s", url, sorted(payload))
        timeout = httpx.Timeout(self._timeout)
        async with httpx.AsyncClient(timeout=timeout) as client:
            r = await client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            return r.json()

    async def create_completion(self, request: CompletionRequest) -> CompletionData:
        body = await self.post(COMPLETION_ENDPOINT, request.to_payload())
        return _unwrap(body, CompletionData)

    async def create_image(self, request: ImageRequest) -> ImageData:
        body = await self.post(IMAGE_ENDPOINT, request.to_payload())
        return _unwrap(body, ImageData)


def _unwrap(body: Any, data_type: Type[T]) -> T:
    if not isinstance(body, dict):
        raise UpstreamError(f"Unexpected Straico response: {type(body).__name__}")
    return ApiResponse[data_type].model_validate(body).unwrap()

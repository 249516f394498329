"""HTTP API: OpenAI-compatible proxy in front of Straico (FastAPI)."""

from __future__ import annotations

import hmac
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from straico_client.application import build_chat_request, complete
from straico_client.config import load_config
from straico_client.domain import EmptySelectionError, MarkupDecodeError, UpstreamError
from straico_client.infrastructure import build_straico_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):  # noqa: ARG001
    config = load_config()
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("straico_client").setLevel(config.log_level)
    yield


app = FastAPI(title="straico-proxy", lifespan=_lifespan)


@app.middleware("http")
async def _auth_middleware(request: Request, call_next):
    """Optional bearer-token authentication.

    Active only when ``proxy.api_key`` is configured (or
    ``STRAICO_PROXY_API_KEY`` is set).  When active, every endpoint except
    ``GET /health`` requires an ``Authorization: Bearer <key>`` header.
    Uses constant-time comparison to prevent timing attacks.
    """
    api_key = load_config().proxy.api_key.strip()
    if api_key and request.url.path != "/health":
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            return JSONResponse(
                status_code=401,
                content={"error": "Unauthorized", "detail": "Authorization: Bearer <key> header required"},
                headers={"WWW-Authenticate": "Bearer"},
            )
        token = auth_header[len("Bearer "):]
        if not hmac.compare_digest(token.encode(), api_key.encode()):
            return JSONResponse(
                status_code=401,
                content={"error": "Unauthorized", "detail": "Invalid API key"},
                headers={"WWW-Authenticate": "Bearer"},
            )
    return await call_next(request)


class ChatCompletionRequest(BaseModel):
    """Subset of the OpenAI chat-completions request that Straico can honour."""
    model: Optional[str] = None
    messages: List[Dict[str, Any]] = Field(..., min_length=1)
    tools: Optional[List[Dict[str, Any]]] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    stream: bool = False


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/v1/models")
def list_models():
    model = load_config().straico.model
    return {"object": "list", "data": [{"id": model, "object": "model", "owned_by": "straico"}]}


@app.post("/v1/chat/completions")
async def chat_completions(req: ChatCompletionRequest):
    if req.stream:
        raise HTTPException(status_code=400, detail="Streaming responses are not supported by this proxy.")

    config = load_config()
    model = req.model or config.straico.model
    logger.info(
        "POST /v1/chat/completions model=%s messages=%d tools=%d",
        model, len(req.messages), len(req.tools or []),
    )

    try:
        client = build_straico_client(config.straico)
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))

    try:
        request = build_chat_request(
            req.messages, model,
            tools=req.tools, temperature=req.temperature, max_tokens=req.max_tokens,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        completion = await complete(client, request)
    except MarkupDecodeError as e:
        raise HTTPException(status_code=502, detail=f"Model returned malformed tool call markup: {e.reason}")
    except (UpstreamError, EmptySelectionError) as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValidationError as e:
        raise HTTPException(
            status_code=502,
            detail=f"Unexpected Straico response shape ({e.error_count()} error(s)).",
        )
    except httpx.ConnectError as e:
        raise HTTPException(status_code=503, detail=f"Straico unreachable ({config.straico.base_url}): {e}.")
    except httpx.TimeoutException:
        raise HTTPException(
            status_code=504,
            detail=f"Straico did not answer within {config.straico.timeout_s:g}s.",
        )
    except httpx.HTTPStatusError as e:
        raise HTTPException(
            status_code=502,
            detail=f"Straico error ({config.straico.base_url}): {e.response.status_code}.",
        )

    return completion.model_dump(mode="json")

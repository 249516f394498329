"""Tests for the OpenAI-compatible proxy (FastAPI app).

All Straico calls are mocked by patching ``complete`` in the http_api module.
"""
from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from straico_client.domain import Completion, EmptySelectionError, MarkupDecodeError, UpstreamError
from straico_client.interfaces.http_api import app

_CHAT = {"model": "openai/gpt-4o-mini", "messages": [{"role": "user", "content": "find 7"}]}


@pytest.fixture
def with_straico_key(monkeypatch):
    monkeypatch.setenv("STRAICO_API_KEY", "sk-test")


def _parsed_completion(completion_payload, choice_payload, markup) -> Completion:
    return Completion.model_validate(
        completion_payload(choice_payload(markup("lookup", {"id": 7}), finish_reason="end_turn"))
    ).parse()


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

def test_health_accessible_without_key():
    r = TestClient(app).get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_health_exempt_from_auth(monkeypatch):
    monkeypatch.setenv("STRAICO_PROXY_API_KEY", "secret123")
    assert TestClient(app).get("/health").status_code == 200


def test_requests_require_auth_when_key_set(monkeypatch):
    monkeypatch.setenv("STRAICO_PROXY_API_KEY", "secret123")
    r = TestClient(app, raise_server_exceptions=False).post("/v1/chat/completions", json=_CHAT)
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"


def test_wrong_key_rejected(monkeypatch):
    monkeypatch.setenv("STRAICO_PROXY_API_KEY", "secret123")
    r = TestClient(app).get("/v1/models", headers={"Authorization": "Bearer nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid API key"


def test_correct_key_passes(monkeypatch):
    monkeypatch.setenv("STRAICO_PROXY_API_KEY", "secret123")
    r = TestClient(app).get("/v1/models", headers={"Authorization": "Bearer secret123"})
    assert r.status_code == 200
    assert r.json()["data"][0]["id"] == "openai/gpt-4o-mini"


# ---------------------------------------------------------------------------
# POST /v1/chat/completions
# ---------------------------------------------------------------------------

def test_chat_completion_returns_canonical_tool_calls(
    with_straico_key, completion_payload, choice_payload, markup,
):
    completion = _parsed_completion(completion_payload, choice_payload, markup)
    with patch("straico_client.interfaces.http_api.complete", new_callable=AsyncMock, return_value=completion) as mock_complete:
        r = TestClient(app).post("/v1/chat/completions", json={
            **_CHAT,
            "tools": [{"type": "function", "function": {"name": "lookup", "parameters": {}}}],
        })

    assert r.status_code == 200
    choice = r.json()["choices"][0]
    assert choice["finish_reason"] == "tool_calls"
    assert choice["message"]["content"] is None
    assert choice["message"]["tool_calls"] == [
        {"type": "function", "id": "func", "function": {"name": "lookup", "arguments": '{"id":7}'}},
    ]

    sent_request = mock_complete.call_args.args[1]
    assert sent_request.models == ["openai/gpt-4o-mini"]
    assert "<tools>" in sent_request.message


def test_plain_reply_omits_tool_calls(with_straico_key, completion_payload, choice_payload):
    completion = Completion.model_validate(completion_payload(choice_payload("Hello", finish_reason="end_turn"))).parse()
    with patch("straico_client.interfaces.http_api.complete", new_callable=AsyncMock, return_value=completion):
        r = TestClient(app).post("/v1/chat/completions", json=_CHAT)

    message = r.json()["choices"][0]["message"]
    assert message == {"role": "assistant", "content": "Hello"}
    assert r.json()["choices"][0]["finish_reason"] == "stop"


def test_default_model_used_when_omitted(with_straico_key, completion_payload):
    completion = Completion.model_validate(completion_payload())
    with patch("straico_client.interfaces.http_api.complete", new_callable=AsyncMock, return_value=completion) as mock_complete:
        TestClient(app).post("/v1/chat/completions", json={"messages": _CHAT["messages"]})
    assert mock_complete.call_args.args[1].models == ["openai/gpt-4o-mini"]


def test_stream_rejected(with_straico_key):
    r = TestClient(app).post("/v1/chat/completions", json={**_CHAT, "stream": True})
    assert r.status_code == 400


def test_missing_straico_key_is_503():
    r = TestClient(app).post("/v1/chat/completions", json=_CHAT)
    assert r.status_code == 503
    assert "STRAICO_API_KEY" in r.json()["detail"]


def test_bad_role_is_400(with_straico_key):
    r = TestClient(app).post("/v1/chat/completions", json={"messages": [{"role": "robot", "content": "x"}]})
    assert r.status_code == 400


def test_empty_messages_is_422(with_straico_key):
    r = TestClient(app).post("/v1/chat/completions", json={"messages": []})
    assert r.status_code == 422


@pytest.mark.parametrize(
    "error, status",
    [
        (MarkupDecodeError('{"arguments": {}}', "name: Field required"), 502),
        (UpstreamError("Straico request failed: Insufficient coins"), 502),
        (EmptySelectionError("empty"), 502),
        (httpx.ConnectError("refused"), 503),
        (httpx.ReadTimeout("slow"), 504),
    ],
)
def test_errors_mapped_to_status(with_straico_key, error, status):
    with patch("straico_client.interfaces.http_api.complete", new_callable=AsyncMock, side_effect=error):
        r = TestClient(app, raise_server_exceptions=False).post("/v1/chat/completions", json=_CHAT)
    assert r.status_code == status


def test_upstream_http_status_is_502(with_straico_key):
    request = httpx.Request("POST", "https://api.straico.com/v1/prompt/completion")
    error = httpx.HTTPStatusError("500", request=request, response=httpx.Response(500, request=request))
    with patch("straico_client.interfaces.http_api.complete", new_callable=AsyncMock, side_effect=error):
        r = TestClient(app, raise_server_exceptions=False).post("/v1/chat/completions", json=_CHAT)
    assert r.status_code == 502
    assert "500" in r.json()["detail"]

"""
Unit tests for the completion API client.

Uses httpx.MockTransport instead of the network.
"""

import json

import httpx
import pytest

from chatbox.completion_client import CompletionClient
from chatbox.core.exceptions import UpstreamError


def _client(handler) -> CompletionClient:
    return CompletionClient(
        base_url="https://completions.test/v1/",
        api_key="sk-test",
        model="test-model",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


async def test_request_shape_and_reply():
    """Posts model, prompt, temperature and max_tokens; returns stripped text."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"text": "\n\nHi there"}]})

    client = _client(handler)
    text = await client.complete("Hello")
    await client.close()

    assert text == "Hi there"
    assert seen["url"] == "https://completions.test/v1/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"] == {
        "model": "test-model",
        "prompt": "Hello",
        "temperature": 0.0,
        "max_tokens": 3000,
    }


async def test_error_status():
    """Quota and server errors become UpstreamError."""
    client = _client(lambda request: httpx.Response(429, json={"error": "quota"}))

    with pytest.raises(UpstreamError) as exc_info:
        await client.complete("Hello")

    assert exc_info.value.status_code == 500
    assert "429" in exc_info.value.message


@pytest.mark.parametrize(
    "body",
    [
        {"choices": []},
        {"data": "nothing"},
        {"choices": [{"text": None}]},
        ["not", "an", "object"],
    ],
)
async def test_malformed_response(body):
    """Bodies without choices[0].text are rejected."""
    client = _client(lambda request: httpx.Response(200, json=body))

    with pytest.raises(UpstreamError):
        await client.complete("Hello")


async def test_invalid_json():
    """Non-JSON bodies are rejected."""
    client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(UpstreamError):
        await client.complete("Hello")


async def test_timeout():
    """Timeouts become UpstreamError."""
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await _client(handler).complete("Hello")

    assert "timed out" in exc_info.value.message


async def test_unreachable():
    """Connection failures become UpstreamError."""
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError):
        await _client(handler).complete("Hello")

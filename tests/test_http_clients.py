"""Tests for the chat-completion adapters."""

import asyncio
import json
from collections.abc import Callable
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError, APIStatusError

from diet_tracker.adapters.groq_chat_client import (
    REJECTED_CREDENTIALS,
    UNEXPECTED_RESPONSE,
    GroqChatClient,
)
from diet_tracker.adapters.huggingface_client import HttpxHuggingFaceClient
from diet_tracker.domain.chat import ChatMessage
from diet_tracker.errors import ChatUpstreamError

_GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"


class _FakeCompletions:
    def __init__(
        self, reply: str | None = "Drink water.", error: Exception | None = None
    ) -> None:
        self.reply = reply
        self.error = error
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class _FakeOpenAI:
    def __init__(self, completions: _FakeCompletions) -> None:
        self.chat = SimpleNamespace(completions=completions)
        self.closed = False

    async def close(self) -> None:
        self.closed = True


def _status_error(status_code: int, body: object) -> APIStatusError:
    response = httpx.Response(
        status_code, request=httpx.Request("POST", _GROQ_URL), json=body
    )
    return APIStatusError("request failed", response=response, body=body)


def test_groq_client_sends_conversation() -> None:
    completions = _FakeCompletions()
    client = GroqChatClient(client=_FakeOpenAI(completions), model="llama-test")
    messages = [
        ChatMessage(role="user", content="Hi"),
        ChatMessage(role="assistant", content="Hello!"),
    ]

    reply = asyncio.run(client.complete("ignored", messages, "Be brief"))

    assert reply == "Drink water."
    assert completions.last_payload["model"] == "llama-test"
    assert completions.last_payload["messages"] == [
        {"role": "system", "content": "Be brief"},
        {"role": "user", "content": "Hi"},
        {"role": "assistant", "content": "Hello!"},
    ]


def test_groq_client_sends_bare_prompt() -> None:
    completions = _FakeCompletions(reply="  Eat fibre.  ")
    client = GroqChatClient(client=_FakeOpenAI(completions))

    reply = asyncio.run(client.complete("What helps digestion?", [], None))

    assert reply == "Eat fibre."
    assert completions.last_payload["messages"] == [
        {"role": "user", "content": "What helps digestion?"}
    ]


def test_groq_client_maps_errors() -> None:
    cases = [
        (_status_error(401, {"error": {"message": "bad"}}), REJECTED_CREDENTIALS, 401),
        (_status_error(429, {"error": {"message": "Slow down"}}), "Slow down", 429),
        (_status_error(500, None), UNEXPECTED_RESPONSE, 500),
        (
            APIConnectionError(request=httpx.Request("POST", _GROQ_URL)),
            UNEXPECTED_RESPONSE,
            502,
        ),
    ]
    for error, message, status_code in cases:
        client = GroqChatClient(client=_FakeOpenAI(_FakeCompletions(error=error)))

        with pytest.raises(ChatUpstreamError) as info:
            asyncio.run(client.complete("Hi", [], None))

        assert info.value.message == message
        assert info.value.status_code == status_code


def test_groq_client_rejects_empty_reply() -> None:
    client = GroqChatClient(client=_FakeOpenAI(_FakeCompletions(reply="   ")))

    with pytest.raises(ChatUpstreamError, match="No response generated."):
        asyncio.run(client.complete("Hi", [], None))


def test_groq_client_close() -> None:
    fake = _FakeOpenAI(_FakeCompletions())
    client = GroqChatClient(client=fake)

    asyncio.run(client.close())

    assert fake.closed is True


def _huggingface(
    handler: Callable[[httpx.Request], httpx.Response],
) -> HttpxHuggingFaceClient:
    return HttpxHuggingFaceClient(
        api_key="hf-key",
        model="org/model",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def test_huggingface_client_generates_text() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[{"generated_text": " Try lentils. "}])

    client = _huggingface(handler)

    reply = asyncio.run(client.complete("User: Hi\nAssistant:", [], "Be kind"))

    assert reply == "Try lentils."
    assert seen["path"] == "/models/org/model"
    assert seen["auth"] == "Bearer hf-key"
    assert seen["body"]["inputs"] == "Be kind\n\nUser: Hi\nAssistant:"
    assert seen["body"]["parameters"]["return_full_text"] is False
    assert seen["body"]["options"] == {"wait_for_model": True}
    asyncio.run(client.close())


def test_huggingface_client_maps_errors() -> None:
    cases = [
        (httpx.Response(503, json={"error": "Model is loading"}), "Model is loading"),
        (
            httpx.Response(401, json={"error": "Unauthorized"}),
            "Assistant credentials were rejected. Refresh the Hugging Face API key.",
        ),
        (httpx.Response(200, content=b"<html>"), "malformed data"),
        (httpx.Response(200, json=[{"generated_text": "  "}]), "No response"),
    ]
    for response, message in cases:
        client = _huggingface(lambda _request, response=response: response)

        with pytest.raises(ChatUpstreamError, match=message):
            asyncio.run(client.complete("Hi", [], None))

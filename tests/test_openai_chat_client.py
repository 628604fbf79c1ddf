try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import httpx
import pytest

from relive.clients import OpenAIChatClient
from relive.core.config import OpenAISettings
from relive.core.errors import (
    ConfigurationError,
    InvalidCredentialError,
    MalformedResponseError,
    ProviderRequestError,
    TransientProviderError,
)


def _settings(**overrides) -> OpenAISettings:
    values = {"api_key": "sk-test", "base_url": "https://llm.example.com/v1"}
    values.update(overrides)
    return OpenAISettings(**values)


def _client(handler) -> OpenAIChatClient:
    return OpenAIChatClient(_settings(), transport=httpx.MockTransport(handler))


def _completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.mark.asyncio
async def test_complete_posts_chat_request_and_returns_content():
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=_completion('{"label": "No Regret"}'))

    text = await _client(handler).complete(
        model="gpt-test",
        system_prompt="system text",
        user_message="Decision: moved cities",
    )

    assert text == '{"label": "No Regret"}'
    request = captured[0]
    assert request.url == "https://llm.example.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    body = json.loads(request.content)
    assert body["model"] == "gpt-test"
    assert body["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "Decision: moved cities"},
    ]
    assert body["max_completion_tokens"] == 1000


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, expected",
    [
        (401, InvalidCredentialError),
        (403, InvalidCredentialError),
        (429, TransientProviderError),
        (503, TransientProviderError),
        (400, ProviderRequestError),
    ],
)
async def test_error_statuses_are_classified(status, expected):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text="upstream said no")

    with pytest.raises(expected) as excinfo:
        await _client(handler).complete(model="gpt-test", system_prompt="s", user_message="u")

    assert str(status) in excinfo.value.details


@pytest.mark.asyncio
async def test_transport_failure_is_transient():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransientProviderError):
        await _client(handler).complete(model="gpt-test", system_prompt="s", user_message="u")


@pytest.mark.asyncio
async def test_missing_choices_is_malformed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(MalformedResponseError):
        await _client(handler).ping(model="gpt-test", prompt="ping")


def test_missing_api_key_is_configuration_error():
    with pytest.raises(ConfigurationError):
        OpenAIChatClient(_settings(api_key=None))

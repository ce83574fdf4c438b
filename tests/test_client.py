"""Tests for the chat-completions client."""

# pyright: reportAny=false
import json

import httpx
import pytest

from uilocalizer.config.schema import TranslationConfig
from uilocalizer.translation.client import SYSTEM_PROMPT, ChatCompletionClient
from uilocalizer.utils.exceptions import ConfigurationError, ProviderError


def make_client(handler: httpx.MockTransport | None = None, **overrides: object) -> ChatCompletionClient:
    config = TranslationConfig.model_validate({"api_key": "test-key", **overrides})
    return ChatCompletionClient(config, transport=handler)


class TestChatCompletionClient:
    """Test cases for ChatCompletionClient."""

    def test_requires_api_key(self) -> None:
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            _ = ChatCompletionClient(TranslationConfig())

    def test_request_shape(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"choices": [{"message": {"content": "你好"}}]})

        with make_client(
            httpx.MockTransport(handler),
            api_endpoint="https://llm.example.com/v1",
            model="gpt-4",
        ) as client:
            assert client.complete("Translate this") == "你好"

        request = seen[0]
        assert str(request.url) == "https://llm.example.com/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer test-key"
        body = json.loads(request.content)
        assert body["model"] == "gpt-4"
        assert body["temperature"] == 0.3
        assert body["max_tokens"] == 2000
        assert body["messages"] == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "Translate this"},
        ]
        assert client.requests_made == 1

    def test_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": {"message": "Invalid API key"}})

        client = make_client(httpx.MockTransport(handler))

        with pytest.raises(ProviderError, match="API error: 401 - Invalid API key") as exc_info:
            _ = client.complete("prompt")
        assert exc_info.value.status_code == 401
        assert exc_info.value.recoverable

    def test_http_error_without_body(self) -> None:
        client = make_client(httpx.MockTransport(lambda request: httpx.Response(503, text="down")))

        with pytest.raises(ProviderError, match="503 - Unknown error"):
            _ = client.complete("prompt")

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(httpx.MockTransport(handler))

        with pytest.raises(ProviderError, match="Request failed"):
            _ = client.complete("prompt")

    @pytest.mark.parametrize(
        "payload",
        [{"choices": []}, {"choices": [{"message": {}}]}, {"result": "ok"}, []],
    )
    def test_no_usable_choice(self, payload: object) -> None:
        client = make_client(httpx.MockTransport(lambda request: httpx.Response(200, json=payload)))

        with pytest.raises(ProviderError, match="No translation received"):
            _ = client.complete("prompt")

    def test_invalid_json(self) -> None:
        client = make_client(httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")))

        with pytest.raises(ProviderError, match="Invalid JSON"):
            _ = client.complete("prompt")

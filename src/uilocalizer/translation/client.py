"""
HTTP client for OpenAI-compatible chat-completions APIs.

The provider is treated as an opaque request/response boundary: one prompt
in, the first choice's message content out. Anything else (non-2xx status,
transport failure, malformed body, no choices) is a ProviderError.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypedDict, cast

import httpx

from ..config.schema import TranslationConfig
from ..utils.exceptions import ConfigurationError, ProviderError

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional software localization expert. "
    "Provide accurate, contextual translations for UI strings."
)


class ChatMessage(TypedDict):
    """A single chat message."""

    role: str
    content: str


class ChatCompletionRequest(TypedDict):
    """Request body sent to ``/chat/completions``."""

    model: str
    messages: list[ChatMessage]
    temperature: float
    max_tokens: int


class ChatCompletionClient:
    """Synchronous chat-completions client for translation requests."""

    def __init__(
        self,
        config: TranslationConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Provider settings; ``api_key`` must be set
            transport: Optional httpx transport (used to stub the provider)

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not config.api_key:
            raise ConfigurationError("OPENAI_API_KEY environment variable is required")

        self.config: TranslationConfig = config
        self.requests_made: int = 0
        self.client: httpx.Client = httpx.Client(
            base_url=config.api_endpoint,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
                "User-Agent": "ui-localizer/1.0",
            },
            timeout=config.timeout,
            transport=transport,
        )

    def __enter__(self) -> ChatCompletionClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.client.close()

    def build_request(self, prompt: str) -> ChatCompletionRequest:
        """Build the request body for ``prompt``."""
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

    def complete(self, prompt: str) -> str:
        """
        Send one prompt and return the first choice's message content.

        Raises:
            ProviderError: If the request fails or the response is unusable
        """
        self.requests_made += 1

        try:
            response = self.client.post("/chat/completions", json=self.build_request(prompt))
        except httpx.RequestError as e:
            raise ProviderError(f"Request failed: {e}") from e

        if response.is_error:
            raise ProviderError(
                f"API error: {response.status_code} - {self._error_message(response)}",
                response.status_code,
            )

        try:
            data = response.json()  # pyright: ignore[reportAny] # external API response
        except ValueError as e:
            raise ProviderError("Invalid JSON in API response", response.status_code) from e

        content = self._first_choice_content(data)
        if content is None:
            raise ProviderError("No translation received from API", response.status_code)

        logger.debug(f"Provider returned {len(content)} characters")
        return content

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()  # pyright: ignore[reportAny]
        except ValueError:
            return "Unknown error"
        if isinstance(body, dict):
            error = cast(dict[str, object], body).get("error")
            if isinstance(error, dict):
                message = cast(dict[str, object], error).get("message")
                if isinstance(message, str):
                    return message
        return "Unknown error"

    @staticmethod
    def _first_choice_content(data: object) -> str | None:
        if not isinstance(data, dict):
            return None
        choices = cast(dict[str, object], data).get("choices")
        if not isinstance(choices, list) or not choices:
            return None
        first = cast(list[object], choices)[0]
        if not isinstance(first, dict):
            return None
        message = cast(dict[str, object], first).get("message")
        if not isinstance(message, dict):
            return None
        content = cast(dict[str, object], message).get("content")
        return content if isinstance(content, str) else None

"""OpenRouter chat-completion client."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import ClassVar

import httpx
import openai
from loguru import logger

from maik.config import DEFAULT_API_BASE, Settings
from maik.core.session import ChatMessage
from maik.errors import ProviderError, ProviderErrorKind


@dataclass(frozen=True)
class ModelConfig:
    """Generation parameters for one completion call."""

    model: str = "gpt-4"
    temperature: float = 0.7
    max_tokens: int = 4000


def classify_provider_error(exc: Exception) -> tuple[ProviderErrorKind, int | None]:
    """Map an OpenAI SDK exception to a provider error kind and HTTP status."""
    if isinstance(exc, openai.APIConnectionError):
        return ProviderErrorKind.NETWORK, None
    if isinstance(exc, openai.APIResponseValidationError):
        return ProviderErrorKind.MALFORMED_RESPONSE, exc.status_code
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return ProviderErrorKind.AUTH, exc.status_code
    if isinstance(exc, openai.RateLimitError):
        return ProviderErrorKind.RATE_LIMIT, exc.status_code
    if isinstance(exc, (openai.BadRequestError, openai.NotFoundError, openai.UnprocessableEntityError)):
        return ProviderErrorKind.MALFORMED_REQUEST, exc.status_code
    if isinstance(exc, openai.InternalServerError):
        return ProviderErrorKind.SERVER, exc.status_code
    if isinstance(exc, openai.APIStatusError):
        return ProviderErrorKind.UNKNOWN, exc.status_code
    return ProviderErrorKind.UNKNOWN, None


class ChatClient:
    """Send role-tagged messages to an OpenAI-compatible endpoint and return the reply text."""

    DEFAULT_HEADERS: ClassVar[dict[str, str]] = {"HTTP-Referer": "https://github.com/maik-cli/maik", "X-Title": "MAIK"}

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_API_BASE,
        defaults: ModelConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.defaults = defaults or ModelConfig()
        self._client = openai.OpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            default_headers=self.DEFAULT_HEADERS,
            http_client=http_client,
        )

    def chat_completion(
        self,
        messages: Sequence[ChatMessage],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        overrides = {
            key: value
            for key, value in (("model", model), ("temperature", temperature), ("max_tokens", max_tokens))
            if value is not None
        }
        config = replace(self.defaults, **overrides)
        logger.info("chat.completion.start model={} messages={}", config.model, len(messages))

        try:
            response = self._client.chat.completions.create(
                model=config.model,
                messages=list(messages),  # type: ignore[arg-type]
                temperature=config.temperature,
                max_tokens=config.max_tokens,
            )
        except openai.OpenAIError as exc:
            kind, status_code = classify_provider_error(exc)
            logger.warning("chat.completion.error kind={} status={} error={}", kind.value, status_code, exc)
            raise ProviderError(str(exc), kind=kind, status_code=status_code) from exc

        message = response.choices[0].message if response.choices else None
        content = (message.content if message is not None else None) or ""
        if not content:
            logger.warning("chat.completion.empty model={}", config.model)
            return ""
        logger.info("chat.completion.finish model={} chars={}", config.model, len(content))
        return content

    def generate_contract_step(
        self,
        system_prompt: str,
        user_message: str,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        """Send `[system] + history + [user]` and return the completion text."""
        messages: list[ChatMessage] = [
            {"role": "system", "content": system_prompt},
            *history,
            {"role": "user", "content": user_message},
        ]
        return self.chat_completion(messages)


def build_chat_client(settings: Settings, api_key: str) -> ChatClient:
    """Build the chat client configured from settings."""

    return ChatClient(
        api_key,
        base_url=settings.api_base,
        defaults=ModelConfig(
            model=settings.model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        ),
    )

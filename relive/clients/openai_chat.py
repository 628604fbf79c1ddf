"""Minimal OpenAI chat-completions client built on httpx."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from relive.core.config import OpenAISettings
from relive.core.errors import (
    ConfigurationError,
    InvalidCredentialError,
    MalformedResponseError,
    ProviderRequestError,
    TransientProviderError,
)

_TRANSIENT_STATUSES = frozenset({408, 429, 500, 502, 503, 504})
_CREDENTIAL_STATUSES = frozenset({401, 403})

logger = logging.getLogger(__name__)


class OpenAIChatClient:
    """POST prompts to a chat-completions endpoint and return the message text."""

    def __init__(
        self,
        settings: OpenAISettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not settings.api_key:
            raise ConfigurationError(
                "OpenAI API key not configured. Please check your secrets.",
                details="OPENAI_API_KEY is missing.",
            )
        self._settings = settings
        self._transport = transport

    async def complete(self, *, model: str, system_prompt: str, user_message: str) -> str:
        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            "max_completion_tokens": self._settings.max_completion_tokens,
        }
        return _message_content(await self._post(payload, model=model))

    async def ping(self, *, model: str, prompt: str) -> str:
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_completion_tokens": 50,
        }
        return _message_content(await self._post(payload, model=model))

    async def _post(self, payload: Dict[str, Any], *, model: str) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._settings.base_url,
                timeout=self._settings.http_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post("/chat/completions", json=payload, headers=headers)
        except httpx.TransportError as exc:
            raise TransientProviderError(details=f"OpenAI transport error: {exc}") from exc

        if response.is_success:
            try:
                return response.json()
            except ValueError as exc:
                raise MalformedResponseError(details="OpenAI returned a non-JSON body.") from exc

        status = response.status_code
        details = f"OpenAI API error ({status}) for model '{model}': {response.text}"
        logger.error("OpenAI API error: %s %s", status, response.text)
        if status in _CREDENTIAL_STATUSES:
            raise InvalidCredentialError(details=details)
        if status in _TRANSIENT_STATUSES:
            raise TransientProviderError(details=details)
        raise ProviderRequestError(details=details)


def _message_content(data: Dict[str, Any]) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponseError(details="OpenAI response had no message content.") from exc
    if not isinstance(content, str):
        raise MalformedResponseError(details="OpenAI message content was not text.")
    return content


__all__ = ["OpenAIChatClient"]

"""Client wrapper for interacting with Google Gemini models."""

from __future__ import annotations

import logging

import httpx
from google import genai
from google.genai import errors, types

from relive.core.config import GeminiSettings
from relive.core.errors import (
    AnalysisError,
    ConfigurationError,
    InvalidCredentialError,
    ProviderRequestError,
    TransientProviderError,
)

_TRANSIENT_CODES = frozenset({408, 429, 500, 502, 503, 504})
_CREDENTIAL_CODES = frozenset({401, 403})

logger = logging.getLogger(__name__)


class GeminiClient:
    """Send analysis prompts to Gemini using an explicitly configured key."""

    def __init__(self, settings: GeminiSettings, *, client: genai.Client | None = None) -> None:
        if client is None:
            if not settings.api_key:
                raise ConfigurationError(
                    "Gemini API key is not set. Please configure your API key.",
                    details="GEMINI_API_KEY is missing.",
                )
            client = genai.Client(api_key=settings.api_key)
        self._settings = settings
        self._client = client

    async def complete(self, *, model: str, system_prompt: str, user_message: str) -> str:
        """Return the raw text produced by ``model`` for one analysis prompt."""
        config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=self._settings.temperature,
            top_p=0.9,
            top_k=40,
            max_output_tokens=self._settings.max_output_tokens,
            response_mime_type="application/json",
        )
        return await self._generate(model=model, contents=user_message, config=config)

    async def ping(self, *, model: str, prompt: str) -> str:
        """Round-trip a tiny prompt to confirm the key and model are usable."""
        config = types.GenerateContentConfig(max_output_tokens=50)
        return await self._generate(model=model, contents=prompt, config=config)

    async def _generate(
        self,
        *,
        model: str,
        contents: str,
        config: types.GenerateContentConfig,
    ) -> str:
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except errors.APIError as exc:
            raise translate_api_error(exc, model=model) from exc
        except httpx.TransportError as exc:
            raise TransientProviderError(details=f"Gemini transport error: {exc}") from exc
        except TimeoutError as exc:
            raise TransientProviderError(
                details=f"Gemini model '{model}' timed out: {exc}"
            ) from exc
        return response.text or ""


def translate_api_error(exc: errors.APIError, *, model: str) -> AnalysisError:
    """Map a Gemini API error onto the pipeline's error taxonomy."""
    code = exc.code or 0
    message = exc.message or str(exc)
    details = f"Gemini model '{model}' returned {code} {exc.status or ''}: {message}".strip()
    if code in _TRANSIENT_CODES or "overloaded" in message.lower():
        return TransientProviderError(details=details)
    if code in _CREDENTIAL_CODES or "api key" in message.lower():
        return InvalidCredentialError(details=details)
    logger.debug("Unrecoverable Gemini error for model '%s': %s", model, message)
    return ProviderRequestError(details=details)


__all__ = ["GeminiClient", "translate_api_error"]

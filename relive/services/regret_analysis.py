"""Orchestrates one regret analysis from user text to a validated result."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, Sequence

from relive.core.errors import (
    AnalysisError,
    InputValidationError,
    ModelsExhaustedError,
    TransientProviderError,
)
from relive.core.logging import preview
from relive.schemas import AnalysisResult, DiagnosticResponse, RegretLabel
from relive.services.contract import parse_analysis
from relive.services.model_fallback import invoke_with_fallback
from relive.services.prompts import CONNECTION_CHECK_PROMPT, build_prompt
from relive.utils.retry import RetryConfig, Sleep

logger = logging.getLogger(__name__)


class ChatProvider(Protocol):
    async def complete(self, *, model: str, system_prompt: str, user_message: str) -> str:
        ...

    async def ping(self, *, model: str, prompt: str) -> str:
        ...


FALLBACK_ANALYSIS = AnalysisResult(
    label=RegretLabel.NONE,
    confidence=0,
    intensity=0,
    reflection=(
        "We couldn't complete a full analysis right now, but taking the time to "
        "reflect on this decision is already a meaningful step."
    ),
    perspective=(
        "Decisions are made with the information available at the time. Looking "
        "back with hindsight often makes past choices seem clearer than they were."
    ),
    insights=[
        "Regret tends to soften when we acknowledge the constraints we faced.",
        "Naming the emotion behind a decision makes it easier to learn from it.",
    ],
    suggestions=[
        "Write down what you would do differently and one step you can take today.",
        "Try the analysis again in a few moments for a personalized reflection.",
    ],
)


class RegretAnalysisService:
    """Build the prompt, walk the model list, and validate what comes back."""

    def __init__(
        self,
        provider: ChatProvider,
        *,
        models: Sequence[str],
        retry_config: RetryConfig | None = None,
        fallback_on_exhaustion: bool = False,
        timeout_seconds: float | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._provider = provider
        self._models = list(models)
        self._retry_config = retry_config or RetryConfig()
        self._fallback_on_exhaustion = fallback_on_exhaustion
        self._timeout_seconds = timeout_seconds
        self._sleep = sleep

    @property
    def models(self) -> list[str]:
        return list(self._models)

    async def analyze(self, text: str | None) -> AnalysisResult:
        """Return a validated analysis for ``text``.

        Raises ``InputValidationError`` for blank text before touching the
        network. When every model is exhausted the canned ``FALLBACK_ANALYSIS``
        is returned if graceful degradation is enabled; otherwise
        ``ModelsExhaustedError`` propagates.
        """
        cleaned = (text or "").strip()
        if not cleaned:
            raise InputValidationError()

        logger.info("Analyzing regret for text: %s", preview(cleaned))
        prompt = build_prompt(cleaned)

        async def _attempt(model: str) -> AnalysisResult:
            raw = await self._provider.complete(
                model=model,
                system_prompt=prompt.system,
                user_message=prompt.user,
            )
            logger.debug("Model '%s' responded with %d characters.", model, len(raw))
            return parse_analysis(raw)

        try:
            async with asyncio.timeout(self._timeout_seconds) as scope:
                return await invoke_with_fallback(
                    self._models,
                    _attempt,
                    retry_config=self._retry_config,
                    sleep=self._sleep,
                )
        except ModelsExhaustedError as exc:
            if not self._fallback_on_exhaustion:
                raise
            logger.warning(
                "All models exhausted; returning fallback analysis. %s", exc.details
            )
            return FALLBACK_ANALYSIS
        except TimeoutError as exc:
            if not scope.expired():
                raise
            raise TransientProviderError(
                details=f"Analysis did not finish within {self._timeout_seconds}s."
            ) from exc

    async def check_connection(self) -> DiagnosticResponse:
        """Ping the preferred model and report whether the provider answers."""
        if not self._models:
            return DiagnosticResponse(success=False, error="No model configured")
        model = self._models[0]
        try:
            reply = await self._provider.ping(model=model, prompt=CONNECTION_CHECK_PROMPT)
        except AnalysisError as exc:
            logger.error("Connection check against '%s' failed: %s", model, exc)
            return DiagnosticResponse(success=False, error=str(exc))
        logger.info("Connection check against '%s' succeeded.", model)
        return DiagnosticResponse(
            success=True,
            message=f"Connection to {model} working",
            response=reply,
        )


__all__ = ["ChatProvider", "FALLBACK_ANALYSIS", "RegretAnalysisService"]

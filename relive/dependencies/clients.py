"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache, partial
from typing import Callable

from relive.clients import GeminiClient, OpenAIChatClient
from relive.core.config import AppSettings, get_settings
from relive.dependencies.config import SettingsDependency
from relive.services import ChatProvider, RegretAnalysisService
from relive.utils.retry import RetryConfig

ServiceFactory = Callable[[], RegretAnalysisService]


def build_provider_client(settings: AppSettings) -> ChatProvider:
    """Construct the client for the configured provider.

    Raises ``ConfigurationError`` when the provider's API key is missing.
    """
    if settings.provider == "openai":
        return OpenAIChatClient(settings.openai)
    return GeminiClient(settings.gemini)


def build_regret_analysis_service(settings: AppSettings) -> RegretAnalysisService:
    """Wire the orchestrator from settings; used by the API and the CLI."""
    provider = build_provider_client(settings)
    models = settings.openai.models if settings.provider == "openai" else settings.gemini.models
    return RegretAnalysisService(
        provider,
        models=models,
        retry_config=RetryConfig(
            attempts=settings.retry.attempts,
            base_delay_seconds=settings.retry.base_delay_seconds,
        ),
        fallback_on_exhaustion=settings.fallback_on_exhaustion,
        timeout_seconds=settings.request_timeout_seconds,
    )


@lru_cache()
def get_regret_analysis_service() -> RegretAnalysisService:
    """Provide the shared regret analysis service."""
    return build_regret_analysis_service(get_settings())


def get_service_factory(settings: AppSettings = SettingsDependency) -> ServiceFactory:
    """Provide a deferred service builder.

    The diagnostic route calls it inside its own ``try`` so a missing key is
    reported in the diagnostic body instead of the generic error shape.
    """
    return partial(build_regret_analysis_service, settings)


__all__ = [
    "ServiceFactory",
    "build_provider_client",
    "build_regret_analysis_service",
    "get_regret_analysis_service",
    "get_service_factory",
]

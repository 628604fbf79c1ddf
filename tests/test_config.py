try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from relive.core.config import AppSettings, split_model_names
from relive.core.errors import ConfigurationError
from relive.clients import GeminiClient, OpenAIChatClient
from relive.dependencies import build_provider_client, build_regret_analysis_service


def test_split_model_names_deduplicates_in_order() -> None:
    assert split_model_names(" a, b ,,a,c ") == ["a", "b", "c"]


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELIVE_PROVIDER", "OpenAI")
    monkeypatch.setenv("OPENAI_MODEL_NAMES", "gpt-primary,gpt-backup")
    monkeypatch.setenv("RELIVE_RETRY_ATTEMPTS", "5")
    monkeypatch.setenv("RELIVE_FALLBACK_ON_EXHAUSTION", "true")

    settings = AppSettings()

    assert settings.provider == "openai"
    assert settings.openai.models == ["gpt-primary", "gpt-backup"]
    assert settings.retry.attempts == 5
    assert settings.fallback_on_exhaustion is True


def test_default_gemini_model_priority(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GEMINI_MODEL_NAMES", raising=False)

    settings = AppSettings()

    assert settings.gemini.models == ["gemini-2.5-flash", "gemini-1.5-flash", "gemini-pro"]


def test_provider_client_follows_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELIVE_PROVIDER", "openai")
    assert isinstance(build_provider_client(AppSettings()), OpenAIChatClient)

    monkeypatch.setenv("RELIVE_PROVIDER", "gemini")
    assert isinstance(build_provider_client(AppSettings()), GeminiClient)


def test_service_uses_provider_models(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELIVE_PROVIDER", "openai")
    monkeypatch.setenv("OPENAI_MODEL_NAMES", "gpt-x")

    service = build_regret_analysis_service(AppSettings())

    assert service.models == ["gpt-x"]


def test_missing_key_surfaces_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELIVE_PROVIDER", "openai")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ConfigurationError):
        build_provider_client(AppSettings())

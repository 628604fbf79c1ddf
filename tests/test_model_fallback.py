try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from relive.core.errors import (
    ConfigurationError,
    InvalidCredentialError,
    MalformedResponseError,
    ModelsExhaustedError,
    TransientProviderError,
)
from relive.services.model_fallback import invoke_with_fallback
from relive.utils.retry import RetryConfig


class ScriptedModels:
    """Fail each model with the scripted error, succeed on the rest."""

    def __init__(self, failures: dict[str, Exception]) -> None:
        self._failures = failures
        self.calls: list[str] = []

    async def __call__(self, model: str) -> str:
        self.calls.append(model)
        error = self._failures.get(model)
        if error is not None:
            raise error
        return f"result-from-{model}"


@pytest.mark.asyncio
async def test_transient_failures_advance_to_next_model(sleep_recorder):
    work = ScriptedModels({"A": TransientProviderError(), "B": TransientProviderError()})

    result = await invoke_with_fallback(
        ["A", "B", "C"],
        work,
        retry_config=RetryConfig(attempts=1),
        sleep=sleep_recorder,
    )

    assert result == "result-from-C"
    assert work.calls == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_each_model_gets_its_own_retry_budget(sleep_recorder):
    work = ScriptedModels({"A": TransientProviderError()})

    result = await invoke_with_fallback(
        ["A", "B"],
        work,
        retry_config=RetryConfig(attempts=3, base_delay_seconds=1.0),
        sleep=sleep_recorder,
    )

    assert result == "result-from-B"
    assert work.calls == ["A", "A", "A", "B"]
    assert sleep_recorder.delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_non_transient_failure_aborts_sequence(sleep_recorder):
    work = ScriptedModels({"A": InvalidCredentialError()})

    with pytest.raises(InvalidCredentialError):
        await invoke_with_fallback(["A", "B", "C"], work, sleep=sleep_recorder)

    assert work.calls == ["A"]


@pytest.mark.asyncio
async def test_malformed_response_falls_back_without_retry(sleep_recorder):
    work = ScriptedModels({"A": MalformedResponseError()})

    result = await invoke_with_fallback(["A", "B"], work, sleep=sleep_recorder)

    assert result == "result-from-B"
    assert work.calls == ["A", "B"]
    assert sleep_recorder.delays == []


@pytest.mark.asyncio
async def test_exhaustion_reports_last_error_category(sleep_recorder):
    work = ScriptedModels(
        {
            "A": TransientProviderError(),
            "B": TransientProviderError(),
            "C": TransientProviderError(),
        }
    )

    with pytest.raises(ModelsExhaustedError) as excinfo:
        await invoke_with_fallback(
            ["A", "B", "C"],
            work,
            retry_config=RetryConfig(attempts=1),
            sleep=sleep_recorder,
        )

    error = excinfo.value
    assert error.models == ("A", "B", "C")
    assert error.category == "provider_overloaded"
    assert error.status_code == 503
    assert "high traffic" in error.user_message


@pytest.mark.asyncio
async def test_exhaustion_after_malformed_reply_is_malformed(sleep_recorder):
    work = ScriptedModels({"A": TransientProviderError(), "B": MalformedResponseError()})

    with pytest.raises(ModelsExhaustedError) as excinfo:
        await invoke_with_fallback(
            ["A", "B"],
            work,
            retry_config=RetryConfig(attempts=1),
            sleep=sleep_recorder,
        )

    assert excinfo.value.category == "malformed_response"
    assert excinfo.value.status_code == 502


@pytest.mark.asyncio
async def test_empty_model_list_is_configuration_error():
    with pytest.raises(ConfigurationError):
        await invoke_with_fallback([], ScriptedModels({}))

"""Error taxonomy shared by the analysis pipeline, the API, and the CLI."""

from __future__ import annotations

from typing import Sequence

_TRANSIENT_MARKERS: tuple[str, ...] = (
    "overloaded",
    "503",
    "429",
    "rate limit",
    "unavailable",
    "resource_exhausted",
)

OVERLOADED_MESSAGE = (
    "The AI provider is currently experiencing high traffic. "
    "Please try again in a few moments."
)
INVALID_CREDENTIAL_MESSAGE = "Invalid API key. Please check your API key configuration."
MALFORMED_RESPONSE_MESSAGE = "Failed to parse AI response. Please try again."
UNKNOWN_FAILURE_MESSAGE = "Failed to analyze the decision. Please try again."


class AnalysisError(Exception):
    """Base class for failures that end up in front of a user."""

    category = "unknown"
    status_code = 500
    default_message = UNKNOWN_FAILURE_MESSAGE

    def __init__(self, message: str | None = None, *, details: str | None = None) -> None:
        self.user_message = message or self.default_message
        self.details = details
        super().__init__(self.user_message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.user_message} ({self.details})"
        return self.user_message


class InputValidationError(AnalysisError):
    """Raised before any network activity when the request text is unusable."""

    category = "invalid_input"
    status_code = 400
    default_message = "Text input is required"


class ConfigurationError(AnalysisError):
    """Raised when provider credentials or model lists are missing."""

    category = "configuration"
    status_code = 500
    default_message = "The analysis provider is not configured."


class TransientProviderError(AnalysisError):
    """The provider is overloaded or rate limiting; retrying may succeed."""

    category = "provider_overloaded"
    status_code = 503
    default_message = OVERLOADED_MESSAGE


class ProviderRequestError(AnalysisError):
    """The provider rejected the request and retrying will not help."""

    category = "unknown"
    status_code = 500


class InvalidCredentialError(ProviderRequestError):
    """The provider refused the configured API key."""

    category = "invalid_credential"
    default_message = INVALID_CREDENTIAL_MESSAGE


class MalformedResponseError(AnalysisError):
    """The provider answered, but not with a usable analysis."""

    category = "malformed_response"
    status_code = 502
    default_message = MALFORMED_RESPONSE_MESSAGE


class ModelsExhaustedError(AnalysisError):
    """Every configured model failed with a recoverable error."""

    def __init__(self, models: Sequence[str], last_error: BaseException) -> None:
        self.models = tuple(models)
        self.last_error = last_error
        self.category = categorize(last_error)
        self.status_code = _STATUS_BY_CATEGORY.get(self.category, 500)
        super().__init__(
            _MESSAGE_BY_CATEGORY.get(self.category, UNKNOWN_FAILURE_MESSAGE),
            details=f"Tried {', '.join(self.models)}; last error: {last_error}",
        )


class SubmissionInProgressError(RuntimeError):
    """Raised when a second analysis is submitted while one is outstanding."""


_MESSAGE_BY_CATEGORY = {
    "invalid_credential": INVALID_CREDENTIAL_MESSAGE,
    "provider_overloaded": OVERLOADED_MESSAGE,
    "malformed_response": MALFORMED_RESPONSE_MESSAGE,
}
_STATUS_BY_CATEGORY = {
    "invalid_credential": 500,
    "provider_overloaded": 503,
    "malformed_response": 502,
}


def is_transient_error(exc: BaseException) -> bool:
    """Return True when ``exc`` signals overload, rate limiting or a slow reply."""
    if isinstance(exc, TransientProviderError):
        return True
    if isinstance(exc, AnalysisError):
        return False
    if isinstance(exc, TimeoutError):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in _TRANSIENT_MARKERS)


def can_fall_back(exc: BaseException) -> bool:
    """Return True when the next model should be tried after ``exc``."""
    return is_transient_error(exc) or isinstance(exc, MalformedResponseError)


def categorize(exc: BaseException) -> str:
    """Map any exception onto a user-facing failure category."""
    if isinstance(exc, AnalysisError):
        return exc.category
    if is_transient_error(exc):
        return "provider_overloaded"
    message = str(exc).lower()
    if "api key" in message or "api_key" in message:
        return "invalid_credential"
    if "json" in message:
        return "malformed_response"
    return "unknown"


__all__ = [
    "AnalysisError",
    "ConfigurationError",
    "InputValidationError",
    "InvalidCredentialError",
    "MalformedResponseError",
    "ModelsExhaustedError",
    "ProviderRequestError",
    "SubmissionInProgressError",
    "TransientProviderError",
    "can_fall_back",
    "categorize",
    "is_transient_error",
]

"""UI-facing state holder around a single analysis submission."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol

from relive.core.errors import AnalysisError, SubmissionInProgressError
from relive.core.logging import preview
from relive.schemas import AnalysisResult, DiagnosticResponse
from relive.utils.retry import Sleep

logger = logging.getLogger(__name__)

DASHBOARD_ROUTE = "/dashboard"

Navigate = Callable[[str, dict[str, Any]], Optional[Awaitable[None]]]


class Analyzer(Protocol):
    async def analyze(self, text: str) -> AnalysisResult:
        ...

    async def check_connection(self) -> DiagnosticResponse:
        ...


class SessionState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notification:
    """Toast-style message shown to the user."""

    title: str
    description: str
    destructive: bool = False


class AnalysisSession:
    """Track loading, result, and error state for one user's analyses.

    Only one analysis may be outstanding at a time. After a success the
    session waits ``redirect_delay`` seconds and then calls
    ``navigate("/dashboard", {"analysisResult": result})``; the result travels
    only as navigation state.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        *,
        navigate: Navigate,
        redirect_delay: float = 1.5,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._analyzer = analyzer
        self._navigate = navigate
        self._redirect_delay = redirect_delay
        self._sleep = sleep
        self._pending: asyncio.Future[AnalysisResult] | None = None
        self._redirect: asyncio.Task[None] | None = None
        self.state = SessionState.IDLE
        self.result: AnalysisResult | None = None
        self.error_message: str | None = None
        self.notifications: list[Notification] = []

    @property
    def is_busy(self) -> bool:
        return self.state is SessionState.LOADING

    @property
    def redirect_task(self) -> asyncio.Task[None] | None:
        return self._redirect

    async def submit(self, text: str | None) -> AnalysisResult | None:
        """Run one analysis and update the session state with its outcome."""
        if not text or not text.strip():
            return None
        if self.is_busy:
            raise SubmissionInProgressError("An analysis is already in progress.")

        self._cancel_redirect()
        self.state = SessionState.LOADING
        self.result = None
        self.error_message = None
        logger.info("Submitting analysis for text: %s", preview(text))

        self._pending = asyncio.ensure_future(self._analyzer.analyze(text))
        try:
            result = await self._pending
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                self.state = SessionState.IDLE
                raise
            logger.info("Analysis cancelled before completion.")
            self.state = SessionState.IDLE
            return None
        except Exception as exc:
            message = _describe(exc)
            logger.error("Analysis failed: %s", exc)
            self.error_message = message
            self.state = SessionState.ERROR
            self.notifications.append(
                Notification(
                    title="Analysis Failed",
                    description=f"{message}. Try testing the API connection first.",
                    destructive=True,
                )
            )
            return None
        finally:
            self._pending = None

        self.result = result
        self.state = SessionState.RESULT
        self.notifications.append(
            Notification(
                title="Analysis Complete",
                description="Redirecting to your personalized dashboard...",
            )
        )
        self._redirect = asyncio.create_task(self._redirect_later(result))
        return result

    async def test_connection(self) -> DiagnosticResponse:
        """Run the provider diagnostic and record a notification for it."""
        if self.is_busy:
            raise SubmissionInProgressError("An analysis is already in progress.")
        previous = self.state
        self.state = SessionState.LOADING
        try:
            outcome = await self._analyzer.check_connection()
        except Exception as exc:
            logger.error("Connection test failed: %s", exc)
            outcome = DiagnosticResponse(success=False, error=_describe(exc))
        finally:
            self.state = previous

        if outcome.success:
            self.notifications.append(
                Notification(
                    title="API Test Successful",
                    description="API connection is working properly!",
                )
            )
        else:
            self.notifications.append(
                Notification(
                    title="API Test Failed",
                    description=outcome.error or "Unknown error occurred",
                    destructive=True,
                )
            )
        return outcome

    def cancel(self) -> None:
        """Abandon the in-flight analysis and any scheduled navigation."""
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._cancel_redirect()

    def reset(self) -> None:
        """Drop the current result, as when the user starts a new analysis."""
        self.cancel()
        self.state = SessionState.IDLE
        self.result = None
        self.error_message = None

    async def _redirect_later(self, result: AnalysisResult) -> None:
        await self._sleep(self._redirect_delay)
        outcome = self._navigate(DASHBOARD_ROUTE, {"analysisResult": result})
        if outcome is not None:
            await outcome

    def _cancel_redirect(self) -> None:
        if self._redirect is not None and not self._redirect.done():
            self._redirect.cancel()
        self._redirect = None


def _describe(exc: BaseException) -> str:
    if isinstance(exc, AnalysisError):
        return exc.user_message
    return str(exc) or "Failed to analyze decision. Please try again."


__all__ = [
    "AnalysisSession",
    "Analyzer",
    "DASHBOARD_ROUTE",
    "Notification",
    "SessionState",
]

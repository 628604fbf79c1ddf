"""Retry helper providing exponential backoff for transient provider failures."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from relive.core.errors import is_transient_error

T = TypeVar("T")

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class RetryConfig:
    def __init__(self, *, attempts: int = 3, base_delay_seconds: float = 1.0) -> None:
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.attempts = attempts
        self.base_delay_seconds = base_delay_seconds

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the zero-based ``attempt`` failed."""
        return self.base_delay_seconds * (2**attempt)


@dataclass(slots=True)
class RetryAttempt:
    """Bookkeeping for the attempt currently in flight."""

    index: int
    planned_delay: float = 0.0
    last_error: BaseException | None = None


async def retry_with_backoff(
    work: Callable[[], Awaitable[T]],
    *,
    retry_config: RetryConfig | None = None,
    is_transient: Callable[[BaseException], bool] = is_transient_error,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Await ``work`` until it succeeds, fails terminally, or attempts run out.

    Only failures accepted by ``is_transient`` are retried; they wait
    ``base * 2**attempt`` seconds first. Anything else propagates at once, and
    the last transient error propagates after the final attempt.
    """
    config = retry_config or RetryConfig()
    state = RetryAttempt(index=0)

    while True:
        try:
            return await work()
        except Exception as exc:
            state.last_error = exc
            if not is_transient(exc) or state.index + 1 >= config.attempts:
                raise
            state.planned_delay = config.delay_for(state.index)
            logger.warning(
                "Transient failure (%s). Retrying in %.2fs (attempt %d/%d).",
                exc,
                state.planned_delay,
                state.index + 1,
                config.attempts,
            )
            await sleep(state.planned_delay)
            state.index += 1


__all__ = ["RetryAttempt", "RetryConfig", "retry_with_backoff"]

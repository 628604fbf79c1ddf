"""Try a prioritized list of models until one produces a usable answer."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence, TypeVar

from relive.core.errors import ConfigurationError, ModelsExhaustedError, can_fall_back
from relive.utils.retry import RetryConfig, Sleep, retry_with_backoff

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def invoke_with_fallback(
    models: Sequence[str],
    work: Callable[[str], Awaitable[T]],
    *,
    retry_config: RetryConfig | None = None,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Run ``work(model)`` for each model in order, returning the first success.

    Each model gets its own backoff budget. A transient or malformed-response
    failure moves on to the next model; any other failure is raised as-is and
    no later model is tried. When every model fails, ``ModelsExhaustedError``
    wraps the last failure.
    """
    model_sequence = list(models)
    if not model_sequence:
        raise ConfigurationError(details="No model identifiers configured.")

    last_error: Exception | None = None
    for index, model_name in enumerate(model_sequence):
        logger.info(
            "Trying model '%s' (%d/%d).", model_name, index + 1, len(model_sequence)
        )
        try:
            result = await retry_with_backoff(
                lambda model=model_name: work(model),
                retry_config=retry_config,
                sleep=sleep,
            )
        except Exception as exc:
            last_error = exc
            if not can_fall_back(exc):
                logger.error("Model '%s' failed terminally: %s", model_name, exc)
                raise
            logger.warning("Model '%s' failed (%s); trying fallback.", model_name, exc)
            continue
        logger.info("Successfully analyzed with model '%s'.", model_name)
        return result

    assert last_error is not None
    logger.error("All models failed. Last error: %s", last_error)
    raise ModelsExhaustedError(model_sequence, last_error) from last_error


__all__ = ["invoke_with_fallback"]

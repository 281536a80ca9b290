"""Bounded retry for navigation.

Navigation to third-party marketing sites fails transiently (timeouts,
reset connections, bot walls). The whole navigate-and-clear-challenge
step is re-run a fixed number of times with a fixed delay.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from siteaudit import config

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_async(
    action_fn: Callable[[], Awaitable[T]],
    attempts: int | None = None,
    delay_ms: int | None = None,
    label: str = "navigation",
) -> T:
    """Run ``action_fn`` until it returns, at most ``attempts`` times.

    Any exception triggers another attempt after ``delay_ms``. When every
    attempt fails the last attempt's exception is re-raised.
    """
    attempts = config.NAV_ATTEMPTS if attempts is None else attempts
    delay_ms = config.NAV_RETRY_DELAY_MS if delay_ms is None else delay_ms
    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    for attempt in range(1, attempts + 1):
        try:
            return await action_fn()
        except Exception as e:
            if attempt == attempts:
                logger.error("[ERROR] %s failed after %d attempts: %s", label, attempts, str(e)[:300])
                raise
            logger.warning("[RETRY] %s attempt %d/%d failed: %s", label, attempt, attempts, str(e)[:300])
            await asyncio.sleep(delay_ms / 1000)

    raise AssertionError("unreachable")

"""
Retry wrapper for Telegram Bot API calls that get throttled (HTTP 429).
"""

import asyncio
from datetime import timedelta
from typing import Awaitable, Callable, Optional, TypeVar

from telegram.error import RetryAfter

import config
from utils.logging_config import get_logger

logger = get_logger('RateLimit')

T = TypeVar('T')


def retry_after_seconds(error: RetryAfter, default_timeout: float) -> float:
    """Cooldown mandated by a RetryAfter error, in seconds."""
    hint = getattr(error, 'retry_after', None)
    if hint is None:
        return default_timeout
    if isinstance(hint, timedelta):
        return hint.total_seconds()
    return float(hint)


class RateLimitedCaller:
    """
    Re-invokes an operation after the cooldown Telegram asks for.

    Only RetryAfter is caught; any other exception propagates on the first
    attempt. With ``max_attempts=None`` (the default) a throttled operation is
    retried forever. The wait is an ``asyncio.sleep``, so other coroutines keep
    running while one operation is cooling down.
    """

    def __init__(self, default_timeout: Optional[float] = None,
                 max_attempts: Optional[int] = None,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.default_timeout = config.RATE_LIMIT_DEFAULT_TIMEOUT if default_timeout is None else default_timeout
        self.max_attempts = max_attempts
        self._sleep = sleep

    async def invoke(self, operation: Callable[[], Awaitable[T]]) -> T:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await operation()
            except RetryAfter as e:
                if self.max_attempts is not None and attempt >= self.max_attempts:
                    raise
                delay = retry_after_seconds(e, self.default_timeout)
                logger.warning(f"Rate limited by Telegram, retrying in {delay:g}s (attempt {attempt})")
                await self._sleep(delay)

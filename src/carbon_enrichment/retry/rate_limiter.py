"""
Minimum-spacing rate limiter for outbound model calls.

One limiter belongs to one orchestrator: limiters of independently
constructed orchestrators do not coordinate.
"""

import asyncio
import time
from typing import Awaitable, Callable

import structlog

logger = structlog.get_logger(__name__)


class RateLimiter:
    """
    Enforce min_interval seconds between consecutive calls to wait().
    
    The lock serializes coroutines sharing the limiter, so the
    read-sleep-stamp sequence on last_request_time is never interleaved.
    """
    
    def __init__(
        self,
        min_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval = min_interval
        self.last_request_time: float | None = None
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
    
    async def wait(self) -> float:
        """
        Suspend until the next call is allowed, then record it.
        
        Returns:
            Seconds actually waited (0.0 when no wait was needed)
        """
        async with self._lock:
            waited = 0.0
            if self.last_request_time is not None:
                elapsed = self._clock() - self.last_request_time
                if elapsed < self.min_interval:
                    waited = self.min_interval - elapsed
                    logger.debug("Rate limiter wait", wait_seconds=round(waited, 3))
                    await self._sleep(waited)
            self.last_request_time = self._clock()
            return waited

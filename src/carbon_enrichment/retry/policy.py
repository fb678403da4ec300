"""
Retry policy with bounded exponential backoff.

Wraps one attempt (rate-limit wait + generate + parse) for a single model:

    delay(attempt) = min(initial_delay * 2 ** attempt, max_delay)

With the defaults (1s initial, 5s cap, 3 retries) the waits are 1s, 2s, 4s.
No jitter. RateLimitError is never retried.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

import structlog

from carbon_enrichment.exceptions import EnrichmentError
from carbon_enrichment.llm.exceptions import RateLimitError
from carbon_enrichment.monitoring.metrics import retries_total

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


class RetryPolicy:
    """
    Retry an async operation up to max_retries additional times.
    
    Attributes:
        max_retries: Retries after the first attempt (total attempts = max_retries + 1)
        initial_delay: Backoff before the first retry, in seconds
        max_delay: Upper bound for any single backoff, in seconds
    """
    
    def __init__(
        self,
        max_retries: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 5.0,
        sleep: SleepFunc = asyncio.sleep,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self._sleep = sleep
    
    def backoff_delay(self, attempt: int) -> float:
        """Delay in seconds before retry number attempt + 1 (attempt is 0-indexed)."""
        return min(self.initial_delay * (2 ** attempt), self.max_delay)
    
    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        model: str | None = None,
    ) -> T:
        """
        Run operation, retrying retryable enrichment errors with backoff.
        
        Args:
            operation: Zero-argument coroutine factory, called once per attempt
            model: Model name, for logging only
        
        Returns:
            The operation's result
        
        Raises:
            RateLimitError: Immediately, on first occurrence
            EnrichmentError: The last error once the retry budget is spent
        """
        attempt = 0
        while True:
            try:
                return await operation()
            except RateLimitError:
                raise
            except EnrichmentError as e:
                if attempt >= self.max_retries:
                    logger.warning(
                        "Retry budget exhausted",
                        model=model,
                        attempts=attempt + 1,
                        error_type=type(e).__name__,
                        error=e.message,
                    )
                    raise
                
                delay = self.backoff_delay(attempt)
                retries_total.labels(error_type=type(e).__name__).inc()
                logger.info(
                    "Retrying after backoff",
                    model=model,
                    retry=attempt + 1,
                    max_retries=self.max_retries,
                    delay_seconds=delay,
                    error_type=type(e).__name__,
                    error=e.message,
                )
                await self._sleep(delay)
                attempt += 1

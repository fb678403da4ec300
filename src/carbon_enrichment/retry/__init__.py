"""
Retry and throttling primitives for model calls.

Main Components:
    - RetryPolicy: bounded exponential backoff, never retries RateLimitError
    - RateLimiter: minimum spacing between outbound calls
"""

from carbon_enrichment.retry.policy import RetryPolicy
from carbon_enrichment.retry.rate_limiter import RateLimiter

__all__ = [
    "RetryPolicy",
    "RateLimiter",
]

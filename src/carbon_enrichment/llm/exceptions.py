"""
Custom exceptions for the LLM client layer.

These exceptions let the retry policy and the fallback orchestrator
distinguish between failure modes:

- TransportError: retried locally, then the next model is tried
- RateLimitError: never retried, aborts the whole fallback chain
"""

from carbon_enrichment.exceptions import EnrichmentError


class TransportError(EnrichmentError):
    """
    Raised when a generation call fails below the response-parsing level.
    
    Includes network errors, non-2xx responses, provider-side errors and
    responses that carry no generated text.
    """
    pass


class ModelTimeoutError(TransportError):
    """
    Raised when the provider does not answer within the client timeout.
    """
    pass


class ModelNotAvailableError(TransportError):
    """
    Raised when the requested model does not exist for this API key (404).
    """
    pass


class RateLimitError(EnrichmentError):
    """
    Raised when the provider throttles the request (HTTP 429 / RESOURCE_EXHAUSTED).
    
    Not retried and not subject to fallback: throttling applies to the API
    key, so the orchestrator surfaces it to the caller immediately.
    """
    
    def __init__(
        self,
        message: str = "API rate limit exceeded",
        details: dict | None = None,
        retry_after: float | None = None,
    ):
        super().__init__(message, details)
        self.retry_after = retry_after

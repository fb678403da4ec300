"""
Root exceptions for the Carbon Enrichment Service.

Every failure the enrichment core can surface derives from EnrichmentError,
so the retry policy and the orchestrator can branch on the concrete subclass
(retry, abort the fallback chain, or move on to the next model).
"""

from typing import Any


class EnrichmentError(Exception):
    """
    Base exception for all enrichment errors.
    
    Carries a human-readable message plus structured details for logging.
    """
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MissingApiKeyError(EnrichmentError):
    """
    Raised when no API key is available for the model provider.
    
    This is a configuration error: it is never retried.
    """
    
    def __init__(self, message: str = "Gemini API key not configured", key: str | None = None):
        super().__init__(message, {"key": key} if key else None)

"""
Validation-specific exceptions for the response parser.

All of them are ResponseParsingError subclasses. The retry policy treats
them as retryable, since a fresh generation may yield valid JSON.
"""

from typing import Any

from carbon_enrichment.exceptions import EnrichmentError


class ResponseParsingError(EnrichmentError):
    """
    Base exception for malformed or invalid model output.
    """
    pass


class JSONParseError(ResponseParsingError):
    """
    Stage 1: the response text is not a JSON object.
    """
    
    def __init__(self, message: str, raw_content: str | None = None, parse_error: str | None = None):
        """
        Initialize JSON parse error.
        
        Args:
            message: Error description
            raw_content: Malformed content (first 500 chars kept for debugging)
            parse_error: Original json.JSONDecodeError message
        """
        details: dict[str, Any] = {}
        if raw_content:
            details["content_snippet"] = raw_content[:500]
        if parse_error:
            details["parse_error"] = parse_error
        
        super().__init__(message, details)


class SchemaValidationError(ResponseParsingError):
    """
    Stages 2-3: the parsed object does not describe a valid enrichment.
    
    Raised for missing keys, wrong types, a non-positive co2Value or an
    empty title/description.
    """
    
    def __init__(self, message: str, validation_errors: list[str] | None = None):
        details: dict[str, Any] = {}
        if validation_errors:
            details["validation_errors"] = validation_errors
        
        super().__init__(message, details)

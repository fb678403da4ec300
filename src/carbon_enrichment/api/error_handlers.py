"""
FastAPI exception handlers for structured error responses.

Maps enrichment exceptions to appropriate HTTP status codes and formats.
Handlers are resolved along the exception's MRO, so subclasses without an
entry (JSONParseError, ModelNotAvailableError, ...) use their parent's.
"""

from datetime import datetime

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

from carbon_enrichment.enrichment.exceptions import OrchestrationExhaustedError
from carbon_enrichment.exceptions import MissingApiKeyError
from carbon_enrichment.llm.exceptions import (
    ModelTimeoutError,
    RateLimitError,
    TransportError,
)
from carbon_enrichment.validation.exceptions import ResponseParsingError

logger = structlog.get_logger(__name__)


def _error_body(error: str, message: str, **extra) -> dict:
    return {
        "error": error,
        "message": message,
        **extra,
        "timestamp": datetime.utcnow().isoformat(),
    }


async def missing_api_key_handler(request: Request, exc: MissingApiKeyError) -> JSONResponse:
    """
    Handle missing credentials.
    
    Maps to 401 Unauthorized.
    """
    logger.warning("Missing API key")
    
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=_error_body("missing_api_key", exc.message),
    )


async def rate_limit_handler(request: Request, exc: RateLimitError) -> JSONResponse:
    """
    Handle provider throttling.
    
    Maps to 429 Too Many Requests, forwarding Retry-After when known.
    """
    logger.warning("Rate limited by provider", retry_after=exc.retry_after)
    
    headers = {}
    if exc.retry_after is not None:
        headers["Retry-After"] = str(int(exc.retry_after))
    
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=_error_body("rate_limited", exc.message, retry_after=exc.retry_after),
        headers=headers,
    )


async def response_parsing_handler(request: Request, exc: ResponseParsingError) -> JSONResponse:
    """
    Handle invalid model output that escaped the orchestrator.
    
    Maps to 422 Unprocessable Entity.
    """
    logger.warning(
        "Response parsing error",
        error_type=type(exc).__name__,
        details=exc.details,
    )
    
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("response_parsing_failed", exc.message, details=exc.details),
    )


async def exhausted_handler(request: Request, exc: OrchestrationExhaustedError) -> JSONResponse:
    """
    Handle exhaustion of every candidate model.
    
    Maps to 503 Service Unavailable (temporary failure).
    """
    logger.error(
        "All candidate models failed",
        attempted_models=exc.attempted_models,
        last_error=str(exc.last_error) if exc.last_error else None,
    )
    
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body(
            "all_models_failed",
            exc.message,
            attempted_models=exc.attempted_models,
            last_error_type=exc.details.get("last_error_type"),
        ),
    )


async def model_timeout_handler(request: Request, exc: ModelTimeoutError) -> JSONResponse:
    """
    Handle provider timeouts.
    
    Maps to 504 Gateway Timeout.
    """
    logger.error("Model timeout", error=exc.message)
    
    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content=_error_body("model_timeout", exc.message),
    )


async def transport_error_handler(request: Request, exc: TransportError) -> JSONResponse:
    """
    Handle provider transport failures.
    
    Maps to 502 Bad Gateway.
    """
    logger.error("Model transport error", error=exc.message, details=exc.details)
    
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=_error_body("model_transport_failed", exc.message),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.
    
    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "An unexpected error occurred"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    MissingApiKeyError: missing_api_key_handler,
    RateLimitError: rate_limit_handler,
    ResponseParsingError: response_parsing_handler,
    OrchestrationExhaustedError: exhausted_handler,
    ModelTimeoutError: model_timeout_handler,
    TransportError: transport_error_handler,
    Exception: generic_error_handler,
}

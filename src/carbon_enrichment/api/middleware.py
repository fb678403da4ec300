"""Request tracing middleware."""

import time
import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

# Polled endpoints, logged at debug only
QUIET_PATHS = frozenset({"/health", "/metrics"})


def _request_id(request: Request) -> str:
    """Reuse the caller's request id when it sent one, otherwise mint a UUID4."""
    incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if incoming:
        return incoming[:MAX_REQUEST_ID_LENGTH]
    return str(uuid.uuid4())


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Bind a request id to every log line of a request and echo it back.
    
    The id is available to handlers through structlog contextvars and is
    returned in the X-Request-ID response header.
    """
    
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = _request_id(request)
        path = request.url.path
        log = logger.debug if path in QUIET_PATHS else logger.info
        
        structlog.contextvars.bind_contextvars(request_id=request_id, method=request.method, path=path)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request failed", duration_ms=round((time.perf_counter() - start) * 1000, 2))
            raise
        else:
            log(
                "Request handled",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()

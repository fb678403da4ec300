"""
FastAPI application entry point for the Carbon Enrichment Service.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from carbon_enrichment.api.dependencies import get_registry
from carbon_enrichment.api.error_handlers import EXCEPTION_HANDLERS
from carbon_enrichment.api.middleware import RequestTracingMiddleware
from carbon_enrichment.api.routes import router
from carbon_enrichment.config import settings
from carbon_enrichment.logging_config import configure_logging

# Configure structured logging before the app is built
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Product CO2 footprint enrichment with multi-model LLM fallback",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

# The browser extension calls from a chrome-extension:// origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["enrichment"])


@app.on_event("startup")
async def startup():
    """Application startup."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        gemini_base_url=settings.GEMINI_BASE_URL,
        models=settings.GEMINI_MODELS,
        credential_backend=settings.CREDENTIAL_BACKEND,
    )


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - close provider connections."""
    logger.info("Application shutdown")
    await get_registry().close()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "carbon_enrichment.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Only for development
    )

"""
FastAPI API routes and endpoints.

- routes.py: POST /enrich, GET /models, GET /health
- dependencies.py: Dependency injection for the registry and credentials
- models.py: API-specific response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request tracing
"""

from carbon_enrichment.api import dependencies, error_handlers, models
from carbon_enrichment.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]

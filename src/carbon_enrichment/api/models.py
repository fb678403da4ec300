"""
API-specific request and response models for FastAPI endpoints.

These models wrap the core domain models (ProductInput, EnrichmentResult)
with API-specific metadata and status information.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from carbon_enrichment.models.enrichment import EnrichmentResult
from carbon_enrichment.models.llm_models import GenerationConfig


class EnrichResponse(BaseModel):
    """Response for the enrichment endpoint."""
    
    status: str = Field(
        description="Request status",
        examples=["success"]
    )
    result: EnrichmentResult = Field(
        description="Validated enrichment (camelCase keys)"
    )
    duration_ms: int = Field(
        ge=0,
        description="Server-side processing time in milliseconds"
    )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(
        description="Overall health status",
        examples=["healthy", "degraded"]
    )
    version: str = Field(
        description="Service version"
    )
    services: dict[str, str] = Field(
        description="Status of individual dependencies",
        examples=[{"gemini": "healthy"}]
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Health check timestamp (UTC)"
    )


class ModelsResponse(BaseModel):
    """Response for the models endpoint."""
    
    models: list[str] = Field(
        description="Candidate models in fallback order"
    )
    generation_config: GenerationConfig = Field(
        description="Sampling parameters sent with every request"
    )

"""
Pydantic data models for the Carbon Enrichment Service.

Includes:
- Input model (ProductInput)
- Output models (EnrichmentResult, CacheEntry)
- LLM models (GenerationConfig, LLMGenerationResponse)
"""

from carbon_enrichment.models.enrichment import CacheEntry, EnrichmentResult
from carbon_enrichment.models.llm_models import GenerationConfig, LLMGenerationResponse
from carbon_enrichment.models.product import ProductInput

__all__ = [
    # Input
    "ProductInput",
    # Output
    "EnrichmentResult",
    "CacheEntry",
    # LLM models
    "GenerationConfig",
    "LLMGenerationResponse",
]

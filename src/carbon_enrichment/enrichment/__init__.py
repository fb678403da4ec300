"""
Enrichment core: fallback orchestration across candidate models.

Usage:
    >>> from carbon_enrichment.enrichment import OrchestratorRegistry, enrich
    >>> registry = OrchestratorRegistry.from_settings(settings)
    >>> result = await enrich(product, api_key, registry)
"""

from carbon_enrichment.enrichment.exceptions import OrchestrationExhaustedError
from carbon_enrichment.enrichment.orchestrator import FallbackOrchestrator
from carbon_enrichment.enrichment.registry import OrchestratorRegistry, enrich

__all__ = [
    "FallbackOrchestrator",
    "OrchestratorRegistry",
    "OrchestrationExhaustedError",
    "enrich",
]

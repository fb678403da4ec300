"""
Per-API-key orchestrator registry and the top-level enrich() operation.

An orchestrator holds the cache and rate-limiter clock for one API key, so
it must outlive a single request. The registry creates one lazily per key
and hands the same instance back on every later request.
"""

import hashlib
from collections import OrderedDict
from typing import Callable, Optional

import structlog

from carbon_enrichment.config import Settings
from carbon_enrichment.config import settings as default_settings
from carbon_enrichment.enrichment.orchestrator import FallbackOrchestrator
from carbon_enrichment.exceptions import MissingApiKeyError
from carbon_enrichment.models.enrichment import EnrichmentResult
from carbon_enrichment.models.product import ProductInput

logger = structlog.get_logger(__name__)

OrchestratorFactory = Callable[[str], FallbackOrchestrator]

DEFAULT_MAX_ORCHESTRATORS = 100


def _key_id(api_key: str) -> str:
    """Short, non-reversible identifier of a key for logs."""
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()[:8]


class OrchestratorRegistry:
    """
    API key -> FallbackOrchestrator, bounded.
    
    Orchestrators of different keys share nothing. Once max_orchestrators
    keys are held, registering a new key closes and drops the least
    recently used one (its cache and limiter state are lost).
    """
    
    def __init__(self, factory: OrchestratorFactory, max_orchestrators: int = DEFAULT_MAX_ORCHESTRATORS):
        if max_orchestrators < 1:
            raise ValueError("max_orchestrators must be >= 1")
        self._factory = factory
        self.max_orchestrators = max_orchestrators
        self._orchestrators: OrderedDict[str, FallbackOrchestrator] = OrderedDict()
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "OrchestratorRegistry":
        """Registry building Gemini-backed orchestrators from settings."""
        return cls(
            lambda api_key: FallbackOrchestrator.from_settings(api_key, settings),
            max_orchestrators=settings.MAX_ORCHESTRATORS,
        )
    
    async def get(self, api_key: Optional[str]) -> FallbackOrchestrator:
        """
        Return the orchestrator for api_key, creating it on first use.
        
        Raises:
            MissingApiKeyError: api_key is empty
        """
        if not api_key or not api_key.strip():
            raise MissingApiKeyError()
        api_key = api_key.strip()
        
        orchestrator = self._orchestrators.get(api_key)
        if orchestrator is not None:
            self._orchestrators.move_to_end(api_key)
            return orchestrator
        
        evicted = None
        if len(self._orchestrators) >= self.max_orchestrators:
            evicted_key, evicted = self._orchestrators.popitem(last=False)
            logger.info(
                "Evicting least recently used orchestrator",
                key_id=_key_id(evicted_key),
                max_orchestrators=self.max_orchestrators,
            )
        
        # Registered before awaiting close, so no other coroutine builds a second one
        orchestrator = self._factory(api_key)
        self._orchestrators[api_key] = orchestrator
        logger.info("Created orchestrator for API key", key_id=_key_id(api_key))
        
        if evicted is not None:
            await evicted.close()
        return orchestrator
    
    def __contains__(self, api_key: object) -> bool:
        return api_key in self._orchestrators
    
    def __len__(self) -> int:
        return len(self._orchestrators)
    
    async def close(self) -> None:
        """Close every orchestrator and forget them."""
        for orchestrator in self._orchestrators.values():
            await orchestrator.close()
        self._orchestrators.clear()


async def enrich(
    product: ProductInput,
    api_key: Optional[str],
    registry: Optional[OrchestratorRegistry] = None,
    settings: Optional[Settings] = None,
) -> EnrichmentResult:
    """
    Enrich one product with the orchestrator registered for api_key.
    
    Without a registry a throwaway orchestrator is built from settings and
    closed afterwards; its cache then only lives for this call.
    
    Raises:
        MissingApiKeyError: No API key supplied
        RateLimitError: Provider throttled the request
        OrchestrationExhaustedError: Every candidate model failed
    """
    if registry is not None:
        orchestrator = await registry.get(api_key)
        return await orchestrator.enrich(product)
    
    orchestrator = FallbackOrchestrator.from_settings(api_key or "", settings or default_settings)
    try:
        return await orchestrator.enrich(product)
    finally:
        await orchestrator.close()

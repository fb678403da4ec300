"""
Multi-model fallback orchestrator.

Single entry point for enriching a product:

    Idle -> CacheLookup -> hit: return
                        -> miss: build prompt once, then for each model:
                             RetryPolicy(RateLimiter.wait -> generate -> parse)
                               success          -> cache + return
                               RateLimitError   -> abort chain
                               other failure    -> next model
                           all failed -> OrchestrationExhaustedError

Usage:
    orchestrator = FallbackOrchestrator.from_settings(api_key, settings)
    result = await orchestrator.enrich(product)
"""

import time
from typing import Optional, Sequence

import httpx
import structlog

from carbon_enrichment.cache.fingerprint import product_fingerprint
from carbon_enrichment.cache.response_cache import ResponseCache
from carbon_enrichment.config import Settings
from carbon_enrichment.enrichment.exceptions import OrchestrationExhaustedError
from carbon_enrichment.exceptions import EnrichmentError, MissingApiKeyError
from carbon_enrichment.llm.base_client import BaseLLMClient
from carbon_enrichment.llm.exceptions import RateLimitError
from carbon_enrichment.llm.gemini_client import GeminiClient
from carbon_enrichment.llm.prompt_builder import PromptBuilder
from carbon_enrichment.models.enrichment import EnrichmentResult
from carbon_enrichment.models.llm_models import GenerationConfig
from carbon_enrichment.models.product import ProductInput
from carbon_enrichment.monitoring.metrics import (
    enrichment_requests_total,
    fallbacks_total,
    model_attempts_total,
)
from carbon_enrichment.retry.policy import RetryPolicy
from carbon_enrichment.retry.rate_limiter import RateLimiter
from carbon_enrichment.validation.parser import ResponseParser

logger = structlog.get_logger(__name__)


class FallbackOrchestrator:
    """
    Enrich products by trying candidate models in a fixed preference order.
    
    Owns its cache, rate limiter, retry policy, parser and prompt builder:
    one orchestrator per API key, reused across requests.
    
    Attributes:
        client: Model provider client
        models: Candidate models, most preferred first
        cache: Response cache keyed by product fingerprint
        rate_limiter: Spacing between outbound calls
        retry_policy: Per-model retry with backoff
    """
    
    def __init__(
        self,
        client: BaseLLMClient,
        models: Sequence[str],
        *,
        generation_config: Optional[GenerationConfig] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        parser: Optional[ResponseParser] = None,
        retry_policy: Optional[RetryPolicy] = None,
        rate_limiter: Optional[RateLimiter] = None,
        cache: Optional[ResponseCache] = None,
    ):
        if not models:
            raise ValueError("At least one candidate model is required")
        
        self.client = client
        self.models: tuple[str, ...] = tuple(models)
        self.generation_config = generation_config or GenerationConfig()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.parser = parser or ResponseParser()
        self.retry_policy = retry_policy or RetryPolicy()
        self.rate_limiter = rate_limiter or RateLimiter()
        self.cache = cache or ResponseCache()
        
        logger.info(
            "FallbackOrchestrator initialized",
            models=list(self.models),
            max_retries=self.retry_policy.max_retries,
            min_request_interval=self.rate_limiter.min_interval,
            cache_max_size=self.cache.max_size,
            cache_ttl=self.cache.ttl,
        )
    
    @classmethod
    def from_settings(
        cls,
        api_key: str,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "FallbackOrchestrator":
        """
        Build an orchestrator backed by GeminiClient from application settings.
        
        Args:
            api_key: Gemini API key
            settings: Application settings
            transport: Optional httpx transport (for tests)
        """
        if not api_key or not api_key.strip():
            raise MissingApiKeyError()
        
        client = GeminiClient(
            api_key=api_key.strip(),
            base_url=settings.GEMINI_BASE_URL,
            timeout=settings.GEMINI_TIMEOUT,
            transport=transport,
        )
        return cls(
            client,
            settings.GEMINI_MODELS,
            generation_config=GenerationConfig(
                temperature=settings.LLM_TEMPERATURE,
                top_p=settings.LLM_TOP_P,
                top_k=settings.LLM_TOP_K,
                max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS,
            ),
            retry_policy=RetryPolicy(
                max_retries=settings.MAX_RETRIES,
                initial_delay=settings.RETRY_INITIAL_DELAY,
                max_delay=settings.RETRY_MAX_DELAY,
            ),
            rate_limiter=RateLimiter(min_interval=settings.MIN_REQUEST_INTERVAL),
            cache=ResponseCache(
                max_size=settings.CACHE_MAX_SIZE,
                ttl=settings.CACHE_TTL_SECONDS,
            ),
        )
    
    async def enrich(self, product: ProductInput) -> EnrichmentResult:
        """
        Return a validated enrichment for the product.
        
        Args:
            product: Scraped product record
        
        Returns:
            EnrichmentResult tagged with the model that produced it
        
        Raises:
            RateLimitError: Provider throttled a call (chain aborted)
            OrchestrationExhaustedError: Every candidate model failed
        """
        fingerprint = product_fingerprint(product)
        cached = self.cache.get(fingerprint)
        if cached is not None:
            enrichment_requests_total.labels(outcome="cached").inc()
            logger.info("Using cached response", product_id=product.id, model=cached.model_used)
            return cached
        
        prompt = self.prompt_builder.build_prompt(product)
        start_time = time.time()
        attempted: list[str] = []
        last_error: Optional[EnrichmentError] = None
        
        for index, model in enumerate(self.models):
            attempted.append(model)
            has_next = index + 1 < len(self.models)
            
            async def attempt(model: str = model) -> EnrichmentResult:
                await self.rate_limiter.wait()
                response = await self.client.generate(model, prompt, self.generation_config)
                return self.parser.parse(response.content)
            
            try:
                result = await self.retry_policy.execute(attempt, model=model)
            except RateLimitError as e:
                model_attempts_total.labels(model=model, outcome="rate_limited").inc()
                enrichment_requests_total.labels(outcome="rate_limited").inc()
                logger.error(
                    "Rate limited, aborting fallback chain",
                    product_id=product.id,
                    model=model,
                    attempted_models=attempted,
                    retry_after=e.retry_after,
                )
                raise
            except EnrichmentError as e:
                last_error = e
                model_attempts_total.labels(model=model, outcome="failed").inc()
                if has_next:
                    fallbacks_total.labels(from_model=model).inc()
                logger.warning(
                    "Model failed, falling back" if has_next else "Last candidate model failed",
                    product_id=product.id,
                    model=model,
                    error_type=type(e).__name__,
                    error=e.message,
                )
                continue
            
            result = result.model_copy(update={"model_used": model})
            self.cache.set(fingerprint, result)
            model_attempts_total.labels(model=model, outcome="success").inc()
            enrichment_requests_total.labels(outcome="success").inc()
            logger.info(
                "Product enriched",
                product_id=product.id,
                model=model,
                co2_value=result.co2_value,
                models_tried=len(attempted),
                duration_ms=int((time.time() - start_time) * 1000),
            )
            return result
        
        enrichment_requests_total.labels(outcome="exhausted").inc()
        logger.error(
            "All models failed",
            product_id=product.id,
            attempted_models=attempted,
            final_error_type=type(last_error).__name__ if last_error else None,
        )
        raise OrchestrationExhaustedError(last_error, attempted) from last_error
    
    async def close(self) -> None:
        """Release the provider client's connections."""
        await self.client.close()

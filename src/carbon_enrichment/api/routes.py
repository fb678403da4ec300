"""
API routes for product enrichment.

- POST /enrich: enrich one scraped product
- GET /models: candidate models and generation config
- GET /health: service and provider health
"""

import time

import structlog
from fastapi import APIRouter, Depends, Response, status
from prometheus_client import Histogram

from carbon_enrichment.api.dependencies import get_api_key, get_registry, get_settings
from carbon_enrichment.api.models import EnrichResponse, HealthResponse, ModelsResponse
from carbon_enrichment.config import Settings
from carbon_enrichment.enrichment.registry import OrchestratorRegistry, enrich
from carbon_enrichment.llm.gemini_client import GeminiClient
from carbon_enrichment.models.llm_models import GenerationConfig
from carbon_enrichment.models.product import ProductInput

logger = structlog.get_logger(__name__)

enrich_duration_seconds = Histogram(
    "enrich_duration_seconds",
    "Enrichment request duration in seconds",
    ["endpoint"],
)

router = APIRouter()


@router.post(
    "/enrich",
    response_model=EnrichResponse,
    status_code=status.HTTP_200_OK,
    summary="Enrich a product with a CO2 estimate",
    description="""
    Estimate the full-lifecycle CO2 footprint of a product and produce a
    concise title and description.
    
    The Gemini API key is read from the X-Api-Key header, or from the
    configured credential store when the header is absent. Results are
    cached per API key for 24 hours.
    """,
    responses={
        200: {"description": "Enrichment completed"},
        401: {"description": "No API key available"},
        429: {"description": "Provider rate limit hit"},
        503: {"description": "All candidate models failed"},
    },
)
async def enrich_product(
    product: ProductInput,
    api_key: str = Depends(get_api_key),
    registry: OrchestratorRegistry = Depends(get_registry),
) -> EnrichResponse:
    """
    Enrich a single product.
    
    Args:
        product: Scraped product record
        api_key: Gemini API key (injected)
        registry: Orchestrator registry (injected)
    
    Returns:
        EnrichResponse with the validated result
    """
    start_time = time.time()
    logger.info(
        "Enrichment request received",
        product_id=product.id,
        details_count=len(product.details),
    )
    
    result = await enrich(product, api_key, registry=registry)
    
    duration = time.time() - start_time
    enrich_duration_seconds.labels(endpoint="enrich").observe(duration)
    
    return EnrichResponse(
        status="success",
        result=result,
        duration_ms=int(duration * 1000),
    )


@router.get(
    "/models",
    response_model=ModelsResponse,
    summary="Candidate models in fallback order",
)
async def list_models(settings: Settings = Depends(get_settings)) -> ModelsResponse:
    return ModelsResponse(
        models=list(settings.GEMINI_MODELS),
        generation_config=GenerationConfig(
            temperature=settings.LLM_TEMPERATURE,
            top_p=settings.LLM_TOP_P,
            top_k=settings.LLM_TOP_K,
            max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS,
        ),
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="""
    Check the health of the service and the Gemini API.
    
    Gemini is only probed when GEMINI_API_KEY is configured; otherwise
    its status is reported as "unknown".
    """,
    responses={
        200: {"description": "Service healthy"},
        503: {"description": "Gemini unreachable or key rejected"},
    },
)
async def health_check(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    services = {}
    overall = "healthy"
    
    if settings.GEMINI_API_KEY:
        async with GeminiClient(
            api_key=settings.GEMINI_API_KEY,
            base_url=settings.GEMINI_BASE_URL,
            timeout=settings.GEMINI_TIMEOUT,
        ) as client:
            healthy = await client.health_check()
        services["gemini"] = "healthy" if healthy else "unhealthy"
        if not healthy:
            overall = "degraded"
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        services["gemini"] = "unknown"
    
    return HealthResponse(
        status=overall,
        version=settings.APP_VERSION,
        services=services,
    )

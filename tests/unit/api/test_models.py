"""
Unit tests for API response models.
"""

from datetime import datetime

from carbon_enrichment.api.models import EnrichResponse, HealthResponse, ModelsResponse
from carbon_enrichment.models.enrichment import EnrichmentResult
from carbon_enrichment.models.llm_models import GenerationConfig


def test_enrich_response_serializes_result_by_alias():
    response = EnrichResponse(
        status="success",
        result=EnrichmentResult(
            co2_value=0.8,
            concise_title="Bamboo Toothbrush",
            concise_description="Biodegradable toothbrush",
            model_used="gemini-1.5-flash",
        ),
        duration_ms=120,
    )
    
    data = response.model_dump(by_alias=True)
    
    assert data["result"]["co2Value"] == 0.8
    assert data["result"]["model"] == "gemini-1.5-flash"
    assert data["duration_ms"] == 120


def test_health_response_timestamp_default():
    response = HealthResponse(status="healthy", version="0.1.0", services={"gemini": "unknown"})
    
    assert isinstance(response.timestamp, datetime)


def test_models_response():
    response = ModelsResponse(models=["a", "b"], generation_config=GenerationConfig())
    
    assert response.generation_config.max_output_tokens == 8192

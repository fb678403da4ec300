"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from carbon_enrichment.llm.base_client import BaseLLMClient
from carbon_enrichment.models.llm_models import LLMGenerationResponse


@pytest.fixture
def make_llm_response():
    """Factory for LLMGenerationResponse objects wrapping raw text."""
    def _make(content: str, model: str = "model-a") -> LLMGenerationResponse:
        return LLMGenerationResponse(
            content=content,
            model=model,
            finish_reason="STOP",
            prompt_tokens=400,
            completion_tokens=30,
            latency_ms=850,
        )
    
    return _make


@pytest.fixture
def mock_llm_client():
    """Mock BaseLLMClient; set generate.side_effect per test."""
    mock = AsyncMock(spec=BaseLLMClient)
    mock.health_check = AsyncMock(return_value=True)
    mock.close = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_async_redis():
    """Mock AsyncRedis client for unit tests (async)."""
    mock = AsyncMock()
    mock.set = AsyncMock(return_value=True)
    mock.get = AsyncMock(return_value=None)
    mock.aclose = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_prompt_builder():
    """Mock PromptBuilder returning a fixed prompt."""
    mock = Mock()
    mock.build_prompt = Mock(return_value="PROMPT")
    return mock

"""
LLM client abstraction and implementations.

Components:
- BaseLLMClient: Abstract base class for LLM clients
- GeminiClient: Implementation for the Gemini generateContent API
- PromptBuilder: Constructs the enrichment prompt from a ProductInput
- exceptions: Transport and rate-limit exceptions
"""

from carbon_enrichment.llm.base_client import BaseLLMClient
from carbon_enrichment.llm.exceptions import (
    ModelNotAvailableError,
    ModelTimeoutError,
    RateLimitError,
    TransportError,
)
from carbon_enrichment.llm.gemini_client import GeminiClient
from carbon_enrichment.llm.prompt_builder import PromptBuilder, filter_details

__all__ = [
    "BaseLLMClient",
    "GeminiClient",
    "PromptBuilder",
    "filter_details",
    "TransportError",
    "ModelTimeoutError",
    "ModelNotAvailableError",
    "RateLimitError",
]

"""
LLM-specific data models for the request/response cycle.

These models are internal to the LLM layer and describe the raw
communication with the model provider.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerationConfig(BaseModel):
    """
    Sampling parameters sent with every generation request.
    
    Static tuning constants: the defaults match the provider settings the
    enrichment prompt was written for.
    """
    model_config = ConfigDict(frozen=True)
    
    temperature: float = Field(default=1.0, ge=0.0, le=2.0, description="Sampling temperature")
    top_p: float = Field(default=0.95, ge=0.0, le=1.0, description="Nucleus sampling parameter")
    top_k: int = Field(default=40, ge=1, description="Top-k sampling parameter")
    max_output_tokens: int = Field(default=8192, ge=1, description="Maximum tokens to generate")
    
    def to_gemini(self) -> Dict[str, Any]:
        """Render as the camelCase generationConfig object of the Gemini API."""
        return {
            "temperature": self.temperature,
            "topP": self.top_p,
            "topK": self.top_k,
            "maxOutputTokens": self.max_output_tokens,
        }


class LLMGenerationResponse(BaseModel):
    """
    Raw response from one generation call plus metadata for logging.
    """
    model_config = ConfigDict(frozen=True)
    
    content: str = Field(..., description="Generated text (expected to be a JSON object)")
    model: str = Field(..., description="Model that was called")
    finish_reason: Optional[str] = Field(default=None, description="Provider finish reason (STOP, MAX_TOKENS, ...)")
    prompt_tokens: Optional[int] = Field(default=None, description="Tokens in prompt")
    completion_tokens: Optional[int] = Field(default=None, description="Tokens in completion")
    latency_ms: int = Field(..., ge=0, description="Generation latency in milliseconds")

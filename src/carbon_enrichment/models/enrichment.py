"""
Output data models for the enrichment core.

EnrichmentResult is the validated, typed result of one enrichment. It can
only be built with a strictly positive, finite CO2 value and non-empty
title/description. CacheEntry wraps a result with its insertion time.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EnrichmentResult(BaseModel):
    """
    Validated enrichment of one product.
    
    Serialized with the camelCase keys used by the extension
    (co2Value, conciseTitle, conciseDescription, model).
    """
    
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    
    co2_value: float = Field(
        ...,
        alias="co2Value",
        gt=0,
        allow_inf_nan=False,
        description="Estimated full-lifecycle CO2 footprint in kg"
    )
    concise_title: str = Field(
        ...,
        alias="conciseTitle",
        description="Short title (target <= 50 characters, not enforced)"
    )
    concise_description: str = Field(
        ...,
        alias="conciseDescription",
        description="Short description (target <= 100 characters, not enforced)"
    )
    model_used: Optional[str] = Field(
        default=None,
        alias="model",
        description="Model that produced the result"
    )
    
    @field_validator("concise_title", "concise_description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value


class CacheEntry(BaseModel):
    """Cached enrichment with its insertion time (monotonic seconds)."""
    
    model_config = ConfigDict(frozen=True)
    
    result: EnrichmentResult
    inserted_at: float = Field(..., description="Clock reading when the entry was stored")
    
    def is_fresh(self, now: float, ttl: float) -> bool:
        """Return True while the entry is younger than ttl seconds."""
        return now - self.inserted_at < ttl

"""
Input data model for the enrichment core.

ProductInput is the record produced by the page scraper: identity, title,
free-text description, a detail table (brand, material, weight, origin...)
and the bullet-pointed features. The core only reads it.
"""

from pydantic import BaseModel, ConfigDict, Field


class ProductInput(BaseModel):
    """
    Scraped product record submitted for enrichment.
    
    Extra fields sent by the scraper (link, timestamp, ...) are ignored.
    """
    
    model_config = ConfigDict(frozen=True, extra="ignore")
    
    id: str = Field(..., description="Product identifier (e.g., ASIN)")
    title: str = Field(..., description="Product title as shown on the page")
    description: str = Field(default="", description="Free-text product description")
    details: dict[str, str] = Field(
        default_factory=dict,
        description="Detail label -> value (brand, material, weight, dimensions, origin, ...)"
    )
    about: list[str] = Field(
        default_factory=list,
        description="Bullet-pointed feature strings"
    )

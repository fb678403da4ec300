"""
Carbon Enrichment Service.

Enriches scraped product records with:
- An estimated full-lifecycle CO2 footprint (kg)
- A concise title and description

Architecture: FastAPI surface + Gemini inference with multi-model fallback,
retry with backoff, rate limiting, response validation and an in-memory cache
"""

__version__ = "0.1.0"

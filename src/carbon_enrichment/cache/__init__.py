"""
In-memory response cache and product fingerprinting.
"""

from carbon_enrichment.cache.fingerprint import product_fingerprint
from carbon_enrichment.cache.response_cache import ResponseCache

__all__ = [
    "ResponseCache",
    "product_fingerprint",
]

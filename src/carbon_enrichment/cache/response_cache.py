"""
Bounded, time-expiring in-memory cache of enrichment results.

Eviction is FIFO by insertion order, not LRU: reading an entry does not
protect it from eviction. Entries older than the TTL are dropped lazily
on lookup. Nothing is persisted.
"""

import time
from collections import OrderedDict
from typing import Callable, Optional

import structlog

from carbon_enrichment.models.enrichment import CacheEntry, EnrichmentResult
from carbon_enrichment.monitoring.metrics import cache_lookups_total

logger = structlog.get_logger(__name__)

DEFAULT_MAX_SIZE = 100
DEFAULT_TTL_SECONDS = 60 * 60 * 24


class ResponseCache:
    """
    Fingerprint -> EnrichmentResult store.
    
    Attributes:
        max_size: Maximum number of entries
        ttl: Entry lifetime in seconds
    """
    
    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
    
    def get(self, fingerprint: str) -> Optional[EnrichmentResult]:
        """
        Return the cached result, or None if absent or expired.
        
        Expired entries are evicted.
        """
        entry = self._entries.get(fingerprint)
        if entry is None:
            cache_lookups_total.labels(result="miss").inc()
            return None
        
        if not entry.is_fresh(self._clock(), self.ttl):
            del self._entries[fingerprint]
            cache_lookups_total.labels(result="expired").inc()
            logger.debug("Cache entry expired", fingerprint=fingerprint)
            return None
        
        cache_lookups_total.labels(result="hit").inc()
        return entry.result
    
    def set(self, fingerprint: str, result: EnrichmentResult) -> None:
        """
        Store a result.
        
        Inserting a new key into a full cache first evicts the single
        oldest-inserted entry. Overwriting an existing key refreshes its
        timestamp but keeps its insertion position.
        """
        if fingerprint not in self._entries and len(self._entries) >= self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Cache full, evicted oldest entry", evicted=evicted, max_size=self.max_size)
        
        self._entries[fingerprint] = CacheEntry(result=result, inserted_at=self._clock())
    
    def clear(self) -> None:
        """Drop all entries."""
        self._entries.clear()
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __contains__(self, fingerprint: object) -> bool:
        # Does not check freshness or evict
        return fingerprint in self._entries

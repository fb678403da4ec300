"""
Unit tests for ResponseCache and product_fingerprint.
"""

import pytest

from carbon_enrichment.cache.fingerprint import product_fingerprint
from carbon_enrichment.cache.response_cache import ResponseCache
from carbon_enrichment.models.enrichment import EnrichmentResult


def make_result(value: float = 1.0) -> EnrichmentResult:
    return EnrichmentResult(
        co2_value=value,
        concise_title=f"Product {value}",
        concise_description="Description",
        model_used="model-a",
    )


class TestProductFingerprint:
    
    def test_format(self, create_product):
        product = create_product(
            id="B01",
            title="Mug",
            details={"material": "Ceramic", "origin": "Portugal"},
        )
        
        assert product_fingerprint(product) == "B01-Mug-Ceramic-Portugal"
    
    def test_no_details(self, create_product):
        product = create_product(id="B01", title="Mug", details={})
        
        assert product_fingerprint(product) == "B01-Mug-"
    
    def test_ignores_description_and_features(self, create_product):
        a = create_product(description="one", about=["x"])
        b = create_product(description="two", about=["y", "z"])
        
        assert product_fingerprint(a) == product_fingerprint(b)
    
    def test_different_ids_do_not_collide(self, create_product):
        assert product_fingerprint(create_product(id="a")) != product_fingerprint(create_product(id="b"))
    
    def test_detail_order_matters(self, create_product):
        a = create_product(details={"brand": "Acme", "material": "Steel"})
        b = create_product(details={"material": "Steel", "brand": "Acme"})
        
        assert product_fingerprint(a) != product_fingerprint(b)


class TestResponseCache:
    
    def test_miss(self, fake_clock):
        cache = ResponseCache(clock=fake_clock)
        
        assert cache.get("missing") is None
    
    def test_hit(self, fake_clock):
        cache = ResponseCache(clock=fake_clock)
        result = make_result()
        cache.set("k", result)
        
        assert cache.get("k") == result
        assert len(cache) == 1
    
    def test_hit_just_before_ttl(self, fake_clock):
        cache = ResponseCache(ttl=10, clock=fake_clock)
        cache.set("k", make_result())
        fake_clock.advance(9.999)
        
        assert cache.get("k") is not None
    
    def test_expired_at_ttl_and_evicted(self, fake_clock):
        cache = ResponseCache(ttl=10, clock=fake_clock)
        cache.set("k", make_result())
        fake_clock.advance(10)
        
        assert cache.get("k") is None
        assert "k" not in cache
        assert len(cache) == 0
    
    def test_fifo_eviction_when_full(self, fake_clock):
        cache = ResponseCache(max_size=3, clock=fake_clock)
        for key in ["a", "b", "c"]:
            cache.set(key, make_result())
        
        cache.set("d", make_result())
        
        assert len(cache) == 3
        assert "a" not in cache
        assert all(k in cache for k in ["b", "c", "d"])
    
    def test_reads_do_not_protect_from_eviction(self, fake_clock):
        cache = ResponseCache(max_size=2, clock=fake_clock)
        cache.set("a", make_result())
        cache.set("b", make_result())
        cache.get("a")
        
        cache.set("c", make_result())
        
        assert "a" not in cache
        assert "b" in cache
    
    def test_overwrite_does_not_evict(self, fake_clock):
        cache = ResponseCache(max_size=2, clock=fake_clock)
        cache.set("a", make_result(1.0))
        cache.set("b", make_result(2.0))
        
        cache.set("a", make_result(3.0))
        
        assert len(cache) == 2
        assert cache.get("a").co2_value == 3.0
        assert "b" in cache
    
    def test_overwrite_refreshes_timestamp(self, fake_clock):
        cache = ResponseCache(ttl=10, clock=fake_clock)
        cache.set("a", make_result())
        fake_clock.advance(8)
        cache.set("a", make_result())
        fake_clock.advance(8)
        
        assert cache.get("a") is not None
    
    def test_clear(self, fake_clock):
        cache = ResponseCache(clock=fake_clock)
        cache.set("a", make_result())
        cache.clear()
        
        assert len(cache) == 0
    
    def test_invalid_max_size(self):
        with pytest.raises(ValueError):
            ResponseCache(max_size=0)

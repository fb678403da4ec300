"""Monitoring and metrics instrumentation for the Carbon Enrichment Service.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from carbon_enrichment.monitoring.metrics import (
    cache_lookups_total,
    enrichment_requests_total,
    fallbacks_total,
    llm_latency_seconds,
    model_attempts_total,
    response_parsing_failures_total,
    retries_total,
)

__all__ = [
    "enrichment_requests_total",
    "cache_lookups_total",
    "model_attempts_total",
    "retries_total",
    "fallbacks_total",
    "response_parsing_failures_total",
    "llm_latency_seconds",
]

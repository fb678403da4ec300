"""Custom Prometheus metrics for the Carbon Enrichment Service.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- enrichment_requests_total{outcome="rate_limited"} (API key throttled)
- fallbacks_total (primary model unstable or unavailable)
- response_parsing_failures_total (model ignoring the JSON contract)
"""

from prometheus_client import Counter, Histogram

# === Enrichment Metrics ===

enrichment_requests_total = Counter(
    "enrichment_requests_total",
    "Total enrichment requests by outcome",
    ["outcome"],
)
"""
Labels:
- outcome: success, cached, rate_limited, exhausted
"""

cache_lookups_total = Counter(
    "cache_lookups_total",
    "Response cache lookups by result",
    ["result"],
)
"""
Labels:
- result: hit, miss, expired
"""

# === Retry / Fallback Metrics ===

model_attempts_total = Counter(
    "model_attempts_total",
    "Candidate model attempts (after retries) by model and outcome",
    ["model", "outcome"],
)

retries_total = Counter(
    "retries_total",
    "Total retry attempts by error type",
    ["error_type"],
)

fallbacks_total = Counter(
    "fallbacks_total",
    "Fallbacks to the next candidate model, by failing model",
    ["from_model"],
)

# === Validation Metrics ===

response_parsing_failures_total = Counter(
    "response_parsing_failures_total",
    "Total response parsing failures by stage and error type",
    ["stage", "error_type"],
)
"""
Labels:
- stage: stage1 (JSON parse), stage2 (schema), stage3 (typed model)
- error_type: json_decode_error, schema_validation_error, ...
"""

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "LLM generation latency in seconds",
    ["model", "success"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
)

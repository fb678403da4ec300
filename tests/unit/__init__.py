"""
Unit tests for the Carbon Enrichment Service.

Test individual components in isolation:
- Prompt builder (placeholder filtering, template rendering)
- Gemini client (error mapping via httpx.MockTransport)
- Response parser stages (fences, JSON, schema, typed model)
- Retry policy, rate limiter, response cache
- Fallback orchestrator and registry
- Credential stores
"""

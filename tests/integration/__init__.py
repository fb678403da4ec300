"""
Integration tests.

- api: full FastAPI app through TestClient (provider mocked)
- llm: live Gemini calls, skipped unless GEMINI_API_KEY is set
"""

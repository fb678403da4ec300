"""
Gemini client implementation for LLM inference.

Communicates with the Generative Language REST API using httpx AsyncClient:
- POST /v1beta/models/{model}:generateContent
- GET /v1beta/models (health check / API key check)

The API key travels in the x-goog-api-key header and is never logged.
"""

import json
import time
from typing import Any, Dict, Optional

import httpx
import structlog

from carbon_enrichment.llm.base_client import BaseLLMClient
from carbon_enrichment.llm.exceptions import (
    ModelNotAvailableError,
    ModelTimeoutError,
    RateLimitError,
    TransportError,
)
from carbon_enrichment.models.llm_models import GenerationConfig, LLMGenerationResponse
from carbon_enrichment.monitoring.metrics import llm_latency_seconds


logger = structlog.get_logger(__name__)

API_VERSION = "v1beta"
RATE_LIMIT_STATUS = "RESOURCE_EXHAUSTED"


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Parse a Retry-After header given in seconds."""
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_int(value: Any) -> Optional[int]:
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def _provider_error(response: httpx.Response) -> Dict[str, Any]:
    """Extract the {"error": {...}} object of a failed call, if any."""
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        return {}
    error = body.get("error") if isinstance(body, dict) else None
    return error if isinstance(error, dict) else {}


class GeminiClient(BaseLLMClient):
    """
    Gemini-specific LLM client using httpx for async HTTP communication.
    
    Features:
    - Connection pooling via a persistent AsyncClient
    - Provider errors mapped to RateLimitError / TransportError
    - Token usage and latency extraction
    
    One call per generate(): retries live in RetryPolicy.
    """
    
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        timeout: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize Gemini client.
        
        Args:
            api_key: Gemini API key
            base_url: Provider base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
            **kwargs: Additional config
        """
        super().__init__(base_url, timeout, **kwargs)
        self._api_key = api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
    
    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers={"x-goog-api-key": self._api_key},
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client
    
    async def generate(
        self,
        model: str,
        prompt: str,
        config: GenerationConfig,
    ) -> LLMGenerationResponse:
        """
        Generate content using the Gemini API.
        
        Request:
        {
            "contents": [{"role": "user", "parts": [{"text": "..."}]}],
            "generationConfig": {"temperature": 1, "topP": 0.95, "topK": 40, "maxOutputTokens": 8192}
        }
        
        Response:
        {
            "candidates": [{"content": {"parts": [{"text": "..."}]}, "finishReason": "STOP"}],
            "usageMetadata": {"promptTokenCount": 412, "candidatesTokenCount": 38}
        }
        """
        start_time = time.time()
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": config.to_gemini(),
        }
        
        logger.info(
            "Sending generation request to Gemini",
            model=model,
            prompt_length=len(prompt),
            temperature=config.temperature,
            max_output_tokens=config.max_output_tokens,
        )
        
        try:
            client = await self._get_client()
            response = await client.post(
                f"/{API_VERSION}/models/{model}:generateContent",
                json=payload,
            )
        except httpx.TimeoutException as e:
            self._observe(model, start_time, success=False)
            logger.warning("Gemini request timeout", model=model, timeout=self.timeout, error=str(e))
            raise ModelTimeoutError(
                f"Request timeout after {self.timeout}s",
                details={"model": model, "timeout": self.timeout},
            ) from e
        except httpx.HTTPError as e:
            self._observe(model, start_time, success=False)
            logger.warning("Gemini network error", model=model, error=str(e))
            raise TransportError(
                f"Network error: {str(e)}",
                details={"model": model, "error_type": type(e).__name__},
            ) from e
        
        if response.status_code >= 400:
            self._observe(model, start_time, success=False)
            self._raise_for_status(model, response)
        
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            self._observe(model, start_time, success=False)
            raise TransportError(
                "Invalid JSON envelope from Gemini",
                details={"model": model, "parse_error": str(e)},
            ) from e
        
        if not isinstance(data, dict):
            self._observe(model, start_time, success=False)
            raise TransportError(
                "Malformed Gemini envelope",
                details={"model": model, "envelope_type": type(data).__name__},
            )
        
        content, finish_reason = self._extract_text(data)
        if not content:
            self._observe(model, start_time, success=False)
            raise TransportError(
                "Empty response from Gemini",
                details={
                    "model": model,
                    "finish_reason": finish_reason,
                    "block_reason": _as_dict(data.get("promptFeedback")).get("blockReason"),
                },
            )
        
        latency_ms = int((time.time() - start_time) * 1000)
        usage = _as_dict(data.get("usageMetadata"))
        
        logger.info(
            "Gemini generation successful",
            model=model,
            latency_ms=latency_ms,
            prompt_tokens=usage.get("promptTokenCount"),
            completion_tokens=usage.get("candidatesTokenCount"),
            finish_reason=finish_reason,
        )
        self._observe(model, start_time, success=True)
        
        return LLMGenerationResponse(
            content=content,
            model=model,
            finish_reason=finish_reason,
            prompt_tokens=_as_int(usage.get("promptTokenCount")),
            completion_tokens=_as_int(usage.get("candidatesTokenCount")),
            latency_ms=latency_ms,
        )
    
    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> tuple[str, Optional[str]]:
        """
        Concatenate the text parts of the first candidate.
        
        Anything off-shape (non-list candidates, non-dict parts, non-string
        text) contributes no text, so the caller reports an empty response.
        """
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return "", None
        first = _as_dict(candidates[0])
        parts = _as_dict(first.get("content")).get("parts")
        if not isinstance(parts, list):
            parts = []
        text = "".join(
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
        finish_reason = first.get("finishReason")
        return text, finish_reason if isinstance(finish_reason, str) else None
    
    @staticmethod
    def _raise_for_status(model: str, response: httpx.Response) -> None:
        """Map a non-2xx response to the exception hierarchy."""
        status_code = response.status_code
        error = _provider_error(response)
        message = error.get("message") or response.text[:200]
        details = {"model": model, "status": status_code, "provider_status": error.get("status")}
        
        if status_code == 429 or error.get("status") == RATE_LIMIT_STATUS:
            retry_after = _parse_retry_after(response.headers.get("retry-after"))
            logger.warning("Gemini rate limit hit", model=model, retry_after=retry_after)
            raise RateLimitError(
                f"API rate limit exceeded: {message}",
                details=details,
                retry_after=retry_after,
            )
        
        logger.error("Gemini HTTP error", model=model, status_code=status_code, error_text=message)
        
        if status_code == 404:
            raise ModelNotAvailableError(f"Model not found: {model}", details=details)
        raise TransportError(f"Gemini error {status_code}: {message}", details=details)
    
    @staticmethod
    def _observe(model: str, start_time: float, success: bool) -> None:
        llm_latency_seconds.labels(
            model=model, success="true" if success else "false"
        ).observe(time.time() - start_time)
    
    async def health_check(self) -> bool:
        """
        Check reachability and API key validity via GET /v1beta/models.
        
        Returns True if the provider answers 200, False otherwise.
        """
        try:
            client = await self._get_client()
            response = await client.get(f"/{API_VERSION}/models", timeout=5.0)
            response.raise_for_status()
            logger.debug("Gemini health check passed")
            return True
        except httpx.HTTPError as e:
            logger.warning("Gemini health check failed", error=str(e))
            return False
    
    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Gemini client connection")

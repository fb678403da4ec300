"""
Abstract base client for LLM inference.

Defines the interface that model provider implementations must adhere to.
The enrichment core only depends on this interface, so the provider can be
swapped (or mocked in tests) without touching the orchestrator.
"""

from abc import ABC, abstractmethod

import structlog

from carbon_enrichment.models.llm_models import GenerationConfig, LLMGenerationResponse


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM inference clients.
    
    Responsibilities:
    - Send one generation request for a named model
    - Return the raw generated text with metadata
    - Map transport failures to TransportError / RateLimitError
    
    Does NOT handle:
    - Prompt construction (that's PromptBuilder's job)
    - Response validation (that's ResponseParser's job)
    - Retries, fallback and rate limiting (that's the orchestrator's job)
    """
    
    def __init__(self, base_url: str, timeout: int = 60, **kwargs):
        """
        Initialize base client.
        
        Args:
            base_url: Base URL of the provider API
            timeout: Request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.extra_config = kwargs
        
        logger.info(
            "Initialized LLM client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )
    
    @abstractmethod
    async def generate(
        self,
        model: str,
        prompt: str,
        config: GenerationConfig,
    ) -> LLMGenerationResponse:
        """
        Generate a completion for the prompt with the given model.
        
        Exactly one outbound call. Implementations must not retry.
        
        Args:
            model: Model identifier (e.g., "gemini-1.5-flash")
            prompt: Complete prompt text
            config: Sampling parameters
            
        Returns:
            LLMGenerationResponse with the raw generated text
            
        Raises:
            RateLimitError: Provider throttled the request
            TransportError: Network, timeout or provider-side failure
        """
        pass
    
    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check that the provider is reachable and accepts our credentials.
        
        Returns:
            True if healthy, False otherwise
            
        Note:
            This should NOT raise exceptions - return False on error.
        """
        pass
    
    async def close(self):
        """
        Close client connections and cleanup resources.
        
        Default implementation does nothing.
        """
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )

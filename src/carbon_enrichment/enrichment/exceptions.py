"""
Orchestrator exceptions.
"""

from carbon_enrichment.exceptions import EnrichmentError

DEFAULT_EXHAUSTED_MESSAGE = "Failed to process product with all available models"


class OrchestrationExhaustedError(EnrichmentError):
    """
    Raised when every candidate model failed for the product.
    
    The message is the last recorded failure's message so callers see the
    originating cause. The failure itself is kept on last_error (and chained
    as __cause__ by the orchestrator).
    
    Attributes:
        last_error: Final error recorded by the fallback loop (None if no
            candidate was attempted)
        attempted_models: Models tried, in order
    """
    
    def __init__(
        self,
        last_error: EnrichmentError | None,
        attempted_models: list[str],
    ) -> None:
        self.last_error = last_error
        self.attempted_models = attempted_models
        
        message = last_error.message if last_error else DEFAULT_EXHAUSTED_MESSAGE
        super().__init__(
            message,
            {
                "attempted_models": attempted_models,
                "last_error_type": type(last_error).__name__ if last_error else None,
            },
        )

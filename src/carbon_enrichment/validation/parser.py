"""
Response parser: raw model text -> validated EnrichmentResult.

Runs the stages in order and stops at the first hard failure:

1. Stage1JSONParse: fence stripping + JSON object parsing
2. Stage2SchemaValidation: required keys, types, co2Value > 0
3. EnrichmentResult construction (finite value, non-blank text)

Validation is all-or-nothing: no partial results, no clamping.
"""

import structlog
from pydantic import ValidationError as PydanticValidationError

from carbon_enrichment.models.enrichment import EnrichmentResult
from carbon_enrichment.monitoring.metrics import response_parsing_failures_total
from .exceptions import SchemaValidationError
from .stage1_json_parse import Stage1JSONParse
from .stage2_schema import Stage2SchemaValidation

logger = structlog.get_logger(__name__)


class ResponseParser:
    """
    Parse and validate the text returned by a model.
    
    Raises a ResponseParsingError subclass on any violation.
    """
    
    def __init__(self):
        self.stage1 = Stage1JSONParse()
        self.stage2 = Stage2SchemaValidation()
    
    def parse(self, content: str) -> EnrichmentResult:
        """
        Turn raw model output into an EnrichmentResult (model_used unset).
        
        Args:
            content: Raw generated text
            
        Returns:
            Validated EnrichmentResult
            
        Raises:
            JSONParseError: Not a JSON object
            SchemaValidationError: Missing/invalid fields
        """
        data = self.stage1.validate(content)
        self.stage2.validate(data)
        
        try:
            result = EnrichmentResult(
                co2_value=data["co2Value"],
                concise_title=data["conciseTitle"],
                concise_description=data["conciseDescription"],
            )
        except PydanticValidationError as e:
            messages = [
                f"{'.'.join(str(p) for p in err['loc']) or 'root'}: {err['msg']}"
                for err in e.errors()
            ]
            response_parsing_failures_total.labels(
                stage="stage3", error_type="model_validation_error"
            ).inc()
            raise SchemaValidationError(
                f"Invalid response: {messages[0]}",
                validation_errors=messages,
            ) from e
        
        logger.debug("Response parsed", co2_value=result.co2_value)
        return result

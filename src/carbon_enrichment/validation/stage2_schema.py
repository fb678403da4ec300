"""
Stage 2: JSON Schema Validation.

Validate the parsed dict against the enrichment response schema.
This is a hard-fail stage: schema violations trigger retry.
"""

import structlog
from jsonschema import Draft7Validator

from carbon_enrichment.monitoring.metrics import response_parsing_failures_total
from .exceptions import SchemaValidationError

logger = structlog.get_logger(__name__)

ENRICHMENT_RESPONSE_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "co2_enrichment_v1",
    "type": "object",
    "required": ["co2Value", "conciseTitle", "conciseDescription"],
    "properties": {
        "co2Value": {"type": "number", "exclusiveMinimum": 0},
        "conciseTitle": {"type": "string", "minLength": 1},
        "conciseDescription": {"type": "string", "minLength": 1},
    },
}


class Stage2SchemaValidation:
    """
    Stage 2 validator: Validate against JSON Schema.
    
    Extra keys are tolerated; the three enrichment keys are mandatory.
    """
    
    def __init__(self, schema: dict | None = None):
        self.schema = schema or ENRICHMENT_RESPONSE_SCHEMA
        Draft7Validator.check_schema(self.schema)
        self._validator = Draft7Validator(self.schema)
    
    def validate(self, data: dict) -> None:
        """
        Validate data against the schema.
        
        Args:
            data: Parsed JSON dict to validate
            
        Raises:
            SchemaValidationError: If data doesn't conform to schema
        """
        errors = sorted(self._validator.iter_errors(data), key=lambda e: list(e.path))
        
        if errors:
            error_messages = []
            for error in errors[:10]:  # Limit to first 10 errors
                path = ".".join(str(p) for p in error.path) if error.path else "root"
                error_messages.append(f"{path}: {error.message}")
            
            response_parsing_failures_total.labels(
                stage="stage2", error_type="schema_validation_error"
            ).inc()
            raise SchemaValidationError(
                f"Invalid response: {error_messages[0]}",
                validation_errors=error_messages,
            )
        
        logger.debug("Stage 2: validated against JSON Schema")

"""
Stage 1: JSON Parse Validation.

Strip Markdown code fences the model may add despite instructions, then
parse the text into a dict. Malformed JSON is a hard failure.
"""

import json
import re

import structlog

from carbon_enrichment.monitoring.metrics import response_parsing_failures_total
from .exceptions import JSONParseError

logger = structlog.get_logger(__name__)

_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*\s*")
_TRAILING_FENCE = re.compile(r"\s*```$")


def strip_code_fences(content: str) -> str:
    """
    Remove a leading ```json (or bare ```) marker and a trailing ``` marker.
    
    Examples:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    text = content.strip()
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def _reject_constant(name: str) -> float:
    # NaN / Infinity are not JSON, the stdlib decoder accepts them by default
    raise ValueError(f"Non-standard JSON constant: {name}")


class Stage1JSONParse:
    """
    Stage 1 validator: Parse JSON string to dict.
    
    Raises JSONParseError on malformed JSON (hard fail).
    """
    
    def validate(self, content: str) -> dict:
        """
        Parse JSON content from the model response.
        
        Args:
            content: Raw text from the model response
            
        Returns:
            Parsed dict representation
            
        Raises:
            JSONParseError: If content is not a JSON object
        """
        if not content or not content.strip():
            response_parsing_failures_total.labels(
                stage="stage1", error_type="empty_content"
            ).inc()
            raise JSONParseError(
                "Model response content is empty or whitespace-only",
                raw_content=content,
                parse_error="Empty content"
            )
        
        cleaned = strip_code_fences(content)
        
        try:
            parsed = json.loads(cleaned, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            response_parsing_failures_total.labels(
                stage="stage1", error_type="json_decode_error"
            ).inc()
            raise JSONParseError(
                f"JSON parsing error: {e.msg}",
                raw_content=content,
                parse_error=f"{e.msg} at line {e.lineno} col {e.colno}"
            ) from e
        except ValueError as e:
            response_parsing_failures_total.labels(
                stage="stage1", error_type="invalid_constant"
            ).inc()
            raise JSONParseError(
                f"JSON parsing error: {e}",
                raw_content=content,
                parse_error=str(e)
            ) from e
        
        if not isinstance(parsed, dict):
            response_parsing_failures_total.labels(
                stage="stage1", error_type="not_json_object"
            ).inc()
            raise JSONParseError(
                "Response is not a valid JSON object",
                raw_content=content,
                parse_error=f"Expected dict, got {type(parsed).__name__}"
            )
        
        logger.debug("Stage 1: parsed JSON", keys_count=len(parsed))
        return parsed

"""
Multi-stage validation of model responses.

- parser.py: ResponseParser running all stages
- stage1_json_parse.py: fence stripping + JSON parsing (hard fail)
- stage2_schema.py: JSON Schema validation (hard fail)
"""

from .exceptions import (
    JSONParseError,
    ResponseParsingError,
    SchemaValidationError,
)
from .parser import ResponseParser
from .stage1_json_parse import strip_code_fences

__all__ = [
    "ResponseParser",
    "strip_code_fences",
    "ResponseParsingError",
    "JSONParseError",
    "SchemaValidationError",
]

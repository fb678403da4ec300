"""
Unit tests for Stage 1: JSON Parse.
"""

import pytest

from carbon_enrichment.validation.exceptions import JSONParseError, ResponseParsingError
from carbon_enrichment.validation.stage1_json_parse import Stage1JSONParse, strip_code_fences


class TestStripCodeFences:
    """Test suite for code fence removal."""
    
    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    
    def test_bare_fence(self):
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
    
    def test_fence_with_surrounding_whitespace(self):
        assert strip_code_fences('  \n```json {"a": 1}```  \n') == '{"a": 1}'
    
    def test_unfenced_text_unchanged(self):
        assert strip_code_fences('{"a": 1}') == '{"a": 1}'


class TestStage1JSONParse:
    """Test suite for Stage 1 JSON parsing."""
    
    def setup_method(self):
        """Setup test fixtures."""
        self.stage1 = Stage1JSONParse()
    
    def test_valid_json_object(self, valid_response_text):
        result = self.stage1.validate(valid_response_text)
        
        assert result["co2Value"] == 0.8
        assert result["conciseTitle"] == "Bamboo Toothbrush"
    
    def test_fenced_json_parses_identically(self, valid_response_text):
        fenced = f"```json\n{valid_response_text}\n```"
        
        assert self.stage1.validate(fenced) == self.stage1.validate(valid_response_text)
    
    def test_empty_string_raises_error(self):
        with pytest.raises(JSONParseError) as exc_info:
            self.stage1.validate("")
        
        assert "empty or whitespace-only" in str(exc_info.value)
    
    def test_whitespace_only_raises_error(self):
        with pytest.raises(JSONParseError):
            self.stage1.validate("   \n\t  ")
    
    def test_malformed_json_raises_error(self):
        with pytest.raises(JSONParseError) as exc_info:
            self.stage1.validate('{"co2Value": 1.2, "conciseTitle": ')
        
        assert "JSON parsing error" in exc_info.value.message
        assert exc_info.value.details.get("parse_error")
        assert exc_info.value.details.get("content_snippet")
    
    def test_prose_response_raises_error(self):
        with pytest.raises(JSONParseError):
            self.stage1.validate("The estimated footprint is about 2 kg.")
    
    def test_json_array_raises_error(self):
        with pytest.raises(JSONParseError) as exc_info:
            self.stage1.validate('[{"co2Value": 1}]')
        
        assert "not a valid JSON object" in exc_info.value.message
    
    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_rejected(self, constant):
        with pytest.raises(JSONParseError):
            self.stage1.validate(f'{{"co2Value": {constant}}}')
    
    def test_is_response_parsing_error(self):
        with pytest.raises(ResponseParsingError):
            self.stage1.validate("not json")
    
    def test_snippet_truncated(self):
        with pytest.raises(JSONParseError) as exc_info:
            self.stage1.validate("x" * 2000)
        
        assert len(exc_info.value.details["content_snippet"]) == 500

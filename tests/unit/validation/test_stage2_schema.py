"""
Unit tests for Stage 2: JSON Schema validation.
"""

import pytest

from carbon_enrichment.validation.exceptions import SchemaValidationError
from carbon_enrichment.validation.stage2_schema import Stage2SchemaValidation


@pytest.fixture
def stage2():
    return Stage2SchemaValidation()


@pytest.fixture
def valid_data():
    return {
        "co2Value": 12.5,
        "conciseTitle": "Steel Bottle",
        "conciseDescription": "Insulated reusable bottle",
    }


def test_valid_data_passes(stage2, valid_data):
    stage2.validate(valid_data)


def test_integer_co2_value_passes(stage2, valid_data):
    valid_data["co2Value"] = 3
    stage2.validate(valid_data)


def test_extra_keys_tolerated(stage2, valid_data):
    valid_data["reasoning"] = "steel is energy intensive"
    stage2.validate(valid_data)


@pytest.mark.parametrize("value", [0, -1, -0.5])
def test_non_positive_co2_rejected(stage2, valid_data, value):
    valid_data["co2Value"] = value
    
    with pytest.raises(SchemaValidationError) as exc_info:
        stage2.validate(valid_data)
    
    assert "co2Value" in exc_info.value.details["validation_errors"][0]


@pytest.mark.parametrize("value", ["1.2", None, True, [1.2]])
def test_non_numeric_co2_rejected(stage2, valid_data, value):
    valid_data["co2Value"] = value
    
    with pytest.raises(SchemaValidationError):
        stage2.validate(valid_data)


@pytest.mark.parametrize("field", ["co2Value", "conciseTitle", "conciseDescription"])
def test_missing_field_rejected(stage2, valid_data, field):
    del valid_data[field]
    
    with pytest.raises(SchemaValidationError) as exc_info:
        stage2.validate(valid_data)
    
    assert field in str(exc_info.value)


@pytest.mark.parametrize("field", ["conciseTitle", "conciseDescription"])
def test_empty_text_rejected(stage2, valid_data, field):
    valid_data[field] = ""
    
    with pytest.raises(SchemaValidationError):
        stage2.validate(valid_data)


def test_all_errors_collected(stage2):
    with pytest.raises(SchemaValidationError) as exc_info:
        stage2.validate({"co2Value": -3, "conciseTitle": 5, "conciseDescription": ""})
    
    assert len(exc_info.value.details["validation_errors"]) == 3

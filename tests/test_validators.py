"""
Unit tests for the generic validation framework.
"""

import pytest

from edacation.utils.validators import (
    BaseValidator,
    ChoiceValidator,
    CompositeValidator,
    ListOfValidator,
    RequiredFieldsValidator,
    TypeValidator,
    ValidationResult,
    check_optional,
    describe_type,
)


class TestValidationResult:
    """Test the ValidationResult class."""

    def test_init(self):
        """Test initialization of ValidationResult."""
        result = ValidationResult(True)
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_add_error(self):
        """Test adding errors."""
        result = ValidationResult(True)
        result.add_error("Test error")
        assert not result.is_valid
        assert "Test error" in result.errors

    def test_add_warning(self):
        """Test adding warnings."""
        result = ValidationResult(True)
        result.add_warning("Test warning")
        assert result.is_valid  # Warnings don't invalidate
        assert "Test warning" in result.warnings

    def test_merge(self):
        """Test merging validation results."""
        result1 = ValidationResult(True)
        result1.add_warning("Warning 1")
        result2 = ValidationResult(True)
        result2.add_error("Error 1")

        merged = result1.merge(result2)

        assert merged is result1
        assert not merged.is_valid
        assert merged.errors == ["Error 1"]
        assert merged.warnings == ["Warning 1"]


class TestTypeValidator:
    """Test TypeValidator."""

    def test_valid(self):
        assert TypeValidator(str, "name").validate("blinky").valid

    def test_invalid_message(self):
        result = TypeValidator(str, "targets[0].name").validate(3)
        assert result.errors == ["targets[0].name: expected string, got int"]

    def test_bool_is_not_int(self):
        assert not TypeValidator(int).validate(True).valid

    def test_int_is_not_bool(self):
        assert not TypeValidator(bool).validate(1).valid

    def test_tuple_of_types(self):
        validator = TypeValidator((str, bool), "value")
        assert validator.validate(False).valid
        assert validator.validate("x").valid
        assert "expected string or boolean" in validator.validate(1.5).errors[0]

    def test_callable(self):
        assert TypeValidator(dict)({}).valid


class TestListOfValidator:
    def test_valid(self):
        assert ListOfValidator(str, "values").validate(["a", "b"]).valid

    def test_not_a_list(self):
        result = ListOfValidator(str, "values").validate("a")
        assert result.errors == ["values: expected array, got str"]

    def test_every_bad_item_reported(self):
        result = ListOfValidator(str, "values").validate(["a", 1, None])
        assert len(result.errors) == 2
        assert result.errors[0].startswith("values[1]:")


class TestRequiredFieldsValidator:
    """Test RequiredFieldsValidator."""

    def test_all_present(self):
        validator = RequiredFieldsValidator(["id", "name"], "target")
        assert validator.validate({"id": "a", "name": "b"}).valid

    def test_missing_fields(self):
        validator = RequiredFieldsValidator(["id", "name", "vendor"], "target")
        result = validator.validate({"id": "a", "name": None})
        assert result.errors == ["target: missing required fields: name, vendor"]

    def test_not_a_dict(self):
        result = RequiredFieldsValidator(["id"], "target").validate([])
        assert not result.valid


class TestChoiceValidator:
    def test_choice(self):
        validator = ChoiceValidator(["design", "testbench"], "type")
        assert validator.validate("design").valid
        result = validator.validate("constraints")
        assert "expected one of 'design', 'testbench'" in result.errors[0]


class TestCompositeValidator:
    """Test CompositeValidator."""

    def test_stops_at_first_failure(self):
        class Exploding(BaseValidator):
            def validate(self, value):
                raise AssertionError("should not run")

        validator = CompositeValidator([TypeValidator(str), Exploding()])
        assert not validator.validate(1).valid

    def test_all_pass(self):
        validator = CompositeValidator(
            [TypeValidator(str), ChoiceValidator(["ecp5", "ice40"])]
        )
        assert validator.validate("ecp5").valid


class TestCheckOptional:
    def test_absent_or_null(self):
        result = ValidationResult()
        assert check_optional({}, "directory", TypeValidator(str), result) is None
        assert check_optional({"directory": None}, "directory", TypeValidator(str), result) is None
        assert result.valid

    def test_valid_value_returned(self):
        result = ValidationResult()
        value = check_optional({"directory": "build"}, "directory", TypeValidator(str), result)
        assert value == "build"

    def test_invalid_value_recorded(self):
        result = ValidationResult()
        value = check_optional({"directory": 1}, "directory", TypeValidator(str, "d"), result)
        assert value is None
        assert not result.valid


@pytest.mark.parametrize(
    "expected,name",
    [(bool, "boolean"), (list, "array"), (dict, "object"), (bytes, "bytes")],
)
def test_describe_type(expected, name):
    assert describe_type(expected) == name

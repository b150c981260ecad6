"""Generic validation framework used by the configuration parser."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple, Type, Union

TypeSpec = Union[Type, Tuple[Type, ...]]

_TYPE_NAMES = {
    bool: "boolean",
    str: "string",
    int: "integer",
    float: "number",
    list: "array",
    dict: "object",
}


def describe_type(expected: TypeSpec) -> str:
    """Human readable name for a type or tuple of types."""
    if isinstance(expected, tuple):
        return " or ".join(describe_type(t) for t in expected)
    return _TYPE_NAMES.get(expected, expected.__name__)


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.valid

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)
        self.valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one."""
        self.valid = self.valid and other.valid
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


class BaseValidator(ABC):
    """Base class for all validators."""

    def __init__(self, field_name: str = "value"):
        self.field_name = field_name

    @abstractmethod
    def validate(self, value: Any) -> ValidationResult:
        """Validate the input value."""

    def __call__(self, value: Any) -> ValidationResult:
        return self.validate(value)


class TypeValidator(BaseValidator):
    """Validate that a value is an instance of the expected type.

    ``bool`` is never accepted where an ``int`` is expected, and vice versa,
    mirroring JSON's distinction between booleans and numbers.
    """

    def __init__(self, expected: TypeSpec, field_name: str = "value"):
        super().__init__(field_name)
        self.expected = expected

    def validate(self, value: Any) -> ValidationResult:
        result = ValidationResult()
        expected = self.expected if isinstance(self.expected, tuple) else (self.expected,)
        ok = isinstance(value, expected)
        if ok and isinstance(value, bool) and bool not in expected:
            ok = False
        if not ok:
            result.add_error(
                f"{self.field_name}: expected {describe_type(self.expected)}, "
                f"got {type(value).__name__}"
            )
        return result


class ListOfValidator(BaseValidator):
    """Validate that a value is a list whose items are all of one type."""

    def __init__(self, item_type: TypeSpec, field_name: str = "value"):
        super().__init__(field_name)
        self.item_type = item_type

    def validate(self, value: Any) -> ValidationResult:
        result = TypeValidator(list, self.field_name).validate(value)
        if not result.valid:
            return result
        for index, item in enumerate(value):
            result.merge(
                TypeValidator(self.item_type, f"{self.field_name}[{index}]").validate(item)
            )
        return result


class RequiredFieldsValidator(BaseValidator):
    """Validate that required fields are present in a dictionary."""

    def __init__(self, required_fields: Iterable[str], field_name: str = "data"):
        super().__init__(field_name)
        self.required_fields = list(required_fields)

    def validate(self, value: Any) -> ValidationResult:
        result = TypeValidator(dict, self.field_name).validate(value)
        if not result.valid:
            return result

        missing_fields = [f for f in self.required_fields if value.get(f) is None]
        if missing_fields:
            result.add_error(
                f"{self.field_name}: missing required fields: {', '.join(missing_fields)}"
            )
        return result


class ChoiceValidator(BaseValidator):
    """Validate that a value is one of a fixed set of choices."""

    def __init__(self, choices: Iterable[Any], field_name: str = "value"):
        super().__init__(field_name)
        self.choices = tuple(choices)

    def validate(self, value: Any) -> ValidationResult:
        result = ValidationResult()
        if value not in self.choices:
            options = ", ".join(repr(c) for c in self.choices)
            result.add_error(f"{self.field_name}: expected one of {options}, got {value!r}")
        return result


class CompositeValidator(BaseValidator):
    """Combine multiple validators; stops at the first failing one."""

    def __init__(self, validators: List[BaseValidator], field_name: str = "value"):
        super().__init__(field_name)
        self.validators = validators

    def validate(self, value: Any) -> ValidationResult:
        result = ValidationResult()
        for validator in self.validators:
            result.merge(validator.validate(value))
            if not result.valid:
                break
        return result


def check_optional(
    data: dict, key: str, validator: BaseValidator, result: ValidationResult
) -> Optional[Any]:
    """Validate ``data[key]`` when present; return it if valid, else None."""
    if key not in data or data[key] is None:
        return None
    outcome = validator.validate(data[key])
    result.merge(outcome)
    return data[key] if outcome.valid else None

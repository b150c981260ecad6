#!/usr/bin/env python3
"""
Project file records.

Input files are the HDL sources (designs and testbenches) a user adds to a
project. Output files are produced by tool runs and remember which target
produced them and whether they still reflect the current inputs.

Older project files stored both lists as bare path strings; ``from_data``
accepts that shape and upgrades it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..utils.validators import (
    ChoiceValidator,
    CompositeValidator,
    TypeValidator,
    ValidationResult,
    check_optional,
)


class InputFileType(str, Enum):
    DESIGN = "design"
    TESTBENCH = "testbench"


@dataclass
class ProjectInputFile:
    path: str
    type: InputFileType = InputFileType.DESIGN

    @classmethod
    def from_data(cls, raw: Any, path: str, result: ValidationResult) -> Optional["ProjectInputFile"]:
        if isinstance(raw, str):
            return cls(raw)

        outcome = TypeValidator(dict, path).validate(raw)
        if outcome.valid:
            outcome.merge(TypeValidator(str, f"{path}.path").validate(raw.get("path")))
        if not outcome.valid:
            result.merge(outcome)
            return None

        type_validator = CompositeValidator(
            [
                TypeValidator(str, f"{path}.type"),
                ChoiceValidator([t.value for t in InputFileType], f"{path}.type"),
            ]
        )
        file_type = check_optional(raw, "type", type_validator, result)
        if file_type is None:
            return cls(raw["path"])
        return cls(raw["path"], InputFileType(file_type))

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "type": self.type.value}


@dataclass
class ProjectOutputFile:
    path: str
    target_id: Optional[str] = None
    stale: bool = False

    @classmethod
    def from_data(cls, raw: Any, path: str, result: ValidationResult) -> Optional["ProjectOutputFile"]:
        if isinstance(raw, str):
            return cls(raw)

        outcome = TypeValidator(dict, path).validate(raw)
        if outcome.valid:
            outcome.merge(TypeValidator(str, f"{path}.path").validate(raw.get("path")))
        if not outcome.valid:
            result.merge(outcome)
            return None

        target_id = check_optional(raw, "targetId", TypeValidator(str, f"{path}.targetId"), result)
        stale = check_optional(raw, "stale", TypeValidator(bool, f"{path}.stale"), result)
        return cls(raw["path"], target_id=target_id, stale=bool(stale))

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "targetId": self.target_id, "stale": self.stale}

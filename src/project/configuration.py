#!/usr/bin/env python3
"""
Project configuration schema.

Typed dataclasses for the persisted project configuration together with an
explicit parser that validates raw (JSON-decoded) data and fills in every
documented default. This is the single place where malformed persisted data
is rejected; everything downstream assumes a validated structure.

Persisted keys are camelCase; Python attributes are snake_case.
"""

import copy
from dataclasses import dataclass, field, fields, replace
from typing import Any, ClassVar, Dict, Final, List, Mapping, Optional, Tuple, Type

from ..exceptions import SchemaValidationError
from ..utils.validators import (
    ListOfValidator,
    RequiredFieldsValidator,
    TypeValidator,
    ValidationResult,
    check_optional,
)

# ============================================================================
# Value lists
# ============================================================================


@dataclass
class ValueListConfiguration:
    """Project-default override list for one tool key."""

    use_generated: bool = True
    values: List[str] = field(default_factory=list)

    @classmethod
    def parse(
        cls, raw: Any, path: str, result: ValidationResult
    ) -> Optional["ValueListConfiguration"]:
        kwargs = cls._parse_fields(raw, path, result)
        if kwargs is None:
            return None
        return cls(**kwargs)

    @classmethod
    def _parse_fields(
        cls, raw: Any, path: str, result: ValidationResult
    ) -> Optional[Dict[str, Any]]:
        outcome = TypeValidator(dict, path).validate(raw)
        if not outcome.valid:
            result.merge(outcome)
            return None

        kwargs: Dict[str, Any] = {}
        use_generated = check_optional(
            raw, "useGenerated", TypeValidator(bool, f"{path}.useGenerated"), result
        )
        if use_generated is not None:
            kwargs["use_generated"] = use_generated
        values = check_optional(
            raw, "values", ListOfValidator(str, f"{path}.values"), result
        )
        if values is not None:
            kwargs["values"] = list(values)
        return kwargs

    def to_dict(self) -> Dict[str, Any]:
        return {"useGenerated": self.use_generated, "values": list(self.values)}


@dataclass
class TargetValueListConfiguration(ValueListConfiguration):
    """Target-level override list; may also drop the project-default values.

    ``use_generated`` stays ``None`` unless the target sets it, so the
    project-default flag still applies underneath a target block that only
    lists values.
    """

    use_generated: Optional[bool] = None  # type: ignore[assignment]
    use_default: bool = True

    @classmethod
    def _parse_fields(
        cls, raw: Any, path: str, result: ValidationResult
    ) -> Optional[Dict[str, Any]]:
        kwargs = super()._parse_fields(raw, path, result)
        if kwargs is None:
            return None
        use_default = check_optional(
            raw, "useDefault", TypeValidator(bool, f"{path}.useDefault"), result
        )
        if use_default is not None:
            kwargs["use_default"] = use_default
        return kwargs

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.use_generated is not None:
            data["useGenerated"] = self.use_generated
        data["useDefault"] = self.use_default
        data["values"] = list(self.values)
        return data


# ============================================================================
# Tool options
# ============================================================================


def option(key: str, kind: type) -> Any:
    """Declare an optional tool option persisted under ``key``."""
    return field(default=None, metadata={"key": key, "type": kind})


@dataclass
class ToolOptions:
    """Scalar options of a tool. ``None`` means "not set at this layer"."""

    def merged(self, *layers: Optional["ToolOptions"]) -> "ToolOptions":
        """Return a copy where every set field of each later layer wins."""
        updates: Dict[str, Any] = {}
        for layer in layers:
            if layer is None:
                continue
            for f in fields(layer):
                value = getattr(layer, f.name)
                if value is not None:
                    updates[f.name] = value
        return replace(self, **updates)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    @classmethod
    def parse(cls, raw: Any, path: str, result: ValidationResult) -> Optional["ToolOptions"]:
        outcome = TypeValidator(dict, path).validate(raw)
        if not outcome.valid:
            result.merge(outcome)
            return None

        kwargs = {}
        for f in fields(cls):
            key = f.metadata["key"]
            value = check_optional(
                raw, key, TypeValidator(f.metadata["type"], f"{path}.{key}"), result
            )
            if value is not None:
                kwargs[f.name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            f.metadata["key"]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class YosysOptions(ToolOptions):
    optimize: Optional[bool] = option("optimize", bool)
    top_level_module: Optional[str] = option("topLevelModule", str)


@dataclass
class NextpnrOptions(ToolOptions):
    placed_svg: Optional[bool] = option("placedSvg", bool)
    routed_svg: Optional[bool] = option("routedSvg", bool)
    routed_json: Optional[bool] = option("routedJson", bool)
    pin_config_file: Optional[str] = option("pinConfigFile", str)


@dataclass
class IVerilogOptions(ToolOptions):
    testbench_file: Optional[str] = option("testbenchFile", str)


@dataclass
class FlasherOptions(ToolOptions):
    board: Optional[str] = option("board", str)


# ============================================================================
# Worker (per-tool) blocks
# ============================================================================


@dataclass(frozen=True)
class WorkerSchema:
    """Which value-list keys and which option type a tool accepts."""

    worker_id: str
    value_list_keys: Tuple[str, ...]
    options_type: Type[ToolOptions]


WORKER_SCHEMAS: Final[Mapping[str, WorkerSchema]] = {
    "yosys": WorkerSchema("yosys", ("inputFiles", "outputFiles", "commands"), YosysOptions),
    "nextpnr": WorkerSchema(
        "nextpnr", ("inputFiles", "outputFiles", "arguments"), NextpnrOptions
    ),
    "iverilog": WorkerSchema(
        "iverilog", ("inputFiles", "outputFiles", "arguments"), IVerilogOptions
    ),
    "flasher": WorkerSchema(
        "flasher",
        ("inputFiles", "outputFiles", "packerArguments", "flasherArguments"),
        FlasherOptions,
    ),
}

WORKER_IDS: Final[Tuple[str, ...]] = tuple(WORKER_SCHEMAS)


def get_worker_schema(worker_id: str) -> WorkerSchema:
    try:
        return WORKER_SCHEMAS[worker_id]
    except KeyError:
        raise ValueError(f"Unknown worker id: {worker_id}") from None


@dataclass
class WorkerConfiguration:
    """Override block for one tool: value lists keyed by persisted name, plus options."""

    value_lists: Dict[str, ValueListConfiguration] = field(default_factory=dict)
    options: Optional[ToolOptions] = None

    def get_value_list(self, key: str) -> Optional[ValueListConfiguration]:
        return self.value_lists.get(key)

    @classmethod
    def parse(
        cls,
        raw: Any,
        schema: WorkerSchema,
        path: str,
        result: ValidationResult,
        target_level: bool,
    ) -> Optional["WorkerConfiguration"]:
        outcome = TypeValidator(dict, path).validate(raw)
        if not outcome.valid:
            result.merge(outcome)
            return None

        list_type = TargetValueListConfiguration if target_level else ValueListConfiguration
        value_lists: Dict[str, ValueListConfiguration] = {}
        for key in schema.value_list_keys:
            if raw.get(key) is None:
                continue
            parsed = list_type.parse(raw[key], f"{path}.{key}", result)
            if parsed is not None:
                value_lists[key] = parsed

        options = None
        if raw.get("options") is not None:
            options = schema.options_type.parse(raw["options"], f"{path}.options", result)
        return cls(value_lists=value_lists, options=options)

    def to_dict(self, schema: WorkerSchema) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            key: self.value_lists[key].to_dict()
            for key in schema.value_list_keys
            if key in self.value_lists
        }
        if self.options is not None:
            data["options"] = self.options.to_dict()
        return data


def _parse_workers(
    raw: Mapping[str, Any], path: str, result: ValidationResult, target_level: bool
) -> Dict[str, WorkerConfiguration]:
    workers: Dict[str, WorkerConfiguration] = {}
    for worker_id, schema in WORKER_SCHEMAS.items():
        if raw.get(worker_id) is None:
            continue
        parsed = WorkerConfiguration.parse(
            raw[worker_id], schema, f"{path}.{worker_id}", result, target_level
        )
        if parsed is not None:
            workers[worker_id] = parsed
    return workers


def _workers_to_dict(workers: Mapping[str, WorkerConfiguration]) -> Dict[str, Any]:
    return {
        worker_id: workers[worker_id].to_dict(schema)
        for worker_id, schema in WORKER_SCHEMAS.items()
        if worker_id in workers
    }


# ============================================================================
# Targets and project configuration
# ============================================================================


@dataclass
class TargetDefaultsConfiguration:
    """Project-wide defaults applied to every target."""

    workers: Dict[str, WorkerConfiguration] = field(default_factory=dict)

    def get_worker(self, worker_id: str) -> Optional[WorkerConfiguration]:
        return self.workers.get(worker_id)

    @classmethod
    def parse(
        cls, raw: Any, path: str, result: ValidationResult
    ) -> Optional["TargetDefaultsConfiguration"]:
        outcome = TypeValidator(dict, path).validate(raw)
        if not outcome.valid:
            result.merge(outcome)
            return None
        return cls(workers=_parse_workers(raw, path, result, target_level=False))

    def to_dict(self) -> Dict[str, Any]:
        return _workers_to_dict(self.workers)


@dataclass
class TargetConfiguration:
    """A named build configuration binding a device to per-tool overrides."""

    REQUIRED_KEYS: ClassVar[Tuple[str, ...]] = (
        "id",
        "name",
        "vendor",
        "family",
        "device",
        "package",
    )

    id: str
    name: str
    vendor: str
    family: str
    device: str
    package: str
    directory: Optional[str] = None
    workers: Dict[str, WorkerConfiguration] = field(default_factory=dict)

    def get_worker(self, worker_id: str) -> Optional[WorkerConfiguration]:
        return self.workers.get(worker_id)

    @classmethod
    def parse(
        cls, raw: Any, path: str, result: ValidationResult
    ) -> Optional["TargetConfiguration"]:
        outcome = RequiredFieldsValidator(cls.REQUIRED_KEYS, path).validate(raw)
        if not outcome.valid:
            result.merge(outcome)
            return None

        for key in cls.REQUIRED_KEYS:
            outcome.merge(TypeValidator(str, f"{path}.{key}").validate(raw[key]))
        check_optional(raw, "directory", TypeValidator(str, f"{path}.directory"), outcome)
        result.merge(outcome)
        if not outcome.valid:
            return None

        return cls(
            id=raw["id"],
            name=raw["name"],
            vendor=raw["vendor"],
            family=raw["family"],
            device=raw["device"],
            package=raw["package"],
            directory=raw.get("directory"),
            workers=_parse_workers(raw, path, result, target_level=True),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "vendor": self.vendor,
            "family": self.family,
            "device": self.device,
            "package": self.package,
        }
        if self.directory is not None:
            data["directory"] = self.directory
        data.update(_workers_to_dict(self.workers))
        return data


@dataclass
class ProjectConfiguration:
    """Optional project-wide defaults plus an ordered list of targets."""

    targets: List[TargetConfiguration] = field(default_factory=list)
    defaults: Optional[TargetDefaultsConfiguration] = None

    def get_target(self, target_id: str) -> Optional[TargetConfiguration]:
        return next((t for t in self.targets if t.id == target_id), None)

    def copy(self) -> "ProjectConfiguration":
        return copy.deepcopy(self)


# ============================================================================
# Parse / serialize
# ============================================================================

DEFAULT_CONFIGURATION_DATA: Final[Dict[str, Any]] = {
    "targets": [
        {
            "id": "default",
            "name": "ECP5 - LFE5U-25 - caBGA381",
            "vendor": "lattice",
            "family": "ecp5",
            "device": "lfe5u-25",
            "package": "caBGA381",
        }
    ]
}


def validate_configuration(raw: Any) -> Tuple[Optional[ProjectConfiguration], ValidationResult]:
    """Validate raw data, returning the parsed configuration and all findings.

    The configuration is None whenever the result is invalid.
    """
    result = ValidationResult()
    outcome = RequiredFieldsValidator(["targets"], "configuration").validate(raw)
    if not outcome.valid:
        result.merge(outcome)
        return None, result

    targets: List[TargetConfiguration] = []
    targets_check = TypeValidator(list, "configuration.targets").validate(raw["targets"])
    result.merge(targets_check)
    if targets_check.valid:
        seen_ids = set()
        for index, raw_target in enumerate(raw["targets"]):
            target = TargetConfiguration.parse(raw_target, f"targets[{index}]", result)
            if target is None:
                continue
            if target.id in seen_ids:
                result.add_error(f'targets[{index}].id: duplicate target id "{target.id}"')
            seen_ids.add(target.id)
            targets.append(target)

    defaults = None
    if raw.get("defaults") is not None:
        defaults = TargetDefaultsConfiguration.parse(raw["defaults"], "defaults", result)

    if not result.valid:
        return None, result
    return ProjectConfiguration(targets=targets, defaults=defaults), result


def parse_configuration(raw: Any) -> ProjectConfiguration:
    """Parse persisted configuration data into a fully defaulted structure.

    Raises:
        SchemaValidationError: listing every structural problem found
    """
    configuration, result = validate_configuration(raw)
    if configuration is None:
        raise SchemaValidationError(result.errors)
    return configuration


def serialize_configuration(configuration: ProjectConfiguration) -> Dict[str, Any]:
    """Return the persisted (camelCase, fully defaulted) shape."""
    data: Dict[str, Any] = {}
    if configuration.defaults is not None:
        data["defaults"] = configuration.defaults.to_dict()
    data["targets"] = [target.to_dict() for target in configuration.targets]
    return data


def default_configuration() -> ProjectConfiguration:
    """Return a fresh copy of the configuration new projects start with."""
    return parse_configuration(copy.deepcopy(DEFAULT_CONFIGURATION_DATA))

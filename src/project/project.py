#!/usr/bin/env python3
"""
Project model.

A Project owns its input files, the output files tool runs produced, and
the configuration. Every mutator runs inside a batch that records which
kinds of change it made; listeners are notified once per kind when the
outermost batch completes.

Output files are flagged stale whenever the inputs or configuration they
were generated from change:

* adding, removing or reclassifying input files expires every output;
* changing one target's settings expires that target's outputs;
* changing project defaults or the whole configuration expires every output.
"""

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
    Union,
)

from ..exceptions import InvalidReferenceError, SchemaValidationError
from ..string_utils import log_debug_safe, log_info_safe
from ..utils.validators import RequiredFieldsValidator, TypeValidator, ValidationResult
from .configuration import (
    ProjectConfiguration,
    TargetConfiguration,
    default_configuration,
    parse_configuration,
    serialize_configuration,
)
from .files import InputFileType, ProjectInputFile, ProjectOutputFile

logger = logging.getLogger(__name__)


class ProjectEvent(Enum):
    """Kinds of change a mutator may declare."""

    INPUT_FILES = "inputFiles"
    OUTPUT_FILES = "outputFiles"
    CONFIGURATION = "configuration"


@dataclass
class ProjectEvents:
    """Optional listeners, each called with the current state of what changed."""

    on_input_file_change: Optional[Callable[[List[ProjectInputFile]], None]] = None
    on_output_file_change: Optional[Callable[[List[ProjectOutputFile]], None]] = None
    on_configuration_change: Optional[Callable[[ProjectConfiguration], None]] = None


InputFileSpec = Union[str, ProjectInputFile, Tuple[str, Union[str, InputFileType]]]
OutputFileSpec = Union[str, ProjectOutputFile, Tuple[str, Optional[str]]]
TargetSetter = Callable[..., None]


def _to_input_file(spec: InputFileSpec) -> ProjectInputFile:
    if isinstance(spec, ProjectInputFile):
        return ProjectInputFile(spec.path, spec.type)
    if isinstance(spec, str):
        return ProjectInputFile(spec)
    path, file_type = spec
    return ProjectInputFile(path, InputFileType(file_type))


def _to_output_file(spec: OutputFileSpec) -> Tuple[str, Optional[str]]:
    if isinstance(spec, ProjectOutputFile):
        return spec.path, spec.target_id
    if isinstance(spec, str):
        return spec, None
    return spec[0], spec[1]


class Project:
    """An HDL project: sources, generated artifacts and build configuration."""

    def __init__(
        self,
        name: str,
        input_files: Iterable[ProjectInputFile] = (),
        output_files: Iterable[ProjectOutputFile] = (),
        configuration: Optional[ProjectConfiguration] = None,
        events: Optional[ProjectEvents] = None,
    ):
        self._name = name
        self._input_files: List[ProjectInputFile] = []
        self._output_files: List[ProjectOutputFile] = []
        self._configuration = configuration or default_configuration()
        self._events = events or ProjectEvents()

        self._batch_depth = 0
        self._pending: Set[ProjectEvent] = set()

        for f in input_files:
            if not self.has_input_file(f.path):
                self._input_files.append(ProjectInputFile(f.path, f.type))
        self._input_files.sort(key=lambda f: f.path)

        for f in output_files:
            if not self.has_output_file(f.path):
                self._output_files.append(ProjectOutputFile(f.path, f.target_id, f.stale))
        self._output_files.sort(key=lambda f: f.path)

        self._unset_lingering_target_ids()
        self._pending.clear()

    # ------------------------------------------------------------------
    # Batching
    # ------------------------------------------------------------------

    @contextmanager
    def batch(self, *events: ProjectEvent) -> Iterator["Project"]:
        """Group mutations so listeners are notified once per change kind.

        Batches nest; pending notifications flush when the outermost batch
        exits, including when it exits with an exception.
        """
        self._batch_depth += 1
        self._pending.update(events)
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                self._flush()

    def _declare(self, *events: ProjectEvent) -> None:
        self._pending.update(events)

    def _flush(self) -> None:
        pending, self._pending = self._pending, set()
        if not pending:
            return
        log_debug_safe(
            logger,
            "Flushing project changes: {kinds}",
            prefix="PROJECT",
            kinds=", ".join(sorted(e.value for e in pending)),
        )
        if ProjectEvent.INPUT_FILES in pending and self._events.on_input_file_change:
            self._events.on_input_file_change(self.get_input_files())
        if ProjectEvent.OUTPUT_FILES in pending and self._events.on_output_file_change:
            self._events.on_output_file_change(self.get_output_files())
        if ProjectEvent.CONFIGURATION in pending and self._events.on_configuration_change:
            self._events.on_configuration_change(self._configuration)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_name(self) -> str:
        return self._name

    def get_input_files(self) -> List[ProjectInputFile]:
        return list(self._input_files)

    def has_input_file(self, path: str) -> bool:
        return self.get_input_file(path) is not None

    def get_input_file(self, path: str) -> Optional[ProjectInputFile]:
        return next((f for f in self._input_files if f.path == path), None)

    def get_output_files(self) -> List[ProjectOutputFile]:
        return list(self._output_files)

    def has_output_file(self, path: str) -> bool:
        return self.get_output_file(path) is not None

    def get_output_file(self, path: str) -> Optional[ProjectOutputFile]:
        return next((f for f in self._output_files if f.path == path), None)

    def get_target_output_files(self, target_id: str) -> List[ProjectOutputFile]:
        return [f for f in self._output_files if f.target_id == target_id]

    def get_configuration(self) -> ProjectConfiguration:
        return self._configuration

    def get_target(self, target_id: str) -> Optional[TargetConfiguration]:
        return self._configuration.get_target(target_id)

    # ------------------------------------------------------------------
    # Input files
    # ------------------------------------------------------------------

    def add_input_files(self, files: Iterable[InputFileSpec]) -> List[ProjectInputFile]:
        """Add files not already present (type defaults to ``design``).

        Returns the files that were actually added.
        """
        new_files = [_to_input_file(spec) for spec in files]
        with self.batch():
            added: List[ProjectInputFile] = []
            for f in new_files:
                if self.has_input_file(f.path) or any(a.path == f.path for a in added):
                    continue
                added.append(f)
            if added:
                self._input_files.extend(added)
                self._input_files.sort(key=lambda f: f.path)
                self._declare(ProjectEvent.INPUT_FILES)
                self._expire(None)
        return added

    def remove_input_files(self, paths: Iterable[str]) -> None:
        paths = set(paths)
        with self.batch():
            remaining = [f for f in self._input_files if f.path not in paths]
            if len(remaining) != len(self._input_files):
                self._input_files = remaining
                self._declare(ProjectEvent.INPUT_FILES)
                self._expire(None)

    def set_input_file_type(self, path: str, file_type: Union[str, InputFileType]) -> None:
        file_type = InputFileType(file_type)
        f = self.get_input_file(path)
        if f is None:
            raise InvalidReferenceError("input file", path)
        with self.batch():
            if f.type != file_type:
                f.type = file_type
                self._declare(ProjectEvent.INPUT_FILES)
                self._expire(None)

    # ------------------------------------------------------------------
    # Output files
    # ------------------------------------------------------------------

    def add_output_files(self, files: Iterable[OutputFileSpec]) -> None:
        """Register produced files. Existing entries are re-owned and refreshed.

        Raises:
            InvalidReferenceError: if a target id is not in the configuration
        """
        entries = [_to_output_file(spec) for spec in files]
        for _, target_id in entries:
            if target_id is not None and self.get_target(target_id) is None:
                raise InvalidReferenceError("target", target_id)

        with self.batch(ProjectEvent.OUTPUT_FILES):
            for path, target_id in entries:
                existing = self.get_output_file(path)
                if existing is not None:
                    existing.target_id = target_id
                    existing.stale = False
                else:
                    self._output_files.append(ProjectOutputFile(path, target_id))
            self._output_files.sort(key=lambda f: f.path)

    def remove_output_files(self, paths: Iterable[str]) -> None:
        paths = set(paths)
        with self.batch():
            remaining = [f for f in self._output_files if f.path not in paths]
            if len(remaining) != len(self._output_files):
                self._output_files = remaining
                self._declare(ProjectEvent.OUTPUT_FILES)

    def expire_output_files(self, target_id: Optional[str] = None) -> None:
        """Mark outputs stale: all of them, or only those owned by ``target_id``."""
        with self.batch():
            self._expire(target_id)

    def _expire(self, target_id: Optional[str]) -> None:
        changed = False
        for f in self._output_files:
            if target_id is not None and f.target_id != target_id:
                continue
            if not f.stale:
                f.stale = True
                changed = True
        if changed:
            self._declare(ProjectEvent.OUTPUT_FILES)

    def _unset_lingering_target_ids(self) -> None:
        for f in self._output_files:
            if f.target_id is not None and self.get_target(f.target_id) is None:
                f.target_id = None
                self._declare(ProjectEvent.OUTPUT_FILES)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def update_configuration(self, changes: Mapping[str, Any]) -> None:
        """Replace top-level configuration keys (persisted shape) and revalidate.

        Raises:
            SchemaValidationError: if the resulting configuration is invalid;
                the project is left unchanged
        """
        data = serialize_configuration(self._configuration)
        data.update(changes)
        configuration = parse_configuration(data)

        with self.batch(ProjectEvent.CONFIGURATION):
            self._configuration = configuration
            self._unset_lingering_target_ids()
            self._expire(None)

    def add_target(self, target: TargetConfiguration) -> None:
        if self.get_target(target.id) is not None:
            raise SchemaValidationError([f'duplicate target id "{target.id}"'])
        with self.batch(ProjectEvent.CONFIGURATION):
            self._configuration.targets.append(target)

    def remove_target(self, target_id: str) -> None:
        target = self.get_target(target_id)
        if target is None:
            raise InvalidReferenceError("target", target_id)
        with self.batch(ProjectEvent.CONFIGURATION):
            self._configuration.targets.remove(target)
            self._unset_lingering_target_ids()

    def update_target_setting(self, target_id: str, setter: TargetSetter, *args: Any) -> None:
        """Apply a setter from ``project.settings`` to one target.

        Example:
            >>> project.update_target_setting("default", set_flasher_board, "ulx3s")
        """
        if self.get_target(target_id) is None:
            raise InvalidReferenceError("target", target_id)
        with self.batch():
            setter(self._configuration, target_id, *args)
            self._declare(ProjectEvent.CONFIGURATION)
            self._expire(target_id)

    def update_default_setting(self, setter: TargetSetter, *args: Any) -> None:
        """Apply a project-defaults setter; affects every target."""
        with self.batch():
            setter(self._configuration, *args)
            self._declare(ProjectEvent.CONFIGURATION)
            self._expire(None)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def serialize(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "inputFiles": [f.to_dict() for f in self._input_files],
            "outputFiles": [f.to_dict() for f in self._output_files],
            "configuration": serialize_configuration(self._configuration),
        }

    @classmethod
    def deserialize(
        cls, data: Any, events: Optional[ProjectEvents] = None
    ) -> "Project":
        """Build a project from its persisted shape, upgrading legacy file lists.

        Raises:
            SchemaValidationError: listing every structural problem found
        """
        result = ValidationResult()
        result.merge(RequiredFieldsValidator(["name"], "project").validate(data))
        if not result.valid:
            raise SchemaValidationError(result.errors, "Failed to parse project file")
        result.merge(TypeValidator(str, "project.name").validate(data["name"]))

        input_files = _parse_file_list(
            data.get("inputFiles"), "inputFiles", ProjectInputFile.from_data, result
        )
        output_files = _parse_file_list(
            data.get("outputFiles"), "outputFiles", ProjectOutputFile.from_data, result
        )
        if not result.valid:
            raise SchemaValidationError(result.errors, "Failed to parse project file")

        raw_configuration = data.get("configuration")
        configuration = (
            default_configuration()
            if raw_configuration is None
            else parse_configuration(raw_configuration)
        )
        return cls(data["name"], input_files, output_files, configuration, events)

    @classmethod
    def load_from_data(cls, raw: bytes, events: Optional[ProjectEvents] = None) -> "Project":
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SchemaValidationError(
                [str(e)], "Project file is not valid UTF-8 encoded JSON"
            ) from e
        project = cls.deserialize(data, events)
        log_info_safe(
            logger,
            "Loaded project {name} ({inputs} input file(s), {targets} target(s))",
            prefix="PROJECT",
            name=project.get_name(),
            inputs=len(project.get_input_files()),
            targets=len(project.get_configuration().targets),
        )
        return project

    @staticmethod
    def store_to_data(project: "Project") -> bytes:
        return json.dumps(project.serialize(), indent=4).encode("utf-8")


def _parse_file_list(
    raw: Any,
    path: str,
    parse: Callable[[Any, str, ValidationResult], Any],
    result: ValidationResult,
) -> List[Any]:
    if raw is None:
        return []
    outcome = TypeValidator(list, path).validate(raw)
    if not outcome.valid:
        result.merge(outcome)
        return []
    parsed = (parse(item, f"{path}[{index}]", result) for index, item in enumerate(raw))
    return [item for item in parsed if item is not None]


def create_project(name: str, input_files: Sequence[InputFileSpec] = ()) -> Project:
    """New project with the default configuration."""
    project = Project(name)
    project.add_input_files(input_files)
    return project

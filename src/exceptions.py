#!/usr/bin/env python3
"""
Exception hierarchy for EDAcation.

Every error raised while parsing a project or generating a pipeline derives
from EDAcationError so callers (the CLI, editors) can report it uniformly.
"""

from typing import List, Optional, Sequence

from .string_utils import safe_format


class EDAcationError(Exception):
    """Base exception for all EDAcation errors."""


class SchemaValidationError(EDAcationError):
    """Raised when persisted project configuration is malformed."""

    def __init__(self, errors: Sequence[str], message: Optional[str] = None):
        self.errors: List[str] = list(errors)
        if message is None:
            message = safe_format(
                "Failed to parse project configuration: {errors}",
                errors="; ".join(self.errors),
            )
        super().__init__(message)


class InvalidReferenceError(EDAcationError):
    """Raised when a vendor, family, device, package or target id is unknown."""

    def __init__(self, kind: str, ref: str, context: Optional[str] = None):
        self.kind = kind
        self.ref = ref
        self.context = context
        template = 'Unknown {kind} "{ref}"'
        if context:
            template += " in {context}"
        super().__init__(safe_format(template, kind=kind, ref=ref, context=context))


class UnsupportedArchitectureError(EDAcationError):
    """Raised when a tool has no generation rule for an architecture."""

    def __init__(self, tool: str, architecture: str):
        self.tool = tool
        self.architecture = architecture
        super().__init__(
            safe_format(
                'Architecture "{architecture}" is currently not supported by {tool}.',
                architecture=architecture,
                tool=tool,
            )
        )


class UnsupportedPackageError(EDAcationError):
    """Raised when a device package has no tool-specific translation."""

    def __init__(self, package: str, tool: str = "nextpnr"):
        self.package = package
        self.tool = tool
        super().__init__(
            safe_format(
                'Package "{package}" is currently not supported by {tool}.',
                package=package,
                tool=tool,
            )
        )


class MissingTopLevelModuleError(EDAcationError):
    """Raised when VHDL synthesis is requested without a top-level module."""

    def __init__(self, target_id: Optional[str] = None):
        self.target_id = target_id
        message = "Top level module must be defined when synthesizing VHDL"
        if target_id:
            message = safe_format(
                '{message} (target "{target}", option yosys.topLevelModule)',
                message=message,
                target=target_id,
            )
        super().__init__(message)


class MissingTestbenchError(EDAcationError):
    """Raised when no testbench can be determined for simulation."""

    def __init__(self, target_id: Optional[str] = None):
        self.target_id = target_id
        super().__init__(
            safe_format(
                'No testbench file configured or found for target "{target}". '
                "Mark an input file as testbench or set iverilog.testbenchFile.",
                target=target_id or "?",
            )
        )


class ScriptRenderError(EDAcationError):
    """Raised when a step command script cannot be rendered."""


class ToolExecutionError(EDAcationError):
    """Raised by the execution layer when an external tool fails."""

    def __init__(self, tool: str, returncode: Optional[int], message: Optional[str] = None):
        self.tool = tool
        self.returncode = returncode
        if message is None:
            message = safe_format(
                'Tool "{tool}" failed with exit code {code}',
                tool=tool,
                code=returncode,
            )
        super().__init__(message)


__all__ = [
    "EDAcationError",
    "SchemaValidationError",
    "InvalidReferenceError",
    "UnsupportedArchitectureError",
    "UnsupportedPackageError",
    "MissingTopLevelModuleError",
    "MissingTestbenchError",
    "ScriptRenderError",
    "ToolExecutionError",
]

"""Project model, configuration schema, override resolution and tool generators."""

from .configuration import (
    FlasherOptions,
    IVerilogOptions,
    NextpnrOptions,
    ProjectConfiguration,
    TargetConfiguration,
    TargetDefaultsConfiguration,
    TargetValueListConfiguration,
    ValueListConfiguration,
    WorkerConfiguration,
    YosysOptions,
    default_configuration,
    parse_configuration,
    serialize_configuration,
    validate_configuration,
)
from .files import InputFileType, ProjectInputFile, ProjectOutputFile
from .flasher import get_flasher_worker_options
from .iverilog import get_iverilog_worker_options
from .nextpnr import get_nextpnr_worker_options
from .project import Project, ProjectEvent, ProjectEvents, create_project
from .target import (
    get_combined,
    get_default_options,
    get_options,
    get_target,
    get_target_file,
    resolve_target_device,
)
from .worker import WorkerOptions, WorkerStep
from .yosys import get_yosys_rtl_worker_options, get_yosys_worker_options

# Tool command name -> pipeline generator
WORKER_GENERATORS = {
    "yosys": get_yosys_worker_options,
    "yosys-rtl": get_yosys_rtl_worker_options,
    "nextpnr": get_nextpnr_worker_options,
    "iverilog": get_iverilog_worker_options,
    "flasher": get_flasher_worker_options,
}

__all__ = [
    "FlasherOptions",
    "IVerilogOptions",
    "InputFileType",
    "NextpnrOptions",
    "Project",
    "ProjectConfiguration",
    "ProjectEvent",
    "ProjectEvents",
    "ProjectInputFile",
    "ProjectOutputFile",
    "TargetConfiguration",
    "TargetDefaultsConfiguration",
    "TargetValueListConfiguration",
    "ValueListConfiguration",
    "WORKER_GENERATORS",
    "WorkerConfiguration",
    "WorkerOptions",
    "WorkerStep",
    "YosysOptions",
    "create_project",
    "default_configuration",
    "get_combined",
    "get_default_options",
    "get_flasher_worker_options",
    "get_iverilog_worker_options",
    "get_nextpnr_worker_options",
    "get_options",
    "get_target",
    "get_target_file",
    "get_yosys_rtl_worker_options",
    "get_yosys_worker_options",
    "parse_configuration",
    "resolve_target_device",
    "serialize_configuration",
    "validate_configuration",
]

#!/usr/bin/env python3
"""
Yosys pipeline generation.

Two pipelines are generated from the same design sources:

* synthesis: a ``prepare`` step that elaborates the design into a
  pre-synthesis netlist, then a ``synth`` step running the architecture's
  synthesis pass and writing ``<arch>.json`` for nextpnr.
* RTL: a single ``rtl`` step producing an unmapped netlist plus JSON
  statistics, used for schematic viewing.

Every step is a Yosys command script; the execution layer writes it to a
file and passes that file to ``yosys``.
"""

import logging
from typing import List, Optional, Sequence

from ..constants import (
    FILE_EXTENSIONS_HDL,
    FILE_EXTENSIONS_VERILOG,
    FILE_EXTENSIONS_VHDL,
    file_extension,
)
from ..exceptions import MissingTopLevelModuleError
from ..string_utils import log_debug_safe
from .configuration import ProjectConfiguration, TargetConfiguration, YosysOptions
from .files import InputFileType, ProjectInputFile
from .target import (
    get_combined,
    get_default_options,
    get_options,
    get_target,
    get_target_file,
    resolve_target_device,
)
from .worker import WorkerOptions, WorkerStep

logger = logging.getLogger(__name__)

WORKER_ID = "yosys"
TOOL = "yosys"

DEFAULT_OPTIONS = YosysOptions(optimize=True)

PRESYNTH_FILE = "presynth.yosys.json"
RTL_FILE = "rtl.yosys.json"
STATS_FILE = "stats.yosys.json"


def get_yosys_default_options(configuration: ProjectConfiguration) -> YosysOptions:
    return get_default_options(configuration, WORKER_ID, DEFAULT_OPTIONS)


def get_yosys_options(configuration: ProjectConfiguration, target_id: str) -> YosysOptions:
    return get_options(configuration, target_id, WORKER_ID, DEFAULT_OPTIONS)


def get_netlist_file(target: TargetConfiguration, architecture: str) -> str:
    return get_target_file(target, f"{architecture}.json")


def get_design_files(project_input_files: Sequence[ProjectInputFile]) -> List[str]:
    """HDL design sources, in project order. Testbenches are not synthesizable."""
    return [
        f.path
        for f in project_input_files
        if f.type == InputFileType.DESIGN and file_extension(f.path) in FILE_EXTENSIONS_HDL
    ]


# ----------------------------------------------------------------------------
# Command builders
# ----------------------------------------------------------------------------


def get_file_ingest_commands(
    input_files: Sequence[str], options: YosysOptions, target_id: Optional[str] = None
) -> List[str]:
    """Commands that read every source and set up the design hierarchy.

    Raises:
        MissingTopLevelModuleError: if VHDL sources are present without a
            configured top-level module
    """
    commands: List[str] = []

    vhdl_files = [f for f in input_files if file_extension(f) in FILE_EXTENSIONS_VHDL]
    if vhdl_files:
        if not options.top_level_module:
            raise MissingTopLevelModuleError(target_id)
        commands.append("plugin -i ghdl")
        commands.append(f"ghdl {' '.join(vhdl_files)} -e {options.top_level_module}")

    for f in input_files:
        if file_extension(f) in FILE_EXTENSIONS_VERILOG:
            commands.append(f'read_verilog -sv "{f}"')

    if options.top_level_module:
        commands.append(f"hierarchy -top {options.top_level_module}")
    else:
        commands.append("hierarchy -auto-top")
    return commands


def generate_yosys_rtl_commands(
    input_files: Sequence[str], options: YosysOptions, target: TargetConfiguration
) -> List[str]:
    return [
        *get_file_ingest_commands(input_files, options, target.id),
        "proc;",
        "opt;",
        "memory -nomap;",
        "wreduce -memx;",
        "opt -full;",
        f'tee -q -o "{get_target_file(target, STATS_FILE)}" stat -json -width *;',
        f'write_json "{get_target_file(target, RTL_FILE)}";',
    ]


def generate_yosys_prepare_commands(
    input_files: Sequence[str], options: YosysOptions, target: TargetConfiguration
) -> List[str]:
    commands = [*get_file_ingest_commands(input_files, options, target.id), "proc;"]
    if options.optimize:
        commands.append("opt;")
    commands.append(f'write_json "{get_target_file(target, PRESYNTH_FILE)}";')
    return commands


def generate_yosys_synth_commands(
    architecture: str, target: TargetConfiguration, netlist_file: str
) -> List[str]:
    commands = [f'read_json "{get_target_file(target, PRESYNTH_FILE)}";']
    if architecture == "generic":
        commands.append("synth;")
        commands.append(f'write_json "{netlist_file}";')
    else:
        commands.append(f'synth_{architecture} -json "{netlist_file}";')
    return commands


# ----------------------------------------------------------------------------
# Pipelines
# ----------------------------------------------------------------------------


def get_yosys_worker_options(
    configuration: ProjectConfiguration,
    target_id: str,
    project_input_files: Sequence[ProjectInputFile],
) -> WorkerOptions:
    """Synthesis pipeline (``prepare`` then ``synth``) for one target."""
    target = get_target(configuration, target_id)
    architecture = resolve_target_device(target).architecture
    options = get_yosys_options(configuration, target_id)

    input_files = get_combined(
        configuration, target_id, WORKER_ID, "inputFiles", get_design_files(project_input_files)
    )
    generated_netlist = get_netlist_file(target, architecture)
    output_files = get_combined(
        configuration,
        target_id,
        WORKER_ID,
        "outputFiles",
        [generated_netlist, get_target_file(target, PRESYNTH_FILE)],
    )
    netlist_file = output_files[0] if output_files else generated_netlist

    prepare = WorkerStep(
        id="prepare",
        tool=TOOL,
        commands=generate_yosys_prepare_commands(input_files, options, target),
    )
    synth = WorkerStep(
        id="synth",
        tool=TOOL,
        commands=get_combined(
            configuration,
            target_id,
            WORKER_ID,
            "commands",
            generate_yosys_synth_commands(architecture, target, netlist_file),
        ),
    )

    log_debug_safe(
        logger,
        "Generated synthesis for {target} ({arch}): {inputs} input(s), netlist {netlist}",
        prefix="YOSYS",
        target=target_id,
        arch=architecture,
        inputs=len(input_files),
        netlist=netlist_file,
    )
    return WorkerOptions(
        input_files=input_files,
        output_files=output_files,
        target=target,
        options=options,
        steps=[prepare, synth],
    )


def get_yosys_rtl_worker_options(
    configuration: ProjectConfiguration,
    target_id: str,
    project_input_files: Sequence[ProjectInputFile],
) -> WorkerOptions:
    """RTL elaboration pipeline (single ``rtl`` step) for one target."""
    target = get_target(configuration, target_id)
    # Device is resolved for validation only; RTL output is architecture independent
    resolve_target_device(target)
    options = get_yosys_options(configuration, target_id)

    input_files = get_combined(
        configuration, target_id, WORKER_ID, "inputFiles", get_design_files(project_input_files)
    )
    output_files = get_combined(
        configuration,
        target_id,
        WORKER_ID,
        "outputFiles",
        [get_target_file(target, STATS_FILE), get_target_file(target, RTL_FILE)],
    )

    rtl = WorkerStep(
        id="rtl",
        tool=TOOL,
        commands=generate_yosys_rtl_commands(input_files, options, target),
    )
    log_debug_safe(
        logger,
        "Generated RTL elaboration for {target}: {inputs} input(s)",
        prefix="YOSYS",
        target=target_id,
        inputs=len(input_files),
    )
    return WorkerOptions(
        input_files=input_files,
        output_files=output_files,
        target=target,
        options=options,
        steps=[rtl],
    )

#!/usr/bin/env python3
"""Icarus Verilog simulation: compile the design with a testbench, then run it."""

import logging
import posixpath
from typing import List, Optional, Sequence

from ..constants import FILE_EXTENSIONS_VERILOG, file_extension
from ..exceptions import MissingTestbenchError
from ..string_utils import log_debug_safe
from ..utils.args import parse_arguments
from .configuration import IVerilogOptions, ProjectConfiguration
from .files import InputFileType, ProjectInputFile
from .target import get_combined, get_default_options, get_options, get_target, get_target_file
from .worker import WorkerOptions, WorkerStep

logger = logging.getLogger(__name__)

WORKER_ID = "iverilog"

DEFAULT_OPTIONS = IVerilogOptions()

SIMULATOR_FILE = "simulator.vvp"


def get_iverilog_default_options(configuration: ProjectConfiguration) -> IVerilogOptions:
    return get_default_options(configuration, WORKER_ID, DEFAULT_OPTIONS)


def get_iverilog_options(configuration: ProjectConfiguration, target_id: str) -> IVerilogOptions:
    return get_options(configuration, target_id, WORKER_ID, DEFAULT_OPTIONS)


def find_testbench(
    project_input_files: Sequence[ProjectInputFile], options: IVerilogOptions
) -> Optional[str]:
    """Configured testbench, else the first testbench-typed Verilog source."""
    if options.testbench_file:
        return options.testbench_file
    for f in project_input_files:
        if f.type == InputFileType.TESTBENCH and file_extension(f.path) in FILE_EXTENSIONS_VERILOG:
            return f.path
    return None


def get_waveform_file(testbench: str) -> str:
    """``$dumpfile`` name by convention: the testbench stem plus ``.vcd``."""
    stem = posixpath.splitext(posixpath.basename(testbench))[0]
    return f"{stem}.vcd"


def get_iverilog_worker_options(
    configuration: ProjectConfiguration,
    target_id: str,
    project_input_files: Sequence[ProjectInputFile],
) -> WorkerOptions:
    """Simulation pipeline (``compile`` then ``run``) for one target.

    Raises:
        MissingTestbenchError: if no testbench is configured or typed
    """
    target = get_target(configuration, target_id)
    options = get_iverilog_options(configuration, target_id)

    testbench = find_testbench(project_input_files, options)
    if testbench is None:
        raise MissingTestbenchError(target_id)

    design_files = [
        f.path
        for f in project_input_files
        if f.type == InputFileType.DESIGN
        and file_extension(f.path) in FILE_EXTENSIONS_VERILOG
        and f.path != testbench
    ]
    input_files = get_combined(
        configuration, target_id, WORKER_ID, "inputFiles", [*design_files, testbench]
    )

    simulator_file = get_target_file(target, SIMULATOR_FILE)
    output_files = get_combined(
        configuration,
        target_id,
        WORKER_ID,
        "outputFiles",
        [simulator_file, get_waveform_file(testbench)],
    )

    compile_arguments = get_combined(
        configuration,
        target_id,
        WORKER_ID,
        "arguments",
        ["-o", simulator_file, *input_files],
        parse=parse_arguments,
    )
    steps: List[WorkerStep] = [
        WorkerStep(id="compile", tool="iverilog", arguments=compile_arguments),
        WorkerStep(id="run", tool="vvp", arguments=[simulator_file]),
    ]

    log_debug_safe(
        logger,
        "Generated simulation for {target}: testbench {testbench}, {count} design file(s)",
        prefix="IVERILOG",
        target=target_id,
        testbench=testbench,
        count=len(design_files),
    )
    return WorkerOptions(
        input_files=input_files,
        output_files=output_files,
        target=target,
        options=options,
        steps=steps,
    )

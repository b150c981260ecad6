#!/usr/bin/env python3
"""
nextpnr place-and-route generation.

The invoked binary is ``nextpnr-<architecture>``. Device selection flags
differ per architecture; everything after them (netlist input, optional
SVG renders and the routed JSON) is common.
"""

import logging
from typing import Dict, Final, List, Optional, Sequence, Tuple

from ..devices import ResolvedDevice
from ..exceptions import UnsupportedArchitectureError, UnsupportedPackageError
from ..string_utils import log_debug_safe
from ..utils.args import parse_arguments
from .configuration import NextpnrOptions, ProjectConfiguration, TargetConfiguration
from .files import ProjectInputFile
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

WORKER_ID = "nextpnr"

DEFAULT_OPTIONS = NextpnrOptions(placed_svg=True, routed_svg=True, routed_json=True)

PLACED_SVG_FILE = "placed.svg"
ROUTED_SVG_FILE = "routed.svg"
ROUTED_JSON_FILE = "routed.nextpnr.json"

# Catalog package id -> nextpnr-nexus package code
NEXUS_PACKAGES: Final[Dict[str, str]] = {
    "WLCSP72": "UWG72",
    "QFN72": "SG72",
    "csfBGA121": "MG121",
    "caBGA256": "BG256",
    "csfBGA289": "MG289",
    "caBGA400": "BG400",
}

NEXUS_SPEED_GRADE = "7"
GOWIN_SPEED_GRADE = "C5/I4"

# Architecture -> pin constraint flag, and -> (flag, file) of the textual bitstream
PIN_CONSTRAINT_FLAGS: Final[Dict[str, str]] = {"ecp5": "--lpf", "ice40": "--pcf"}
BITSTREAM_OUTPUTS: Final[Dict[str, Tuple[str, str]]] = {
    "ecp5": ("--textcfg", "ecp5.config"),
    "ice40": ("--asc", "ice40.asc"),
}


def get_nextpnr_tool(architecture: str) -> str:
    return f"nextpnr-{architecture}"


def get_nextpnr_default_options(configuration: ProjectConfiguration) -> NextpnrOptions:
    return get_default_options(configuration, WORKER_ID, DEFAULT_OPTIONS)


def get_nextpnr_options(configuration: ProjectConfiguration, target_id: str) -> NextpnrOptions:
    return get_options(configuration, target_id, WORKER_ID, DEFAULT_OPTIONS)


def get_device_arguments(resolved: ResolvedDevice) -> List[str]:
    """Architecture-specific device and package selection flags.

    Raises:
        UnsupportedPackageError: nexus package without a nextpnr code
        UnsupportedArchitectureError: architecture without a rule
    """
    architecture = resolved.architecture
    device = resolved.device.device
    package = resolved.package.id

    if architecture == "ecp5":
        return [f"--{device}", "--package", package.upper()]
    if architecture == "ice40":
        return [f"--{device}", "--package", package]
    if architecture == "gowin":
        return ["--device", f"{device.replace('-', '-UV', 1)}{package}{GOWIN_SPEED_GRADE}"]
    if architecture == "nexus":
        code = NEXUS_PACKAGES.get(package)
        if code is None:
            raise UnsupportedPackageError(package)
        return ["--device", f"{device}-{NEXUS_SPEED_GRADE}{code}C"]
    if architecture == "generic":
        return []
    raise UnsupportedArchitectureError("nextpnr", architecture)


def generate_nextpnr_arguments(
    resolved: ResolvedDevice,
    target: TargetConfiguration,
    options: NextpnrOptions,
    netlist_file: str,
) -> List[str]:
    architecture = resolved.architecture
    arguments = get_device_arguments(resolved)

    bitstream = BITSTREAM_OUTPUTS.get(architecture)
    if bitstream is not None:
        flag, name = bitstream
        arguments.extend([flag, get_target_file(target, name)])

    pin_flag = PIN_CONSTRAINT_FLAGS.get(architecture)
    if options.pin_config_file:
        if pin_flag is not None:
            arguments.extend([pin_flag, options.pin_config_file])
        else:
            log_debug_safe(
                logger,
                "Ignoring pin constraint file {file}: not supported for {arch}",
                prefix="NEXTPNR",
                file=options.pin_config_file,
                arch=architecture,
            )

    arguments.extend(["--json", netlist_file])
    if options.placed_svg:
        arguments.extend(["--placed-svg", get_target_file(target, PLACED_SVG_FILE)])
    if options.routed_svg:
        arguments.extend(["--routed-svg", get_target_file(target, ROUTED_SVG_FILE)])
    if options.routed_json:
        arguments.extend(["--write", get_target_file(target, ROUTED_JSON_FILE)])
    return arguments


def generate_nextpnr_output_files(
    architecture: str, target: TargetConfiguration, options: NextpnrOptions
) -> List[str]:
    output_files: List[str] = []
    bitstream = BITSTREAM_OUTPUTS.get(architecture)
    if bitstream is not None:
        output_files.append(get_target_file(target, bitstream[1]))
    if options.placed_svg:
        output_files.append(get_target_file(target, PLACED_SVG_FILE))
    if options.routed_svg:
        output_files.append(get_target_file(target, ROUTED_SVG_FILE))
    if options.routed_json:
        output_files.append(get_target_file(target, ROUTED_JSON_FILE))
    return output_files


def get_nextpnr_worker_options(
    configuration: ProjectConfiguration,
    target_id: str,
    project_input_files: Optional[Sequence[ProjectInputFile]] = None,
) -> WorkerOptions:
    """Place-and-route pipeline (single ``pnr`` step) for one target.

    The netlist comes from the yosys synthesis output, so project input
    files are not consulted; the parameter keeps all generators uniform.
    """
    target = get_target(configuration, target_id)
    resolved = resolve_target_device(target)
    architecture = resolved.architecture
    options = get_nextpnr_options(configuration, target_id)

    generated_inputs = [get_target_file(target, f"{architecture}.json")]
    if options.pin_config_file and architecture in PIN_CONSTRAINT_FLAGS:
        generated_inputs.append(options.pin_config_file)
    input_files = get_combined(configuration, target_id, WORKER_ID, "inputFiles", generated_inputs)
    netlist_file = input_files[0] if input_files else generated_inputs[0]

    output_files = get_combined(
        configuration,
        target_id,
        WORKER_ID,
        "outputFiles",
        generate_nextpnr_output_files(architecture, target, options),
    )
    arguments = get_combined(
        configuration,
        target_id,
        WORKER_ID,
        "arguments",
        generate_nextpnr_arguments(resolved, target, options, netlist_file),
        parse=parse_arguments,
    )

    log_debug_safe(
        logger,
        "Generated place-and-route for {target} ({arch}): {count} argument(s)",
        prefix="NEXTPNR",
        target=target_id,
        arch=architecture,
        count=len(arguments),
    )
    return WorkerOptions(
        input_files=input_files,
        output_files=output_files,
        target=target,
        options=options,
        steps=[WorkerStep(id="pnr", tool=get_nextpnr_tool(architecture), arguments=arguments)],
    )

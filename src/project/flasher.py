#!/usr/bin/env python3
"""
Bitstream packing and device programming.

The textual place-and-route output is packed into a binary bitstream with
the architecture's packer (``ecppack`` or ``icepack``), then written to the
board with ``openFPGALoader``.
"""

import logging
from typing import Dict, Final, Optional, Sequence, Tuple

from ..exceptions import UnsupportedArchitectureError
from ..string_utils import log_debug_safe
from ..utils.args import parse_arguments
from .configuration import FlasherOptions, ProjectConfiguration
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

WORKER_ID = "flasher"
FLASH_TOOL = "openFPGALoader"

DEFAULT_OPTIONS = FlasherOptions()

# Architecture -> (packer, unpacked file, packed file)
PACKERS: Final[Dict[str, Tuple[str, str, str]]] = {
    "ecp5": ("ecppack", "ecp5.config", "ecp5.bit"),
    "ice40": ("icepack", "ice40.asc", "ice40.bin"),
}


def get_flasher_default_options(configuration: ProjectConfiguration) -> FlasherOptions:
    return get_default_options(configuration, WORKER_ID, DEFAULT_OPTIONS)


def get_flasher_options(configuration: ProjectConfiguration, target_id: str) -> FlasherOptions:
    return get_options(configuration, target_id, WORKER_ID, DEFAULT_OPTIONS)


def get_flasher_worker_options(
    configuration: ProjectConfiguration,
    target_id: str,
    project_input_files: Optional[Sequence[ProjectInputFile]] = None,
) -> WorkerOptions:
    """Pack then flash pipeline (``pack``, ``flash``) for one target.

    Raises:
        UnsupportedArchitectureError: for architectures without a packer
    """
    target = get_target(configuration, target_id)
    architecture = resolve_target_device(target).architecture
    options = get_flasher_options(configuration, target_id)

    if architecture not in PACKERS:
        raise UnsupportedArchitectureError("flasher", architecture)
    packer, unpacked_name, packed_name = PACKERS[architecture]
    unpacked_file = get_target_file(target, unpacked_name)
    packed_file = get_target_file(target, packed_name)

    input_files = get_combined(configuration, target_id, WORKER_ID, "inputFiles", [unpacked_file])
    output_files = get_combined(configuration, target_id, WORKER_ID, "outputFiles", [packed_file])

    packer_arguments = get_combined(
        configuration,
        target_id,
        WORKER_ID,
        "packerArguments",
        [unpacked_file, packed_file],
        parse=parse_arguments,
    )

    generated_flash = ["-b", options.board] if options.board else []
    generated_flash.append(packed_file)
    flasher_arguments = get_combined(
        configuration,
        target_id,
        WORKER_ID,
        "flasherArguments",
        generated_flash,
        parse=parse_arguments,
    )

    log_debug_safe(
        logger,
        "Generated flashing for {target} ({arch}) with {packer}, board {board}",
        prefix="FLASHER",
        target=target_id,
        arch=architecture,
        packer=packer,
        board=options.board or "auto",
    )
    return WorkerOptions(
        input_files=input_files,
        output_files=output_files,
        target=target,
        options=options,
        steps=[
            WorkerStep(id="pack", tool=packer, arguments=packer_arguments),
            WorkerStep(id="flash", tool=FLASH_TOOL, arguments=flasher_arguments),
        ],
    )

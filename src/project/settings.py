#!/usr/bin/env python3
"""
Explicit setters for configuration fields.

One function per settable field. Each setter creates any missing
intermediate blocks (tool block, options, value list) before assigning, and
mutates the configuration it is given in place. Unknown target ids raise
InvalidReferenceError before anything is touched.
"""

from typing import List, Optional, cast

from .configuration import (
    FlasherOptions,
    IVerilogOptions,
    NextpnrOptions,
    ProjectConfiguration,
    TargetDefaultsConfiguration,
    TargetValueListConfiguration,
    ToolOptions,
    ValueListConfiguration,
    WorkerConfiguration,
    YosysOptions,
    get_worker_schema,
)
from .target import get_target


def _target_worker(
    configuration: ProjectConfiguration, target_id: str, worker_id: str
) -> WorkerConfiguration:
    target = get_target(configuration, target_id)
    get_worker_schema(worker_id)
    return target.workers.setdefault(worker_id, WorkerConfiguration())


def _default_worker(configuration: ProjectConfiguration, worker_id: str) -> WorkerConfiguration:
    get_worker_schema(worker_id)
    if configuration.defaults is None:
        configuration.defaults = TargetDefaultsConfiguration()
    return configuration.defaults.workers.setdefault(worker_id, WorkerConfiguration())


def _options(worker: WorkerConfiguration, worker_id: str) -> ToolOptions:
    if worker.options is None:
        worker.options = get_worker_schema(worker_id).options_type()
    return worker.options


def _yosys_options(configuration: ProjectConfiguration, target_id: str) -> YosysOptions:
    worker = _target_worker(configuration, target_id, "yosys")
    return cast(YosysOptions, _options(worker, "yosys"))


def _nextpnr_options(configuration: ProjectConfiguration, target_id: str) -> NextpnrOptions:
    worker = _target_worker(configuration, target_id, "nextpnr")
    return cast(NextpnrOptions, _options(worker, "nextpnr"))


def _iverilog_options(configuration: ProjectConfiguration, target_id: str) -> IVerilogOptions:
    worker = _target_worker(configuration, target_id, "iverilog")
    return cast(IVerilogOptions, _options(worker, "iverilog"))


def _flasher_options(configuration: ProjectConfiguration, target_id: str) -> FlasherOptions:
    worker = _target_worker(configuration, target_id, "flasher")
    return cast(FlasherOptions, _options(worker, "flasher"))


def _target_value_list(
    configuration: ProjectConfiguration, target_id: str, worker_id: str, key: str
) -> TargetValueListConfiguration:
    _check_key(worker_id, key)
    worker = _target_worker(configuration, target_id, worker_id)
    value_list = worker.value_lists.get(key)
    if not isinstance(value_list, TargetValueListConfiguration):
        value_list = TargetValueListConfiguration()
        worker.value_lists[key] = value_list
    return value_list


def _default_value_list(
    configuration: ProjectConfiguration, worker_id: str, key: str
) -> ValueListConfiguration:
    _check_key(worker_id, key)
    worker = _default_worker(configuration, worker_id)
    return worker.value_lists.setdefault(key, ValueListConfiguration())


def _check_key(worker_id: str, key: str) -> None:
    if key not in get_worker_schema(worker_id).value_list_keys:
        raise ValueError(f"{worker_id} has no value list named {key}")


# ----------------------------------------------------------------------------
# Target fields
# ----------------------------------------------------------------------------


def set_target_name(configuration: ProjectConfiguration, target_id: str, name: str) -> None:
    get_target(configuration, target_id).name = name


def set_target_directory(
    configuration: ProjectConfiguration, target_id: str, directory: Optional[str]
) -> None:
    get_target(configuration, target_id).directory = directory


# ----------------------------------------------------------------------------
# Tool options (target level)
# ----------------------------------------------------------------------------


def set_yosys_optimize(
    configuration: ProjectConfiguration, target_id: str, optimize: Optional[bool]
) -> None:
    options = _yosys_options(configuration, target_id)
    options.optimize = optimize


def set_yosys_top_level_module(
    configuration: ProjectConfiguration, target_id: str, module: Optional[str]
) -> None:
    options = _yosys_options(configuration, target_id)
    options.top_level_module = module or None


def set_nextpnr_placed_svg(
    configuration: ProjectConfiguration, target_id: str, enabled: Optional[bool]
) -> None:
    options = _nextpnr_options(configuration, target_id)
    options.placed_svg = enabled


def set_nextpnr_routed_svg(
    configuration: ProjectConfiguration, target_id: str, enabled: Optional[bool]
) -> None:
    options = _nextpnr_options(configuration, target_id)
    options.routed_svg = enabled


def set_nextpnr_routed_json(
    configuration: ProjectConfiguration, target_id: str, enabled: Optional[bool]
) -> None:
    options = _nextpnr_options(configuration, target_id)
    options.routed_json = enabled


def set_nextpnr_pin_config_file(
    configuration: ProjectConfiguration, target_id: str, path: Optional[str]
) -> None:
    options = _nextpnr_options(configuration, target_id)
    options.pin_config_file = path or None


def set_iverilog_testbench_file(
    configuration: ProjectConfiguration, target_id: str, path: Optional[str]
) -> None:
    options = _iverilog_options(configuration, target_id)
    options.testbench_file = path or None


def set_flasher_board(
    configuration: ProjectConfiguration, target_id: str, board: Optional[str]
) -> None:
    options = _flasher_options(configuration, target_id)
    options.board = board or None


# ----------------------------------------------------------------------------
# Value lists
# ----------------------------------------------------------------------------


def set_value_list_use_generated(
    configuration: ProjectConfiguration,
    target_id: str,
    worker_id: str,
    key: str,
    use_generated: bool,
) -> None:
    _target_value_list(configuration, target_id, worker_id, key).use_generated = use_generated


def set_value_list_use_default(
    configuration: ProjectConfiguration,
    target_id: str,
    worker_id: str,
    key: str,
    use_default: bool,
) -> None:
    _target_value_list(configuration, target_id, worker_id, key).use_default = use_default


def set_value_list_values(
    configuration: ProjectConfiguration,
    target_id: str,
    worker_id: str,
    key: str,
    values: List[str],
) -> None:
    _target_value_list(configuration, target_id, worker_id, key).values = list(values)


def set_default_value_list_use_generated(
    configuration: ProjectConfiguration, worker_id: str, key: str, use_generated: bool
) -> None:
    _default_value_list(configuration, worker_id, key).use_generated = use_generated


def set_default_value_list_values(
    configuration: ProjectConfiguration, worker_id: str, key: str, values: List[str]
) -> None:
    _default_value_list(configuration, worker_id, key).values = list(values)

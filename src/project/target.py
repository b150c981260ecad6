#!/usr/bin/env python3
"""
Target lookup and override resolution.

Effective values are computed from three layers: the tool's built-in
defaults (or the list a generator derived from project state), the
project-wide ``defaults`` block, and the target's own block. Resolution is
pure and never raises for absent layers.
"""

import logging
import posixpath
from typing import Callable, List, Optional, Sequence, TypeVar

from ..devices import ResolvedDevice, resolve_device
from ..exceptions import InvalidReferenceError
from ..string_utils import log_debug_safe
from .configuration import (
    ProjectConfiguration,
    TargetConfiguration,
    TargetValueListConfiguration,
    ToolOptions,
    ValueListConfiguration,
)

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=ToolOptions)
ParseFn = Callable[[Sequence[str]], List[str]]


def get_target(configuration: ProjectConfiguration, target_id: str) -> TargetConfiguration:
    """Return the target with ``target_id``.

    Raises:
        InvalidReferenceError: if the project has no such target
    """
    target = configuration.get_target(target_id)
    if target is None:
        raise InvalidReferenceError("target", target_id)
    return target


def get_target_file(target: TargetConfiguration, name: str) -> str:
    """Path of a generated file inside the target's output directory."""
    return posixpath.normpath(posixpath.join(target.directory or ".", name))


def resolve_target_device(target: TargetConfiguration) -> ResolvedDevice:
    """Resolve the target's vendor/family/device/package through the catalog."""
    return resolve_device(target.vendor, target.family, target.device, target.package)


def _worker_options(
    configuration: ProjectConfiguration, target_id: Optional[str], worker_id: str
) -> List[Optional[ToolOptions]]:
    layers: List[Optional[ToolOptions]] = []
    if configuration.defaults is not None:
        worker = configuration.defaults.get_worker(worker_id)
        layers.append(worker.options if worker else None)
    if target_id is not None:
        target = configuration.get_target(target_id)
        worker = target.get_worker(worker_id) if target else None
        layers.append(worker.options if worker else None)
    return layers


def get_default_options(
    configuration: ProjectConfiguration, worker_id: str, builtin: OptionsT
) -> OptionsT:
    """Built-in options overridden by the project-wide defaults only."""
    return builtin.merged(*_worker_options(configuration, None, worker_id))


def get_options(
    configuration: ProjectConfiguration,
    target_id: str,
    worker_id: str,
    builtin: OptionsT,
) -> OptionsT:
    """Effective options: built-in <- project defaults <- target, field by field."""
    return builtin.merged(*_worker_options(configuration, target_id, worker_id))


def _identity(values: Sequence[str]) -> List[str]:
    return list(values)


def get_combined(
    configuration: ProjectConfiguration,
    target_id: str,
    worker_id: str,
    key: str,
    generated: Sequence[str],
    parse: Optional[ParseFn] = None,
) -> List[str]:
    """Effective value list for ``worker_id``/``key`` on a target.

    Order is generated values, then project-default values, then target
    values. ``parse`` tokenizes the user-authored override entries only;
    generated entries are already discrete. Empty entries are dropped.
    """
    parse = parse or _identity

    default_list: Optional[ValueListConfiguration] = None
    if configuration.defaults is not None:
        worker = configuration.defaults.get_worker(worker_id)
        default_list = worker.get_value_list(key) if worker else None

    target_list: Optional[ValueListConfiguration] = None
    target = configuration.get_target(target_id)
    if target is not None:
        worker = target.get_worker(worker_id)
        target_list = worker.get_value_list(key) if worker else None

    if target_list is not None and target_list.use_generated is not None:
        use_generated = target_list.use_generated
    elif default_list is not None:
        use_generated = default_list.use_generated
    else:
        use_generated = True

    use_default = True
    if isinstance(target_list, TargetValueListConfiguration):
        use_default = target_list.use_default

    values: List[str] = []
    if use_generated:
        values.extend(generated)
    if use_default and default_list is not None:
        values.extend(parse(default_list.values))
    if target_list is not None:
        values.extend(parse(target_list.values))

    combined = [value for value in values if value]
    log_debug_safe(
        logger,
        "{worker}.{key} for {target}: {count} value(s) "
        "(generated={use_generated}, default={use_default})",
        prefix="CONFIG",
        worker=worker_id,
        key=key,
        target=target_id,
        count=len(combined),
        use_generated=use_generated,
        use_default=use_default,
    )
    return combined

#!/usr/bin/env python3
"""
Device catalog lookups.

The catalog is a process-wide, read-only table built once at import time
from vendors.VENDOR_DATA. Lookups are pure; an unknown id or a broken
vendor/family/device/package chain raises InvalidReferenceError.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Final, FrozenSet, Mapping, Tuple

from ..exceptions import InvalidReferenceError
from .vendors import VENDOR_DATA

ARCHITECTURES: Final[FrozenSet[str]] = frozenset(
    {"ecp5", "ice40", "gowin", "nexus", "generic"}
)


@dataclass(frozen=True)
class Package:
    """A device package, identified by its vendor-level id."""

    id: str
    name: str
    vendor_id: str


@dataclass(frozen=True)
class Device:
    """An FPGA device within a family.

    ``device`` is the tool-facing device code (e.g. ``25k`` for nextpnr-ecp5).
    """

    id: str
    name: str
    device: str
    packages: Tuple[str, ...]
    vendor_id: str
    family_id: str

    def supports_package(self, package_id: str) -> bool:
        return package_id in self.packages


@dataclass(frozen=True)
class Family:
    """A device family; ``architecture`` selects every generator code path."""

    id: str
    name: str
    architecture: str
    devices: Mapping[str, Device] = field(hash=False)
    vendor_id: str


@dataclass(frozen=True)
class Vendor:
    id: str
    name: str
    packages: Mapping[str, str] = field(hash=False)
    families: Mapping[str, Family] = field(hash=False)


@dataclass(frozen=True)
class ResolvedDevice:
    """A fully resolved (vendor, family, device, package) tuple."""

    vendor: Vendor
    family: Family
    device: Device
    package: Package

    @property
    def architecture(self) -> str:
        return self.family.architecture


def _build_catalog(data: Mapping[str, Dict[str, Any]]) -> Mapping[str, Vendor]:
    vendors: Dict[str, Vendor] = {}
    for vendor_id, vendor_data in data.items():
        families: Dict[str, Family] = {}
        for family_id, family_data in vendor_data["families"].items():
            architecture = family_data["architecture"]
            if architecture not in ARCHITECTURES:
                raise ValueError(
                    f"Family {vendor_id}/{family_id} has unknown architecture {architecture}"
                )
            devices = {
                device_id: Device(
                    id=device_id,
                    name=device_data["name"],
                    device=device_data["device"],
                    packages=tuple(device_data["packages"]),
                    vendor_id=vendor_id,
                    family_id=family_id,
                )
                for device_id, device_data in family_data["devices"].items()
            }
            for device in devices.values():
                unknown = [p for p in device.packages if p not in vendor_data["packages"]]
                if unknown:
                    raise ValueError(
                        f"Device {device.id} lists packages unknown to {vendor_id}: {unknown}"
                    )
            families[family_id] = Family(
                id=family_id,
                name=family_data["name"],
                architecture=architecture,
                devices=MappingProxyType(devices),
                vendor_id=vendor_id,
            )
        vendors[vendor_id] = Vendor(
            id=vendor_id,
            name=vendor_data["name"],
            packages=MappingProxyType(dict(vendor_data["packages"])),
            families=MappingProxyType(families),
        )
    return MappingProxyType(vendors)


VENDORS: Final[Mapping[str, Vendor]] = _build_catalog(VENDOR_DATA)


def get_vendors() -> Mapping[str, Vendor]:
    """Return the read-only vendor table."""
    return VENDORS


def lookup_vendor(vendor_id: str) -> Vendor:
    try:
        return VENDORS[vendor_id]
    except KeyError:
        raise InvalidReferenceError("vendor", vendor_id) from None


def lookup_family(vendor_id: str, family_id: str) -> Family:
    vendor = lookup_vendor(vendor_id)
    try:
        return vendor.families[family_id]
    except KeyError:
        raise InvalidReferenceError(
            "family", family_id, context=f'vendor "{vendor_id}"'
        ) from None


def lookup_device(vendor_id: str, family_id: str, device_id: str) -> Device:
    family = lookup_family(vendor_id, family_id)
    try:
        return family.devices[device_id]
    except KeyError:
        raise InvalidReferenceError(
            "device", device_id, context=f'family "{vendor_id}/{family_id}"'
        ) from None


def lookup_package(
    vendor_id: str, family_id: str, device_id: str, package_id: str
) -> Package:
    """Look up a package, requiring the device to list it as supported."""
    device = lookup_device(vendor_id, family_id, device_id)
    vendor = VENDORS[vendor_id]
    if not device.supports_package(package_id) or package_id not in vendor.packages:
        raise InvalidReferenceError(
            "package", package_id, context=f'device "{device.name}"'
        )
    return Package(id=package_id, name=vendor.packages[package_id], vendor_id=vendor_id)


def resolve_device(
    vendor_id: str, family_id: str, device_id: str, package_id: str
) -> ResolvedDevice:
    """Resolve a target's device tuple through the whole catalog chain."""
    package = lookup_package(vendor_id, family_id, device_id, package_id)
    vendor = VENDORS[vendor_id]
    family = vendor.families[family_id]
    return ResolvedDevice(
        vendor=vendor,
        family=family,
        device=family.devices[device_id],
        package=package,
    )

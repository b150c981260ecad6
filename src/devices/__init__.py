"""Static FPGA device catalog (vendors, families, devices and packages)."""

from .catalog import (
    ARCHITECTURES,
    Device,
    Family,
    Package,
    ResolvedDevice,
    Vendor,
    get_vendors,
    lookup_device,
    lookup_family,
    lookup_package,
    lookup_vendor,
    resolve_device,
)

__all__ = [
    "ARCHITECTURES",
    "Device",
    "Family",
    "Package",
    "ResolvedDevice",
    "Vendor",
    "get_vendors",
    "lookup_device",
    "lookup_family",
    "lookup_package",
    "lookup_vendor",
    "resolve_device",
]

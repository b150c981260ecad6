"""
EDAcation - configuration resolution and toolchain command generation.

Turns a declarative hardware project (input files, a target device and
per-tool overrides) into ordered Yosys, nextpnr, Icarus Verilog and
flashing pipelines.
"""

from .__version__ import __version__

__all__ = ["__version__"]

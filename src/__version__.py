"""Version information for EDAcation."""

__version__ = "0.4.0"
__title__ = "EDAcation"
__description__ = "Library and CLI for interacting with Yosys, nextpnr and friends"

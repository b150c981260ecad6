"""Shared constants: HDL file extensions and project file naming."""

import os
from typing import Final, FrozenSet

FILE_EXTENSIONS_VERILOG: Final[FrozenSet[str]] = frozenset({"v", "vh", "sv", "svh"})
FILE_EXTENSIONS_VHDL: Final[FrozenSet[str]] = frozenset({"vhd", "vhdl"})
FILE_EXTENSIONS_HDL: Final[FrozenSet[str]] = FILE_EXTENSIONS_VERILOG | FILE_EXTENSIONS_VHDL

PROJECT_FILE_SUFFIX: Final[str] = ".edaproject"

# Step script written next to the project while a script-driven step runs
SCRIPT_FILE_NAME: Final[str] = "design.ys"


def file_extension(path: str) -> str:
    """Return the extension of ``path`` without the leading dot, lowercased."""
    return os.path.splitext(path)[1][1:].lower()

#!/usr/bin/env python3
"""
Centralized Build Logging System

Provides consistent logging prefixes for project loading, pipeline
generation and tool execution.
"""

import logging
from typing import List, Optional

from ..string_utils import (
    log_debug_safe,
    log_error_safe,
    log_info_safe,
    log_warning_safe,
    safe_format,
)


class BuildLogger:
    """Build logger with standardized per-component prefixes."""

    PREFIXES = {
        "project": "PROJECT",
        "config": "CONFIG",
        "yosys": "YOSYS",
        "nextpnr": "NEXTPNR",
        "iverilog": "IVERILOG",
        "flasher": "FLASHER",
        "tool": "TOOL",
        "cli": "CLI",
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._phase_stack: List[str] = []

    def info(self, message: str, prefix: str = "CLI", **kwargs) -> None:
        prefix = self.PREFIXES.get(prefix.lower(), prefix)
        log_info_safe(self.logger, message, prefix=prefix, **kwargs)

    def warning(self, message: str, prefix: str = "CLI", **kwargs) -> None:
        prefix = self.PREFIXES.get(prefix.lower(), prefix)
        log_warning_safe(self.logger, message, prefix=prefix, **kwargs)

    def error(self, message: str, prefix: str = "CLI", **kwargs) -> None:
        prefix = self.PREFIXES.get(prefix.lower(), prefix)
        log_error_safe(self.logger, message, prefix=prefix, **kwargs)

    def debug(self, message: str, prefix: str = "CLI", **kwargs) -> None:
        prefix = self.PREFIXES.get(prefix.lower(), prefix)
        log_debug_safe(self.logger, message, prefix=prefix, **kwargs)

    def phase(self, message: str, prefix: str = "CLI", **kwargs) -> None:
        """Log a pipeline phase with special formatting."""
        self.info(safe_format("➤ {msg}", msg=message), prefix=prefix, **kwargs)

    def push_phase(self, phase_name: str, prefix: str = "CLI") -> None:
        self._phase_stack.append(phase_name)
        self.phase(f"Starting {phase_name}...", prefix=prefix)

    def pop_phase(self, phase_name: str, prefix: str = "CLI") -> None:
        if self._phase_stack and self._phase_stack[-1] == phase_name:
            self._phase_stack.pop()
            self.phase(f"Completed {phase_name}", prefix=prefix)
        else:
            self.warning(f"Phase stack mismatch: expected {phase_name}", prefix=prefix)


def get_build_logger(logger: Optional[logging.Logger] = None) -> BuildLogger:
    """Get a BuildLogger wrapping ``logger``."""
    return BuildLogger(logger)

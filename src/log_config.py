#!/usr/bin/env python3
"""Centralized logging setup for the library and the CLI."""

import logging
import sys
from typing import Optional


def setup_logging(
    level: int = logging.INFO, stream: Optional[object] = None
) -> None:
    """Setup console logging.

    Args:
        level: Logging level (default: INFO)
        stream: Output stream for the console handler (default: stdout)

    Note:
        The formatter only emits the message; timestamp and level padding
        are added by string_utils.format_padded_message().
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)

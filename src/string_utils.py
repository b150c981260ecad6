#!/usr/bin/env python3
"""
String utilities for safe formatting operations.

This module provides the formatting helpers used for log messages, error
messages and generated script headers, so that a malformed template never
turns into an exception in the middle of pipeline generation.
"""

import logging
import re
import shlex
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple

SCRIPT_HEADER_BAR = "#" + "=" * 78


@dataclass
class FormatConfig:
    """Runtime configuration controlling formatting behavior."""

    timestamp_format: str = "%H:%M:%S"
    log_padding_width: int = 7

    _instance: ClassVar[Optional["FormatConfig"]] = None

    @classmethod
    def get_instance(cls) -> "FormatConfig":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance


def _build_cache_key(kwargs: Dict[str, Any]) -> Optional[Tuple[Tuple[str, Any], ...]]:
    """Return a hashable cache key for kwargs when possible."""

    frozen_items: List[Tuple[str, Any]] = []
    for key, value in kwargs.items():
        try:
            hash(value)
        except TypeError:
            return None
        frozen_items.append((key, value))

    frozen_items.sort(key=lambda item: item[0])
    return tuple(frozen_items)


@lru_cache(maxsize=128)
def _cached_format(template: str, frozen_items: Tuple[Tuple[str, Any], ...]) -> str:
    return template.format(**dict(frozen_items))


def safe_format(template: str, prefix: Optional[str] = None, **kwargs: Any) -> str:
    """
    Safely format a string template with the given keyword arguments.

    Args:
        template: The string template with {variable} placeholders
        prefix: Optional prefix to add to the formatted message
        **kwargs: Keyword arguments to substitute in the template

    Returns:
        The formatted string with all placeholders replaced

    Example:
        >>> safe_format("Target {target} uses {arch}", target="default", arch="ecp5")
        'Target default uses ecp5'

        >>> safe_format("Loaded {count} files", prefix="PROJECT", count=3)
        '[PROJECT] Loaded 3 files'
    """
    try:
        cache_key = _build_cache_key(kwargs)
        if cache_key is not None:
            formatted_message = _cached_format(template, cache_key)
        else:
            formatted_message = template.format(**kwargs)
    except KeyError as e:
        missing_key = str(e).strip("'\"")
        logging.getLogger(__name__).warning(
            "Missing key '%s' in string template", missing_key
        )
        pattern = re.compile(rf"\{{{re.escape(missing_key)}(:[^}}]+)?\}}")
        formatted_message = pattern.sub(f"<MISSING:{missing_key}>", template)
    except (ValueError, IndexError) as e:
        logging.getLogger(__name__).error("Format error in string template: %s", e)
        formatted_message = template

    if prefix:
        return f"[{prefix}] {formatted_message}"
    return formatted_message


def get_short_timestamp() -> str:
    """
    Get a short timestamp string for logging.

    Example:
        >>> get_short_timestamp()
        '14:23:45'
    """
    fmt = FormatConfig.get_instance().timestamp_format
    return datetime.now().strftime(fmt)


def format_padded_message(message: str, log_level: str) -> str:
    """
    Format a message with padding based on log level.

    Example:
        >>> format_padded_message("Loaded project", "INFO")
        '  14:23:45 │  INFO  │ Loaded project'
    """
    timestamp = get_short_timestamp()
    config = FormatConfig.get_instance()

    level_defaults = {
        "INFO": " INFO  ",
        "WARNING": "WARNING",
        "DEBUG": " DEBUG ",
        "ERROR": "ERROR  ",
        "CRITICAL": "CRITCL",
    }

    level_segment = level_defaults.get(log_level, log_level)
    if len(level_segment) < config.log_padding_width:
        level_segment = level_segment.ljust(config.log_padding_width)
    else:
        level_segment = level_segment[: config.log_padding_width]

    return f"  {timestamp} │ {level_segment}│ {message}"


_LEVEL_NAMES = {
    logging.INFO: "INFO",
    logging.WARNING: "WARNING",
    logging.DEBUG: "DEBUG",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
}


def safe_log_format(
    logger: logging.Logger,
    log_level: int,
    template: str,
    prefix: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Safely log a formatted message with padding and short timestamps.

    Args:
        logger: The logger instance to use
        log_level: The logging level (e.g., logging.INFO, logging.ERROR)
        template: The string template with {variable} placeholders
        prefix: Optional prefix to add to the log message (e.g., "YOSYS")
        **kwargs: Keyword arguments to substitute in the template
    """
    if not logger.isEnabledFor(log_level):
        return

    formatted_message = safe_format(template, prefix=prefix, **kwargs)
    padded_message = format_padded_message(
        formatted_message, _LEVEL_NAMES.get(log_level, "UNKNOWN")
    )

    # Dispatch to the level method so mocks like mock_logger.info are hit.
    if log_level == logging.INFO:
        logger.info(padded_message)
    elif log_level == logging.WARNING:
        logger.warning(padded_message)
    elif log_level == logging.DEBUG:
        logger.debug(padded_message)
    elif log_level == logging.ERROR:
        logger.error(padded_message)
    elif log_level == logging.CRITICAL:
        logger.critical(padded_message)
    else:
        logger.log(log_level, padded_message)


def log_info_safe(
    logger: logging.Logger,
    template: str,
    prefix: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Convenience function for safe INFO level logging."""
    safe_log_format(logger, logging.INFO, template, prefix=prefix, **kwargs)


def log_error_safe(
    logger: logging.Logger,
    template: str,
    prefix: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Convenience function for safe ERROR level logging."""
    safe_log_format(logger, logging.ERROR, template, prefix=prefix, **kwargs)


def log_warning_safe(
    logger: logging.Logger,
    template: str,
    prefix: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Convenience function for safe WARNING level logging."""
    safe_log_format(logger, logging.WARNING, template, prefix=prefix, **kwargs)


def log_debug_safe(
    logger: logging.Logger,
    template: str,
    prefix: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Convenience function for safe DEBUG level logging."""
    safe_log_format(logger, logging.DEBUG, template, prefix=prefix, **kwargs)


def generate_script_header_comment(
    title: str,
    target: Optional[str] = None,
    device: Optional[str] = None,
    **kwargs: Any,
) -> str:
    """
    Generate a standardized '#' comment block for generated tool scripts.

    Args:
        title: The main title/description for the script
        target: Optional target name (included if provided)
        device: Optional device description (included if provided)
        **kwargs: Additional key-value pairs to include in the header

    Example:
        >>> print(generate_script_header_comment("Yosys synth", target="default"))
        #==============================================================================
        # Yosys synth
        # Target: default
        #==============================================================================
    """
    lines = [SCRIPT_HEADER_BAR, f"# {title}"]

    if target:
        lines.append(f"# Target: {target}")
    if device:
        lines.append(f"# Device: {device}")

    for key, value in kwargs.items():
        if value is not None:
            display_key = key.replace("_", " ").title()
            lines.append(f"# {display_key}: {value}")

    lines.append(SCRIPT_HEADER_BAR)
    return "\n".join(lines)


def format_arguments(arguments: Iterable[str]) -> List[str]:
    """Quote arguments for display so that a copy/paste into a shell works."""
    return [shlex.quote(argument) for argument in arguments]

"""Tokenizing of free-form override strings into discrete arguments."""

import logging
import shlex
from typing import Iterable, List

from ..string_utils import log_warning_safe

logger = logging.getLogger(__name__)


def parse_args(value: str) -> List[str]:
    """Split one override string with shell-like quoting rules.

    Unbalanced quotes degrade to plain whitespace splitting.

    Example:
        >>> parse_args('-O2 --top "my top"')
        ['-O2', '--top', 'my top']
    """
    try:
        return shlex.split(value)
    except ValueError as e:
        log_warning_safe(
            logger,
            "Could not tokenize override {value!r} ({err}), splitting on whitespace",
            prefix="ARGS",
            value=value,
            err=str(e),
        )
        return value.split()


def parse_arguments(values: Iterable[str]) -> List[str]:
    """Tokenize each override entry and flatten the result."""
    return [token for value in values for token in parse_args(value)]

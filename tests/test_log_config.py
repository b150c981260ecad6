#!/usr/bin/env python3
"""Unit tests for log_config module."""

import logging
from io import StringIO

import pytest

from edacation.log_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default_level(self):
        """Test setup_logging with default INFO level."""
        setup_logging()
        root_logger = logging.getLogger()

        assert root_logger.level == logging.INFO
        assert any(isinstance(h, logging.StreamHandler) for h in root_logger.handlers)

    def test_setup_logging_custom_level(self):
        """Test setup_logging with custom DEBUG level."""
        setup_logging(level=logging.DEBUG)
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_clears_existing_handlers(self):
        """Test that setup_logging clears existing handlers."""
        root_logger = logging.getLogger()
        root_logger.addHandler(logging.NullHandler())

        setup_logging()

        assert len(root_logger.handlers) == 1

    def test_message_only_format(self):
        """The handler emits the bare message."""
        stream = StringIO()
        setup_logging(stream=stream)

        get_logger("edacation.test").info("hello")

        assert stream.getvalue() == "hello\n"


class TestGetLogger:
    def test_named_logger(self):
        assert get_logger("edacation.cli").name == "edacation.cli"

    def test_same_instance(self):
        assert get_logger("edacation.x") is get_logger("edacation.x")

"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from .lib import get_logger, setup_logging


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_get_logger(self) -> None:
        """Verify logger instance creation."""
        logger = get_logger("test")
        assert logger.name == "test"
        assert isinstance(logger, logging.Logger)

    @pytest.mark.unit
    def test_get_logger_default_name(self) -> None:
        """Verify default logger name."""
        logger = get_logger()
        assert logger.name == "homekeep"

    @pytest.mark.unit
    def test_module_loggers_are_children(self) -> None:
        """Dotted names hang under the package logger."""
        parent = get_logger()
        logger = get_logger("homekeep.registry")
        assert logger.parent is parent

    @pytest.mark.unit
    def test_setup_logging(self) -> None:
        """Verify logging setup."""
        stream = StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)
        logger = get_logger("test_setup")
        logger.debug("test message")

        # basicConfig is a no-op once the root logger has handlers,
        # so only the API contract is checked here.
        assert logger.level == logging.NOTSET

    @pytest.mark.unit
    def test_setup_logging_accepts_level_names(self) -> None:
        """Level names are accepted in any case."""
        setup_logging(level="warning", stream=StringIO())
        setup_logging(level="not-a-level", stream=StringIO())

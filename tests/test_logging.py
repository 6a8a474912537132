"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from chanconduit.filters import RelGainCalib
from chanconduit.logging import configure_logging, get_logger, set_log_level


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger in the package namespace."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "chanconduit.test_module"


def test_get_logger_names():
    """Module names already in the namespace are kept as they are."""
    assert get_logger("chanconduit.dsp.conv").name == "chanconduit.dsp.conv"
    assert get_logger().name == "chanconduit"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    assert get_logger("test_module") is get_logger("test_module")
    assert get_logger("module1") is not get_logger("module2")


def test_logger_does_not_propagate():
    logger = get_logger("test_module")
    assert logger.propagate is False


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging_format_and_stream():
    logger = get_logger("test_module")
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, format_string="%(levelname)s|%(message)s", stream=stream)
        logger.debug("Debug message")
        assert stream.getvalue().strip() == "DEBUG|Debug message"
    finally:
        configure_logging(level=logging.WARNING)


def test_failed_channel_is_logged(registry):
    """A channel failing inside apply_many shows up as a warning."""
    filt = RelGainCalib(registry)
    stream = StringIO()
    try:
        configure_logging(level=logging.WARNING, stream=stream)
        result = filt.apply_many({0: np.ones(4), 1: np.ones((2, 2))})
    finally:
        configure_logging(level=logging.WARNING)

    assert result.failed_channels == [1]
    output = stream.getvalue()
    assert "[WARNING] chanconduit.filters.base" in output
    assert "channel 1 failed" in output

"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from cohesion_report.logging_config import LOGGER_NAME, get_logger, setup_logging


@pytest.fixture
def package_logger():
    """The cohesion_report logger, restored after the test."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


class TestSetupLogging:
    """Verbosity levels and handlers."""

    @pytest.mark.parametrize(
        "verbosity,level",
        [("quiet", logging.ERROR), ("normal", logging.WARNING), ("verbose", logging.DEBUG)],
    )
    def test_levels(self, package_logger, verbosity, level):
        assert setup_logging(verbosity) is package_logger
        assert package_logger.level == level

    def test_unknown_verbosity(self, package_logger):
        with pytest.raises(ValueError):
            setup_logging("chatty")

    def test_repeated_setup_replaces_handlers(self, package_logger):
        setup_logging("verbose")
        setup_logging("quiet")
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0], RichHandler)
        assert package_logger.level == logging.ERROR

    def test_log_file_records_thread(self, package_logger, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging("normal", log_file)
        get_logger("cohesion_report.index.builder").warning("LCOM: no applicable values")
        get_logger("cohesion_report.index.builder").info("hidden at normal verbosity")
        for handler in package_logger.handlers:
            handler.flush()
        text = log_file.read_text()
        assert "WARNING  [MainThread] cohesion_report.index.builder: LCOM: no applicable values" in text
        assert "hidden" not in text


class TestGetLogger:
    """Logger namespace."""

    def test_module_name_kept(self):
        assert get_logger("cohesion_report.matrix.builder").name == "cohesion_report.matrix.builder"

    def test_short_name_prefixed(self):
        assert get_logger("pipeline").name == "cohesion_report.pipeline"

    def test_root(self):
        assert get_logger().name == LOGGER_NAME

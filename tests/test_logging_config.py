"""Tests for logging setup."""

import logging

import pytest
from mixradio.logging_config import LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    """Put the mixradio logger back the way other tests expect it."""
    logger = logging.getLogger(LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in saved[0]:
            handler.close()
    for handler in saved[0]:
        logger.addHandler(handler)
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_configures_stream_handler(self):
        logger = setup_logging("DEBUG", force=True)

        assert logger.name == "mixradio"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging("CHATTY", force=True).level == logging.INFO

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "mixradio.log"
        logger = setup_logging("INFO", log_file=str(log_file), force=True)

        logging.getLogger("mixradio.http.handler").info("hello from the handler")
        for handler in logger.handlers:
            handler.flush()

        assert "hello from the handler" in log_file.read_text()

    def test_existing_handlers_kept_without_force(self):
        first = setup_logging("INFO", force=True)
        handlers = list(first.handlers)

        second = setup_logging("WARNING")

        assert second.handlers == handlers
        assert second.level == logging.WARNING

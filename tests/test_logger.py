"""Tests for the logging setup module."""

import logging

from quickhelp_ocr.utils.logger import SERVER_LOGGERS, get_logger, setup_logging


class TestSetupLogging:
    """Tests for the setup_logging function."""

    def test_setup_creates_handler(self) -> None:
        root = logging.getLogger()
        root.handlers.clear()

        setup_logging("DEBUG")
        assert len(root.handlers) >= 1
        assert root.level == logging.DEBUG

        root.handlers.clear()

    def test_setup_idempotent(self) -> None:
        root = logging.getLogger()
        root.handlers.clear()

        setup_logging("INFO")
        count = len(root.handlers)
        setup_logging("INFO")
        assert len(root.handlers) == count

        root.handlers.clear()

    def test_setup_invalid_level_defaults_to_info(self) -> None:
        root = logging.getLogger()
        root.handlers.clear()

        setup_logging("NONEXISTENT")
        assert root.level == logging.INFO

        root.handlers.clear()

    def test_aligns_server_loggers(self) -> None:
        root = logging.getLogger()
        root.handlers.clear()
        access = logging.getLogger("uvicorn.access")
        access.addHandler(logging.NullHandler())
        access.propagate = False

        setup_logging("WARNING")

        for name in SERVER_LOGGERS:
            server_logger = logging.getLogger(name)
            assert server_logger.level == logging.WARNING
            assert server_logger.propagate is True
            assert server_logger.handlers == []

        root.handlers.clear()

    def test_server_loggers_follow_later_level(self) -> None:
        root = logging.getLogger()
        root.handlers.clear()

        setup_logging("INFO")
        setup_logging("DEBUG")

        assert logging.getLogger("uvicorn.error").level == logging.DEBUG

        root.handlers.clear()


class TestGetLogger:
    """Tests for the get_logger function."""

    def test_returns_named_logger(self) -> None:
        logger = get_logger("quickhelp.test")
        assert logger.name == "quickhelp.test"
        assert isinstance(logger, logging.Logger)

"""Tests for reversi/logging_config.py - Unified logging configuration."""

import logging

import pytest

from reversi.logging_config import (
    COMPACT_FORMAT,
    DEFAULT_FORMAT,
    DETAILED_FORMAT,
    STRUCTURED_FORMAT,
    LogContext,
    configure_third_party_loggers,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Test setup_logging function."""

    def test_returns_logger(self):
        logger = setup_logging("test_logger_1")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test_logger_1"

    def test_logger_level_default(self):
        """Default level should be INFO."""
        logger = setup_logging("test_logger_2")
        assert logger.level == logging.INFO

    def test_logger_level_custom(self):
        logger = setup_logging("test_logger_3", level=logging.DEBUG)
        assert logger.level == logging.DEBUG

    def test_logger_level_string(self):
        """Level can be specified as string."""
        logger = setup_logging("test_logger_4", level="warning")
        assert logger.level == logging.WARNING

    def test_unknown_level_string(self):
        with pytest.raises(ValueError):
            setup_logging("test_logger_4b", level="CHATTY")

    def test_idempotent_logger_creation(self):
        """Calling setup_logging twice returns same logger without new handlers."""
        logger1 = setup_logging("test_logger_5")
        handler_count = len(logger1.handlers)
        logger2 = setup_logging("test_logger_5")
        assert logger1 is logger2
        assert len(logger2.handlers) == handler_count

    def test_console_handler_added(self):
        logger = setup_logging("test_logger_6")
        stream_handlers = [
            h for h in logger.handlers if isinstance(h, logging.StreamHandler)
        ]
        assert len(stream_handlers) >= 1

    def test_console_handler_disabled(self):
        logger = setup_logging("test_logger_7", console=False)
        assert logger.handlers == []

    def test_file_handler_with_log_file(self, tmp_path):
        log_file = tmp_path / "test.log"
        logger = setup_logging("test_logger_8", log_file=log_file, console=False)
        file_handlers = [
            h for h in logger.handlers if isinstance(h, logging.FileHandler)
        ]
        assert len(file_handlers) == 1
        logger.info("Test message")
        file_handlers[0].flush()
        assert "Test message" in log_file.read_text()

    def test_file_handler_with_log_dir(self, tmp_path):
        logger = setup_logging("test_logger.9", log_dir=tmp_path, console=False)
        logger.warning("hello")
        assert (tmp_path / "test_logger_9.log").exists()

    def test_propagate_default_false(self):
        logger = setup_logging("test_logger_10")
        assert logger.propagate is False

    def test_propagate_can_be_enabled(self):
        logger = setup_logging("test_logger_11", propagate=True)
        assert logger.propagate is True


class TestFormatStyles:
    @pytest.mark.parametrize(
        "style,fmt",
        [
            ("default", DEFAULT_FORMAT),
            ("compact", COMPACT_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("structured", STRUCTURED_FORMAT),
            ("nonexistent", DEFAULT_FORMAT),
        ],
    )
    def test_format_applied(self, style, fmt):
        logger = setup_logging(f"test_format_{style}", format_style=style)
        assert logger.handlers[0].formatter._fmt == fmt


class TestGetLogger:
    def test_returns_same_logger(self):
        assert get_logger("test_get_2") is get_logger("test_get_2")
        assert isinstance(get_logger("test_get_2"), logging.Logger)


class TestConfigureThirdPartyLoggers:
    def test_quiets_noisy_packages(self):
        logging.getLogger("uvicorn.access").setLevel(logging.INFO)
        configure_third_party_loggers(quiet=True)
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_verbose_packages_not_quieted(self):
        urllib3_logger = logging.getLogger("urllib3")
        urllib3_logger.setLevel(logging.INFO)
        configure_third_party_loggers(quiet=True, verbose_packages=["urllib3"])
        assert urllib3_logger.level == logging.INFO

    def test_not_quiet_is_noop(self):
        httpx_logger = logging.getLogger("httpx")
        httpx_logger.setLevel(logging.DEBUG)
        configure_third_party_loggers(quiet=False)
        assert httpx_logger.level == logging.DEBUG


class TestLogContext:
    def test_changes_level_temporarily(self):
        logger = setup_logging("test_context_1", level=logging.INFO)
        with LogContext(logger, logging.DEBUG) as ctx_logger:
            assert ctx_logger is logger
            assert logger.level == logging.DEBUG
        assert logger.level == logging.INFO

    def test_restores_level_on_exception(self):
        logger = setup_logging("test_context_2", level=logging.INFO)
        with pytest.raises(ValueError):
            with LogContext(logger, "DEBUG"):
                raise ValueError("test")
        assert logger.level == logging.INFO

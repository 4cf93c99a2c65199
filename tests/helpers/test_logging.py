"""Tests for logging configuration."""

import logging

import pytest

from evm_rpc.helpers.logging import get_logger, set_log_level


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_logger(self) -> None:
        """Test that get_logger returns a logger instance."""
        logger = get_logger("test_module")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "test_module"

    def test_get_logger_same_name_returns_same_instance(self) -> None:
        """Test that getting logger with same name returns same instance."""
        logger1 = get_logger("test_same")
        logger2 = get_logger("test_same")

        assert logger1 is logger2
        assert len(logger1.handlers) == 1

    def test_default_level_is_warning(self) -> None:
        """Test loggers stay quiet unless asked otherwise."""
        logger = get_logger("test_default_level")

        assert logger.level == logging.WARNING

    @pytest.mark.parametrize(
        ("level_name", "level"),
        [("DEBUG", logging.DEBUG), ("INFO", logging.INFO), ("ERROR", logging.ERROR)],
    )
    def test_get_logger_with_level(self, level_name: str, level: int) -> None:
        """Test explicit levels are applied."""
        logger = get_logger(f"test_level_{level_name}", log_level=level_name)

        assert logger.level == level

    def test_get_logger_with_color(self) -> None:
        """Test colored loggers get a colorlog formatter."""
        import colorlog

        logger = get_logger("test_color", log_color=True)

        assert isinstance(logger.handlers[0].formatter, colorlog.ColoredFormatter)

    def test_invalid_level_raises(self) -> None:
        """Test unknown levels are rejected."""
        with pytest.raises(ValueError, match="Invalid log level"):
            get_logger("test_bad_level", log_level="LOUD")

    def test_invalid_handler_raises(self) -> None:
        """Test unknown handlers are rejected."""
        with pytest.raises(ValueError, match="Invalid handler"):
            get_logger("test_bad_handler", log_handler="file")


class TestSetLogLevel:
    """Tests for set_log_level function."""

    def test_updates_existing_loggers(self) -> None:
        """Test level changes reach loggers created earlier."""
        logger = get_logger("test_set_level")

        set_log_level("DEBUG")
        try:
            assert logger.level == logging.DEBUG
            assert logger.handlers[0].level == logging.DEBUG
        finally:
            set_log_level("WARNING")

    def test_invalid_level_raises(self) -> None:
        """Test unknown levels are rejected."""
        with pytest.raises(ValueError, match="Invalid log level"):
            set_log_level("LOUD")

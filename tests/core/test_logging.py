"""
Unit tests for logging setup.
"""

import logging
from unittest.mock import Mock, patch

import pytest

from fluent_mailerlite.core.config import LoggingConfig
from fluent_mailerlite.core.logging import PACKAGE_LOGGER, configure_logging, get_logger


@pytest.fixture
def package_logger():
    """The real package logger, restored after the test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
    logger.__dict__.pop("_mailerlite_logging_configured", None)


class TestConfigureLogging:
    """Test configure_logging."""

    def test_adds_handlers_once(self, tmp_path):
        """Test handlers are added on the first call only."""
        logger = Mock(spec=logging.Logger)
        config = LoggingConfig(log_dir=str(tmp_path / "logs"), log_level="debug")

        with patch(
            "fluent_mailerlite.core.logging.logging.getLogger", return_value=logger
        ) as mock_get_logger:
            configure_logging(config)
            configure_logging(config)

        mock_get_logger.assert_called_with("mailerlite")
        assert logger.addHandler.call_count == 4
        logger.setLevel.assert_called_once_with("DEBUG")
        assert logger.propagate is False
        assert (tmp_path / "logs").is_dir()
        for call in logger.addHandler.call_args_list:
            call.args[0].close()

    def test_root_logger_untouched(self, tmp_path, package_logger):
        """Test handlers land on the package logger, not the root logger."""
        root = logging.getLogger()
        root_handlers = list(root.handlers)

        configure_logging(LoggingConfig(log_dir=str(tmp_path), log_level="INFO"))
        get_logger("mailerlite.resources.groups").warning("group sync failed")

        assert root.handlers == root_handlers
        assert len(package_logger.handlers) >= 4
        for handler in package_logger.handlers:
            handler.flush()
        assert "group sync failed" in (tmp_path / "warning.log").read_text()

    def test_get_logger_returns_named_logger(self):
        """Test get_logger is a thin wrapper."""
        assert get_logger("mailerlite.test").name == "mailerlite.test"

"""Tests for correlation-aware logging."""

import logging

from typed_markup.shared.logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
    set_logging_level,
)


class TestCorrelationLogger:
    """Test suite for CorrelationLogger."""

    def test_component_defaults_to_module_name(self):
        logger = get_logger("typed_markup.rendering.engine")
        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "engine"

    def test_records_carry_extras(self, caplog):
        """Test that correlation and component information reach the record."""
        logger = get_logger("typed_markup.tests", "corr-1", "tester")

        with caplog.at_level(logging.INFO, logger="typed_markup.tests"):
            logger.info("Hello", extra={"count": 2})

        record = caplog.records[-1]
        assert record.getMessage() == "Hello"
        assert record.correlation_id == "corr-1"
        assert record.component == "tester"
        assert record.count == 2


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def test_single_handler_installed(self):
        """Test that repeated calls do not stack handlers."""
        package_logger = logging.getLogger("typed_markup")
        configure_logging("DEBUG")
        configure_logging("ERROR")

        handlers = [
            handler for handler in package_logger.handlers
            if getattr(handler, "_typed_markup_handler", False)
        ]
        assert len(handlers) == 1
        assert package_logger.level == logging.ERROR

        configure_logging("WARNING")


class TestSetLoggingLevel:
    """Test suite for set_logging_level."""

    def test_names_and_numbers_accepted(self):
        package_logger = logging.getLogger("typed_markup")
        previous_level = package_logger.level
        try:
            assert set_logging_level("error") == logging.ERROR
            assert package_logger.level == logging.ERROR
            assert set_logging_level(logging.DEBUG) == logging.DEBUG
            assert logging.getLogger("typed_markup.rendering.engine").isEnabledFor(
                logging.DEBUG
            )
        finally:
            package_logger.setLevel(previous_level)

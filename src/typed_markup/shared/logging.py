"""Structured logging utilities for markup generation.

This module provides correlation-aware logging so that every record emitted
while building or rendering a document can be traced back to the caller that
requested it.
"""

import logging
from typing import Any, Dict, Optional, Union

PACKAGE_LOGGER = "typed_markup"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(component)s] %(message)s"


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for render tracking
            component: Component name for structured logging
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }

        if extra:
            combined_extra.update(extra)

        return combined_extra

    def is_enabled_for(self, level: int) -> bool:
        """Check whether records of ``level`` would be emitted."""
        return self.logger.isEnabledFor(level)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self.logger.debug(message, extra=self._get_extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self.logger.info(message, extra=self._get_extra(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message with correlation info."""
        self.logger.warning(message, extra=self._get_extra(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = True
    ) -> None:
        """Log error message with correlation info."""
        self.logger.error(message, extra=self._get_extra(extra), exc_info=exc_info)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log exception message with correlation info and traceback."""
        self.logger.exception(message, extra=self._get_extra(extra))


class _ComponentDefaultsFilter(logging.Filter):
    """Fill in ``component``/``correlation_id`` for records from foreign loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name.split(".")[-1]
        if not hasattr(record, "correlation_id"):
            record.correlation_id = None
        return True


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for render tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def set_logging_level(level: Union[int, str]) -> int:
    """Set the threshold of the ``typed_markup`` logger hierarchy.

    Returns the numeric level that was applied.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    return level


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Attach a stderr handler to the ``typed_markup`` logger hierarchy.

    Safe to call repeatedly; only the level is updated after the first call.
    """
    level = set_logging_level(level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in package_logger.handlers:
        if getattr(handler, "_typed_markup_handler", False):
            handler.setLevel(level)
            return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    handler.addFilter(_ComponentDefaultsFilter())
    handler.setLevel(level)
    handler._typed_markup_handler = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)

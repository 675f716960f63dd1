"""Structlog logger factory and utilities for boxupdater."""

import logging
from typing import Any

import structlog


def get_struct_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger with the given name.

    Args:
        name: The logger name, usually __name__

    Returns:
        A bound structlog logger instance

    Note: For exception logging with debug stack traces, use this pattern:
        try:
            # some operation
        except Exception as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error("operation_failed", error=str(e), exc_info=exc_info)
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]


class StructlogMixin:
    """Mixin class to add structured logging capabilities to services.

    The logger is bound with the concrete service class name on first use.
    """

    _logger: structlog.stdlib.BoundLogger | None = None

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Get or create a logger for this service with bound context."""
        if self._logger is None:
            base_logger = get_struct_logger(self.__class__.__module__)
            self._logger = base_logger.bind(service=self.__class__.__name__)
        return self._logger

    def log_error_with_context(
        self,
        message: str,
        error: Exception,
        **context: Any,
    ) -> None:
        """Log an error with structured context and a debug-gated stack trace.

        Args:
            message: Error event name
            error: The exception that occurred
            **context: Additional context
        """
        exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
        self.logger.error(
            message,
            error=str(error),
            error_type=error.__class__.__name__,
            exc_info=exc_info,
            **context,
        )

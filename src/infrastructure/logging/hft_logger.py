"""
Structured Logger Implementation

Wraps the standard ``logging`` module with persistent context, key=value
rendering and metric records. Handlers are installed by the factory.
"""

import logging
import time
from typing import Dict, Optional

from .interfaces import HFTLoggerInterface, LogRecord, LogLevel
from .structs import LoggingConfig


class HFTLogger(HFTLoggerInterface):
    """
    Structured logger with context management and metric support.

    Key features:
    - Persistent context merged into every record
    - Metrics rendered as DEBUG records (can be disabled from config)
    - Python logging compatibility (records go through ``logging.getLogger(name)``)
    """

    def __init__(self, name: str, config: LoggingConfig):
        """
        Initialize logger with struct configuration.

        Args:
            name: Logger name
            config: LoggingConfig struct (required)
        """
        if not isinstance(config, LoggingConfig):
            raise TypeError(f"Expected LoggingConfig, got {type(config)}")

        self.name = name
        self.config = config
        self.context = dict(config.default_context or {})
        self._include_context = config.console.include_context if config.console else True
        self._py_logger = logging.getLogger(name)

    def _log(self, level: LogLevel, msg: str, **context) -> None:
        if not self._py_logger.isEnabledFor(level):
            return
        record = LogRecord.create_text(level, self.name, msg, **{**self.context, **context})
        self._py_logger.log(int(level), record.render(self._include_context))

    def debug(self, msg: str, **context) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, msg, **context)

    def info(self, msg: str, **context) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, msg, **context)

    def warning(self, msg: str, **context) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, msg, **context)

    def error(self, msg: str, **context) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, msg, **context)

    def critical(self, msg: str, **context) -> None:
        """Log critical message."""
        self._log(LogLevel.CRITICAL, msg, **context)

    def metric(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        """Log metric value."""
        if not self.config.metrics_enabled or not self._py_logger.isEnabledFor(logging.DEBUG):
            return
        record = LogRecord.create_metric(self.name, name, value, tags)
        self._py_logger.debug(record.render())

    def latency(self, operation: str, duration_ms: float, tags: Optional[Dict[str, str]] = None) -> None:
        """Log latency metric."""
        self.metric(f"{operation}_latency_ms", duration_ms, tags)

    def set_context(self, **context) -> None:
        """Set persistent context for all logs."""
        self.context.update(context)


# Context manager for timing operations
class LoggingTimer:
    """Context manager for timing operations with automatic latency metric."""

    def __init__(self, logger: HFTLoggerInterface, operation: str, tags: Optional[Dict[str, str]] = None):
        self.logger = logger
        self.operation = operation
        self.tags = tags
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            self.end_time = time.perf_counter()
            self.logger.latency(self.operation, self.elapsed_ms, self.tags)

        if exc_type is not None:
            self.logger.error(f"{self.operation} failed", error_type=exc_type.__name__)

    @property
    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        if self.start_time is None:
            return 0.0
        end_time = self.end_time or time.perf_counter()
        return (end_time - self.start_time) * 1000

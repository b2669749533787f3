"""
Core Logging Interfaces

Defines the logger interface injected into every component as ``self.logger``
and the lightweight record passed from the logger to its formatter.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional


class LogLevel(IntEnum):
    """Log levels with numeric values matching the standard logging module."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogType(IntEnum):
    """Log types for formatting decisions."""
    TEXT = 1      # Regular log messages
    METRIC = 2    # Numeric metrics (latency, counters)


@dataclass
class LogRecord:
    """
    Lightweight structured log record.

    Formatting happens in the handler, not here.
    """
    timestamp: float
    level: LogLevel
    log_type: LogType
    logger_name: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    # For metrics (only used when log_type == METRIC)
    metric_name: Optional[str] = None
    metric_value: Optional[float] = None
    metric_tags: Optional[Dict[str, str]] = None

    @classmethod
    def create_text(cls, level: LogLevel, logger_name: str, message: str, **context) -> 'LogRecord':
        """Factory method for text log records."""
        return cls(
            timestamp=time.time(),
            level=level,
            log_type=LogType.TEXT,
            logger_name=logger_name,
            message=message,
            context=context
        )

    @classmethod
    def create_metric(cls, logger_name: str, metric_name: str, value: float,
                      tags: Optional[Dict[str, str]] = None) -> 'LogRecord':
        """Factory method for metric log records."""
        return cls(
            timestamp=time.time(),
            level=LogLevel.DEBUG,
            log_type=LogType.METRIC,
            logger_name=logger_name,
            message="",
            metric_name=metric_name,
            metric_value=value,
            metric_tags=tags or {}
        )

    def render(self, include_context: bool = True) -> str:
        """Render record as a single line: message followed by key=value pairs."""
        if self.log_type == LogType.METRIC:
            tags = " ".join(f"{k}={v}" for k, v in (self.metric_tags or {}).items())
            return f"metric {self.metric_name}={self.metric_value} {tags}".rstrip()
        if include_context and self.context:
            ctx = " ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} | {ctx}"
        return self.message


class HFTLoggerInterface(ABC):
    """
    Interface for structured logger.

    This is what gets injected into components via constructor injection.
    """

    @abstractmethod
    def debug(self, msg: str, **context) -> None:
        """Log debug message."""
        pass

    @abstractmethod
    def info(self, msg: str, **context) -> None:
        """Log info message."""
        pass

    @abstractmethod
    def warning(self, msg: str, **context) -> None:
        """Log warning message."""
        pass

    @abstractmethod
    def error(self, msg: str, **context) -> None:
        """Log error message."""
        pass

    @abstractmethod
    def critical(self, msg: str, **context) -> None:
        """Log critical message."""
        pass

    @abstractmethod
    def metric(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        """Log metric value."""
        pass

    @abstractmethod
    def latency(self, operation: str, duration_ms: float, tags: Optional[Dict[str, str]] = None) -> None:
        """Log latency metric. Convenience method for timing."""
        pass

    @abstractmethod
    def set_context(self, **context) -> None:
        """Set persistent context for all logs from this logger."""
        pass

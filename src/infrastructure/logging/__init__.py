"""
Structured Logging System

Usage:
    from infrastructure.logging import get_logger

    # Component logger
    logger = get_logger('my.component')
    logger.info("Component initialized")

    # Exchange logger with context
    logger = get_exchange_logger('nominex', 'rest.private')
    logger.debug("Request signed", endpoint="/orders")

    # Metrics logging
    logger.metric("request_duration_ms", 1.23, tags={"endpoint": "/orders"})
"""

from .interfaces import (
    LogLevel,
    LogType,
    LogRecord,
    HFTLoggerInterface
)

from .hft_logger import HFTLogger, LoggingTimer

from .factory import (
    LoggerFactory,
    get_logger,
    get_exchange_logger,
    configure_logging_from_struct
)

from .structs import (
    LoggingConfig,
    ConsoleBackendConfig,
    FileBackendConfig,
    BackendConfig
)

__all__ = [
    'LogLevel',
    'LogType',
    'LogRecord',
    'HFTLoggerInterface',

    'HFTLogger',
    'LoggingTimer',

    'LoggerFactory',
    'get_logger',
    'get_exchange_logger',
    'configure_logging_from_struct',

    'LoggingConfig',
    'ConsoleBackendConfig',
    'FileBackendConfig',
    'BackendConfig',
]

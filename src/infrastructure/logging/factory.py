"""
Logging Factory

Creates and configures logger instances using struct-based configuration.
Provides direct method injection for all components to use as self.logger.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List, Optional

from .interfaces import HFTLoggerInterface
from .hft_logger import HFTLogger
from .structs import LoggingConfig

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class LoggerFactory:
    """Simplified logging factory - trust config, fail fast."""

    # Cached instances for reuse
    _cached_loggers: Dict[str, HFTLoggerInterface] = {}
    _default_config: Optional[LoggingConfig] = None
    _installed_handlers: List[logging.Handler] = []

    @classmethod
    def create_logger(cls, name: str, config: Optional[LoggingConfig] = None) -> HFTLoggerInterface:
        """Create logger instance. Trust config, fail fast."""
        if name in cls._cached_loggers:
            return cls._cached_loggers[name]

        config = config or cls._get_default_config()
        logger = HFTLogger(name=name, config=config)
        cls._cached_loggers[name] = logger
        return logger

    @classmethod
    def configure(cls, config: LoggingConfig) -> None:
        """Install handlers for ``config`` on the root logger, replacing earlier ones."""
        config.validate()
        root = logging.getLogger()
        for handler in cls._installed_handlers:
            root.removeHandler(handler)
            handler.close()
        cls._installed_handlers = []

        levels = []
        if config.console and config.console.enabled:
            handler = logging.StreamHandler()
            handler.setLevel(config.console.min_level)
            handler.setFormatter(logging.Formatter(_FORMAT))
            cls._installed_handlers.append(handler)
            levels.append(handler.level)

        if config.file and config.file.enabled:
            Path(config.file.path).parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                config.file.path,
                maxBytes=config.file.max_size_mb * 1024 * 1024,
                backupCount=config.file.backup_count
            )
            handler.setLevel(config.file.min_level)
            handler.setFormatter(logging.Formatter(_FORMAT))
            cls._installed_handlers.append(handler)
            levels.append(handler.level)

        for handler in cls._installed_handlers:
            root.addHandler(handler)
        if levels:
            root.setLevel(min(levels))

        cls._default_config = config
        # Existing loggers pick up the new config on next creation
        cls._cached_loggers.clear()

    @classmethod
    def get_default_config(cls) -> LoggingConfig:
        """Get default config for external use."""
        return cls._get_default_config()

    @classmethod
    def clear_cache(cls) -> None:
        """Clear cached logger instances."""
        cls._cached_loggers.clear()
        cls._default_config = None

    @classmethod
    def _get_default_config(cls) -> LoggingConfig:
        """Get default configuration based on ENVIRONMENT, creating if necessary."""
        if cls._default_config is None:
            environment = os.getenv('ENVIRONMENT', 'dev')
            if environment == 'prod':
                cls._default_config = LoggingConfig.default_production()
            elif environment == 'test':
                cls._default_config = LoggingConfig.default_test()
            else:
                cls._default_config = LoggingConfig.default_development()
        return cls._default_config


def get_logger(name: str) -> HFTLoggerInterface:
    """Get logger instance. Simple, fast."""
    return LoggerFactory.create_logger(name)


def get_exchange_logger(exchange: str, component: str = None) -> HFTLoggerInterface:
    """Get exchange logger with optional component."""
    name = f"{exchange}.{component}" if component else exchange
    return get_logger(name)


def configure_logging_from_struct(config: LoggingConfig) -> None:
    """Configure logging handlers from a LoggingConfig struct."""
    LoggerFactory.configure(config)

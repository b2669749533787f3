"""
Logging configuration manager.

Simplified logging config manager with "trust config, fail fast" philosophy.
"""

from typing import Any, Dict

from infrastructure.exceptions.system import ConfigurationError
from infrastructure.logging.structs import LoggingConfig


class LoggingConfigManager:
    """Converts the ``logging`` section of config.yaml to a LoggingConfig struct."""

    def __init__(self, config_data: Dict[str, Any]):
        self.config_data = config_data

    def get_logging_config(self, environment: str = "dev") -> LoggingConfig:
        section = self.config_data.get('logging')
        if not section:
            if environment == 'prod':
                return LoggingConfig.default_production()
            return LoggingConfig.default_development()
        try:
            config = LoggingConfig.from_dict({'environment': environment, **section})
            config.validate()
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid logging configuration: {e}", "logging") from e
        return config

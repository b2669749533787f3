"""
Configuration Management Module

YAML-based configuration with environment variable substitution.

Usage:
    from config.config_manager import load_config

    config = load_config('config.yaml')
    nominex_config = config.get_exchange_config('nominex')   # ExchangeConfig struct
    logging_config = config.get_logging_config()            # LoggingConfig struct

Config values may reference the environment:
    ${VAR_NAME}          - environment variable, empty string when unset
    ${VAR_NAME:default}  - environment variable with default value
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv

from config.exchanges.exchange_config import ExchangeConfigManager
from config.logging.logging_config import LoggingConfigManager
from config.structs import ExchangeConfig
from infrastructure.exceptions.system import ConfigurationError
from infrastructure.logging.structs import LoggingConfig

# Pre-compiled regex patterns
ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')
ENV_VAR_DEFAULT_PATTERN = re.compile(r'^([^:]+):(.*)$')


def guess_file_paths(file_name: str) -> List[Path]:
    """
    Returns a list of possible locations of ``file_name`` to search.
    """
    return [
        Path.cwd() / file_name,                            # Current working directory
        Path(__file__).parent.parent.parent / file_name,   # Project root
        Path.home() / file_name,                           # User home directory (fallback)
    ]


def substitute_env_vars(content: str) -> str:
    """
    Substitute ``${VAR}`` and ``${VAR:default}`` references in raw config text.

    Unset variables without a default become empty strings, which leaves
    credentials empty and the exchange in public-only mode.
    """
    def replace_var(match):
        var_expr = match.group(1)

        default_match = ENV_VAR_DEFAULT_PATTERN.match(var_expr)
        if default_match:
            var_name, default_value = default_match.groups()
            env_value = os.getenv(var_name.strip())
            return default_value if env_value is None else env_value

        var_name = var_expr.strip()
        env_value = os.getenv(var_name)
        if env_value is None:
            logging.getLogger(__name__).warning(
                f"Environment variable {var_name} not set - using empty value")
            return ""
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, content)


class ConfigManager:
    """
    Loaded configuration with typed accessors.

    Exchange and logging sections are converted to msgspec structs on access;
    exchange configs are built once and cached.
    """

    def __init__(self, config_data: Dict[str, Any], source: Optional[Path] = None):
        if not isinstance(config_data, dict):
            raise ConfigurationError("Configuration root must be a mapping", "config_file")
        self.config_data = config_data
        self.source = source
        self.environment = config_data.get('environment', os.getenv('ENVIRONMENT', 'dev'))
        self._exchanges = ExchangeConfigManager(config_data)
        self._logging = LoggingConfigManager(config_data)

    def get_exchange_config(self, exchange_name: str) -> ExchangeConfig:
        """
        Get configuration for specific exchange.

        Raises:
            ConfigurationError: If the exchange is not configured
        """
        config = self._exchanges.get_exchange_config(exchange_name)
        if config is None:
            available = ", ".join(self._exchanges.get_configured_exchanges()) or "none"
            raise ConfigurationError(
                f"Exchange '{exchange_name}' is not configured (available: {available})",
                f"exchanges.{exchange_name}"
            )
        return config

    def get_all_exchange_configs(self) -> Dict[str, ExchangeConfig]:
        return self._exchanges.get_exchange_configs()

    def get_logging_config(self) -> LoggingConfig:
        return self._logging.get_logging_config(self.environment)


def load_env_file() -> None:
    """Load variables from the first .env found, without overriding the environment."""
    for env_path in guess_file_paths('.env'):
        if env_path.exists():
            load_dotenv(dotenv_path=env_path, override=False)
            logging.getLogger(__name__).info(f"Loaded environment variables from: {env_path}")
            return


def load_config(path: Optional[Union[str, Path]] = None, load_env: bool = True) -> ConfigManager:
    """
    Load configuration from ``path`` (or the first config.yaml found).

    Raises:
        ConfigurationError: If no file is found or it is not valid YAML
    """
    if load_env:
        load_env_file()

    candidates = [Path(path)] if path is not None else guess_file_paths('config.yaml')
    config_path = next((p for p in candidates if p.exists()), None)
    if config_path is None:
        searched_paths = ", ".join(str(p) for p in candidates)
        raise ConfigurationError(
            f"No valid config.yaml found. Searched paths: {searched_paths}",
            "config_file"
        )

    with open(config_path, 'r', encoding='utf-8') as f:
        raw_content = f.read()

    try:
        config_data = yaml.safe_load(substitute_env_vars(raw_content))
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML syntax in {config_path}: {e}",
            str(config_path)
        ) from e

    logging.getLogger(__name__).info(f"Configuration loaded from: {config_path}")
    return ConfigManager(config_data or {}, source=config_path)

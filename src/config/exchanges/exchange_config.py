"""
Exchange configuration manager.

Builds ExchangeConfig structs from the ``exchanges`` section of config.yaml:

    exchanges:
      nominex:
        api_key: "${NOMINEX_API_KEY}"
        secret_key: "${NOMINEX_SECRET_KEY}"
        demo: true
        network:
          request_timeout: 10
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from config.structs import ExchangeConfig, ExchangeCredentials, NetworkConfig
from exchanges.structs.types import ExchangeName
from infrastructure.exceptions.system import ConfigurationError

T = TypeVar('T')

_URL_KEYS = ('base_url', 'demo_url', 'public_path', 'private_path')


def safe_get_config_value(config: Dict[str, Any], key: str, default: T, value_type: Type[T], config_name: str) -> T:
    """Extract a configuration value cast to ``value_type``.

    Raises:
        ConfigurationError: If value cannot be cast to expected type
    """
    try:
        value = config.get(key, default)
        if value_type == bool and isinstance(value, str):
            return value.strip().lower() in ('1', 'true', 'yes', 'on')
        return value_type(value)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(
            f"Invalid value for {config_name}.{key}: {config.get(key)} (expected {value_type.__name__})",
            f"{config_name}.{key}"
        ) from e


class ExchangeConfigManager:
    """Manages exchange-specific configuration settings."""

    def __init__(self, config_data: Dict[str, Any]):
        self.config_data = config_data
        self._exchange_configs: Optional[Dict[str, ExchangeConfig]] = None
        self._logger = logging.getLogger(__name__)

    def get_exchange_configs(self) -> Dict[str, ExchangeConfig]:
        """
        Get all exchange configurations.

        Returns:
            Dictionary mapping exchange names to ExchangeConfig structs
        """
        if self._exchange_configs is None:
            self._exchange_configs = self._build_exchange_configs()
        return self._exchange_configs

    def get_exchange_config(self, exchange_name: str) -> Optional[ExchangeConfig]:
        """Get configuration for specific exchange, None if not configured."""
        return self.get_exchange_configs().get(exchange_name.lower())

    def get_configured_exchanges(self) -> List[str]:
        return list(self.get_exchange_configs().keys())

    def _build_exchange_configs(self) -> Dict[str, ExchangeConfig]:
        exchanges_data = self.config_data.get('exchanges') or {}
        configs = {}
        for exchange_name, exchange_data in exchanges_data.items():
            try:
                configs[exchange_name.lower()] = self._build_single_exchange_config(exchange_name, exchange_data or {})
            except ConfigurationError:
                raise
            except (ValueError, TypeError) as e:
                raise ConfigurationError(
                    f"Failed to configure exchange '{exchange_name}': {e}",
                    f"exchanges.{exchange_name}"
                ) from e
        return configs

    def _build_single_exchange_config(self, exchange_name: str, data: Dict[str, Any]) -> ExchangeConfig:
        section = f"exchanges.{exchange_name}"
        credentials = ExchangeCredentials(
            api_key=safe_get_config_value(data, 'api_key', '', str, section),
            secret_key=safe_get_config_value(data, 'secret_key', '', str, section)
        )
        network = self._parse_network_config(data.get('network') or {}, section)

        urls = {key: str(data[key]) for key in _URL_KEYS if data.get(key)}
        exchange_config = ExchangeConfig(
            name=ExchangeName(exchange_name.lower()),
            credentials=credentials,
            demo=safe_get_config_value(data, 'demo', False, bool, section),
            enabled=safe_get_config_value(data, 'enabled', True, bool, section),
            network=network,
            **urls
        )
        exchange_config.validate()

        self._logger.debug(f"Configured exchange: {exchange_name} "
                           f"(demo: {exchange_config.demo}, credentials: {credentials.get_preview()})")
        return exchange_config

    @staticmethod
    def _parse_network_config(part_config: Dict[str, Any], section: str) -> NetworkConfig:
        return NetworkConfig(
            request_timeout=safe_get_config_value(part_config, 'request_timeout', 10.0, float, f"{section}.network"),
            connect_timeout=safe_get_config_value(part_config, 'connect_timeout', 5.0, float, f"{section}.network")
        )
